from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, async_sessionmaker, AsyncSession


class Database:
    """Engine plus session factory, built once by the composition root."""

    def __init__(self, dsn: str) -> None:
        self.dsn = dsn
        self.engine: Optional[AsyncEngine] = None
        self.SessionLocal: Optional[async_sessionmaker[AsyncSession]] = None

    def init_engine(self) -> None:
        if self.engine is None:
            self.engine = create_async_engine(self.dsn, future=True, echo=False)

    def init_sessionmaker(self) -> None:
        if self.SessionLocal is None:
            assert self.engine is not None, "Engine not initialized"
            self.SessionLocal = async_sessionmaker(self.engine, expire_on_commit=False)

    def session(self) -> AsyncSession:
        assert self.SessionLocal is not None, "Sessionmaker not initialized"
        return self.SessionLocal()

    async def set_sqlite_pragmas(self) -> None:
        assert self.engine is not None
        if self.engine.dialect.name != "sqlite" or not self.engine.url.database:
            return
        async with self.engine.begin() as conn:  # type: ignore
            # WAL lets readers keep a consistent snapshot while an import commits
            await conn.exec_driver_sql("PRAGMA journal_mode=WAL;")

    async def dispose(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            self.SessionLocal = None
