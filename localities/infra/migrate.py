from __future__ import annotations

import logging

from .db import Database
from .models import Base

log = logging.getLogger(__name__)


async def migrate(db: Database) -> None:
    db.init_engine()
    db.init_sessionmaker()
    assert db.engine is not None, "Engine not initialized"
    async with db.engine.begin() as conn:  # type: ignore
        await conn.run_sync(Base.metadata.create_all)
    await db.set_sqlite_pragmas()
    log.debug("Schema ready on %s", db.engine.url.render_as_string(hide_password=True))
