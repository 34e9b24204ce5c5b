from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from .models import Setting


class SettingsRepo:
    def __init__(self, session: AsyncSession) -> None:
        self.s = session

    async def get(self, key: str) -> Optional[dict]:
        row = await self.s.get(Setting, key)
        return row.value if row else None

    async def set(self, key: str, value: dict) -> None:
        row = await self.s.get(Setting, key)
        if row is None:
            self.s.add(Setting(key=key, value=value))
        else:
            row.value = value
            row.updated_at = datetime.utcnow()
