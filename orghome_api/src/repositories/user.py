from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy import select

from src.db.models.user import User
from .base import BaseRepository


class UserRepository(BaseRepository):
    """Repository for user accounts."""

    async def get_user_by_id(self, user_id: UUID) -> Optional[User]:
        stmt = select(User).where(User.id == user_id)
        return await self.scalar_one_or_none(stmt)
