from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import Executable
from sqlalchemy.ext.asyncio import AsyncSession


class BaseRepository:
    """
    Base class for repositories providing common helpers.

    Note:
      A repository is bound to one AsyncSession. Sessions must not be shared
      between concurrently running tasks; open one per task instead.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def execute(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute a SQLAlchemy statement."""
        return await self.session.execute(statement, params or {})

    async def scalars(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute and return scalars."""
        result = await self.execute(statement, params)
        return result.scalars()

    async def scalar_one(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute and return exactly one scalar."""
        result = await self.execute(statement, params)
        return result.scalar_one()

    async def scalar_one_or_none(self, statement: Executable, params: Optional[dict[str, Any]] = None):
        """Execute and return a single scalar or None."""
        result = await self.execute(statement, params)
        return result.scalar_one_or_none()
