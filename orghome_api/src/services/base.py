from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession


class BaseService:
    """
    Base class for services. Holds the request session shared by the
    repositories a service orchestrates.

    Services keep business logic and orchestration, delegating data access
    to repositories.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
