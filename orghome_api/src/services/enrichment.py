"""
Per-viewer decoration of a repository page with watch/star flags.

The two lookups run as concurrent tasks and are joined before anything is
returned. A failing lookup is logged and contributes an empty set; it never
cancels its sibling and never fails the page.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, FrozenSet, List, Protocol, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.repositories.repository import RelationshipRepository
from src.schemas.org_home import RepoRelationships

logger = logging.getLogger(__name__)

Lookup = Callable[[UUID, Sequence[UUID]], Awaitable[List[UUID]]]


class RelationshipIndex(Protocol):
    """Answers which of a set of repositories a user watches or has starred."""

    async def filter_watched_repo_ids(self, user_id: UUID, repo_ids: Sequence[UUID]) -> List[UUID]: ...

    async def filter_starred_repo_ids(self, user_id: UUID, repo_ids: Sequence[UUID]) -> List[UUID]: ...


class SessionRelationshipIndex:
    """
    RelationshipIndex backed by the database.

    Every lookup opens its own session: an AsyncSession cannot be used by two
    tasks at once, and the enricher runs both lookups concurrently.
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def filter_watched_repo_ids(self, user_id: UUID, repo_ids: Sequence[UUID]) -> List[UUID]:
        async with self._session_maker() as session:
            return await RelationshipRepository(session).filter_watched_repo_ids(user_id, repo_ids)

    async def filter_starred_repo_ids(self, user_id: UUID, repo_ids: Sequence[UUID]) -> List[UUID]:
        async with self._session_maker() as session:
            return await RelationshipRepository(session).filter_starred_repo_ids(user_id, repo_ids)


class ResultEnricher:
    """Fetches a viewer's watch and star relationships for one page of repositories."""

    def __init__(self, index: RelationshipIndex) -> None:
        self.index = index

    # PUBLIC_INTERFACE
    async def enrich(self, viewer_id: UUID, repo_ids: Sequence[UUID]) -> RepoRelationships:
        """
        Run the watch and star lookups concurrently and return both results.

        Parameters:
            viewer_id: the signed-in viewer
            repo_ids: ids of the repositories on the current page
        Returns:
            RepoRelationships restricted to repo_ids; failed lookups yield empty sets.
        """
        candidates = list(repo_ids)
        if not candidates:
            return RepoRelationships()

        watched, starred = await asyncio.gather(
            self._lookup("watched", self.index.filter_watched_repo_ids, viewer_id, candidates),
            self._lookup("starred", self.index.filter_starred_repo_ids, viewer_id, candidates),
        )
        return RepoRelationships(watched=watched, starred=starred)

    async def _lookup(
        self, kind: str, fetch: Lookup, viewer_id: UUID, candidates: List[UUID]
    ) -> FrozenSet[UUID]:
        try:
            found = await fetch(viewer_id, candidates)
        except Exception:
            logger.warning("Failed getting %s repository ids", kind, exc_info=True)
            return frozenset()
        return frozenset(found).intersection(candidates)
