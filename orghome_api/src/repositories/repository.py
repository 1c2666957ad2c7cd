from __future__ import annotations

import enum
from typing import List, Optional, Sequence, Tuple
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import false, func, or_, select

from src.db.models.organization import OrgUser
from src.db.models.repository import WATCHING_MODES, Repository, Star, Watch
from .base import BaseRepository


class SearchOrderBy(enum.Enum):
    """Orderings supported by repository search, as (column, descending)."""
    NEWEST = ("created_at", True)
    OLDEST = ("created_at", False)
    RECENT_UPDATED = ("updated_at", True)
    LEAST_UPDATED = ("updated_at", False)
    ALPHABETICALLY = ("lower_name", False)
    ALPHABETICALLY_REVERSE = ("lower_name", True)
    STARS_REVERSE = ("num_stars", True)
    STARS = ("num_stars", False)
    FORKS_REVERSE = ("num_forks", True)
    FORKS = ("num_forks", False)

    def clauses(self) -> list:
        column_name, descending = self.value
        column = getattr(Repository, column_name)
        primary = column.desc() if descending else column.asc()
        # id breaks ties so equal keys never shuffle between pages
        return [primary, Repository.id.asc()]


class SearchRepoOptions(BaseModel):
    """Filters, ordering and paging for a repository search."""
    model_config = ConfigDict(frozen=True)

    owner_id: UUID
    keyword: str = ""
    language: str = ""
    order_by: SearchOrderBy = SearchOrderBy.RECENT_UPDATED
    page: int = Field(1, ge=1)
    page_size: int = Field(20, ge=1)
    # Include private repositories the actor can access.
    private: bool = False
    actor_id: Optional[UUID] = None
    actor_is_admin: bool = False
    include_description: bool = True

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def keywords(self) -> List[str]:
        return [k.strip().lower() for k in self.keyword.split(",") if k.strip()]


class RepositoryRepository(BaseRepository):
    """Repository search over an owner's repositories."""

    def _search_conditions(self, opts: SearchRepoOptions) -> list:
        conds = [Repository.owner_id == opts.owner_id]

        if not opts.private or opts.actor_id is None:
            conds.append(Repository.is_private.is_(False))
        elif not opts.actor_is_admin:
            is_member = (
                select(OrgUser.id)
                .where(OrgUser.org_id == Repository.owner_id, OrgUser.user_id == opts.actor_id)
                .exists()
            )
            conds.append(or_(Repository.is_private.is_(False), is_member))

        keywords = opts.keywords
        if keywords:
            matches = []
            for kw in keywords:
                matches.append(Repository.lower_name.contains(kw, autoescape=True))
                if opts.include_description:
                    matches.append(
                        func.lower(Repository.description).contains(kw, autoescape=True)
                    )
            conds.append(or_(false(), *matches))

        if opts.language:
            conds.append(func.lower(Repository.primary_language) == opts.language.lower())

        return conds

    async def search_repositories(self, opts: SearchRepoOptions) -> Tuple[List[Repository], int]:
        """Return one page of matching repositories and the total match count."""
        conds = self._search_conditions(opts)

        count_stmt = select(func.count(Repository.id)).where(*conds)
        total = int(await self.scalar_one(count_stmt))
        # Pages past the end never reach the database; huge offsets overflow the driver
        if opts.offset >= total:
            return [], total

        stmt = (
            select(Repository)
            .where(*conds)
            .order_by(*opts.order_by.clauses())
            .offset(opts.offset)
            .limit(opts.page_size)
        )
        result = await self.scalars(stmt)
        return list(result), total


class RelationshipRepository(BaseRepository):
    """Watch and star lookups restricted to a candidate set of repositories."""

    async def filter_watched_repo_ids(self, user_id: UUID, repo_ids: Sequence[UUID]) -> List[UUID]:
        if not repo_ids:
            return []
        stmt = select(Watch.repo_id).where(
            Watch.user_id == user_id,
            Watch.mode.in_([int(m) for m in WATCHING_MODES]),
            Watch.repo_id.in_(list(repo_ids)),
        )
        result = await self.scalars(stmt)
        return list(result)

    async def filter_starred_repo_ids(self, user_id: UUID, repo_ids: Sequence[UUID]) -> List[UUID]:
        if not repo_ids:
            return []
        stmt = select(Star.repo_id).where(
            Star.user_id == user_id,
            Star.repo_id.in_(list(repo_ids)),
        )
        result = await self.scalars(stmt)
        return list(result)
