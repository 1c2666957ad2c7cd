from __future__ import annotations

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import func, select

from src.db.models.organization import Organization, OrgUser, Team, TeamAuthorize, TeamUser
from src.db.models.user import User
from .base import BaseRepository


class FindOrgMembersOptions(BaseModel):
    """Shared options for listing and counting org members."""
    model_config = ConfigDict(frozen=True)

    org_id: UUID
    public_only: bool = True
    page: int = Field(1, ge=1)
    page_size: int = Field(25, ge=1)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class OrganizationRepository(BaseRepository):
    """Repository for organizations, their memberships and teams."""

    async def get_org_by_name(self, name: str) -> Optional[Organization]:
        stmt = select(Organization).where(Organization.lower_name == name.lower())
        return await self.scalar_one_or_none(stmt)

    async def is_org_member(self, org_id: UUID, user_id: UUID) -> bool:
        stmt = select(
            select(OrgUser.id).where(OrgUser.org_id == org_id, OrgUser.user_id == user_id).exists()
        )
        return bool(await self.scalar_one(stmt))

    async def is_org_owner(self, org_id: UUID, user_id: UUID) -> bool:
        """True when the user belongs to the org's Owners team."""
        stmt = select(
            select(TeamUser.id)
            .join(Team, Team.id == TeamUser.team_id)
            .where(Team.org_id == org_id, Team.authorize == TeamAuthorize.OWNER.value, TeamUser.user_id == user_id)
            .exists()
        )
        return bool(await self.scalar_one(stmt))

    def _members_filter(self, stmt, opts: FindOrgMembersOptions):
        stmt = stmt.where(OrgUser.org_id == opts.org_id)
        if opts.public_only:
            stmt = stmt.where(OrgUser.is_public.is_(True))
        return stmt

    async def find_org_members(self, opts: FindOrgMembersOptions) -> List[User]:
        stmt = select(User).join(OrgUser, OrgUser.user_id == User.id)
        stmt = self._members_filter(stmt, opts)
        stmt = stmt.order_by(User.lower_name).offset(opts.offset).limit(opts.page_size)
        result = await self.scalars(stmt)
        return list(result)

    async def count_org_members(self, opts: FindOrgMembersOptions) -> int:
        stmt = select(func.count(OrgUser.id))
        stmt = self._members_filter(stmt, opts)
        return int(await self.scalar_one(stmt))

    async def list_teams(self, org_id: UUID) -> List[Team]:
        stmt = select(Team).where(Team.org_id == org_id).order_by(Team.lower_name)
        result = await self.scalars(stmt)
        return list(result)

    async def list_user_teams(self, org_id: UUID, user_id: UUID) -> List[Team]:
        stmt = (
            select(Team)
            .join(TeamUser, TeamUser.team_id == Team.id)
            .where(Team.org_id == org_id, TeamUser.user_id == user_id)
            .order_by(Team.lower_name)
        )
        result = await self.scalars(stmt)
        return list(result)
