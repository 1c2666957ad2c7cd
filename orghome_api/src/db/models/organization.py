from __future__ import annotations

import enum
import uuid
from typing import Optional

from sqlalchemy import Boolean, Text, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, UUIDPkMixin, TimestampMixin


class OrgVisibility(str, enum.Enum):
    """Who may see an organization at all."""
    PUBLIC = "public"
    LIMITED = "limited"  # signed-in users only
    PRIVATE = "private"  # members only


class TeamAuthorize(str, enum.Enum):
    """Access level a team grants on the org's repositories."""
    READ = "read"
    WRITE = "write"
    ADMIN = "admin"
    OWNER = "owner"


class Organization(UUIDPkMixin, TimestampMixin, Base):
    """Organization owning repositories, members and teams."""
    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    lower_name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    full_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    website: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    location: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    visibility: Mapped[str] = mapped_column(
        Text, nullable=False, default=OrgVisibility.PUBLIC.value, server_default=OrgVisibility.PUBLIC.value
    )

    def display_name(self) -> str:
        return self.full_name.strip() if self.full_name and self.full_name.strip() else self.name


class OrgUser(UUIDPkMixin, TimestampMixin, Base):
    """Membership of a user in an organization."""
    __tablename__ = "org_users"
    __table_args__ = (
        UniqueConstraint("org_id", "user_id", name="uq_org_users_org_user"),
    )

    org_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Public memberships are shown to everybody on the org page.
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")


class Team(UUIDPkMixin, TimestampMixin, Base):
    """Group of org members sharing an access level."""
    __tablename__ = "teams"
    __table_args__ = (
        UniqueConstraint("org_id", "lower_name", name="uq_teams_org_lower_name"),
    )

    org_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    lower_name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    authorize: Mapped[str] = mapped_column(
        Text, nullable=False, default=TeamAuthorize.READ.value, server_default=TeamAuthorize.READ.value
    )


class TeamUser(UUIDPkMixin, TimestampMixin, Base):
    """Association of users to teams."""
    __tablename__ = "team_users"
    __table_args__ = (
        UniqueConstraint("team_id", "user_id", name="uq_team_users_team_user"),
    )

    team_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
