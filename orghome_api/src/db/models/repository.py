from __future__ import annotations

import enum
import uuid
from typing import Optional

from sqlalchemy import Boolean, Integer, Text, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, UUIDPkMixin, TimestampMixin


class WatchMode(enum.IntEnum):
    """Watch subscription state; NONE and DONT mean not watching."""
    NONE = 0
    NORMAL = 1
    DONT = 2
    AUTO = 3


WATCHING_MODES = (WatchMode.NORMAL, WatchMode.AUTO)


class Repository(UUIDPkMixin, TimestampMixin, Base):
    """Code repository owned by an organization."""
    __tablename__ = "repositories"
    __table_args__ = (
        UniqueConstraint("owner_id", "lower_name", name="uq_repositories_owner_lower_name"),
    )

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    lower_name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    primary_language: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    is_fork: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    is_mirror: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
    num_stars: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    num_forks: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")


class Watch(UUIDPkMixin, TimestampMixin, Base):
    """A user's watch subscription on a repository."""
    __tablename__ = "watches"
    __table_args__ = (
        UniqueConstraint("user_id", "repo_id", name="uq_watches_user_repo"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    repo_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("repositories.id", ondelete="CASCADE"), nullable=False, index=True
    )
    mode: Mapped[int] = mapped_column(
        Integer, nullable=False, default=int(WatchMode.NORMAL), server_default=str(int(WatchMode.NORMAL))
    )


class Star(UUIDPkMixin, TimestampMixin, Base):
    """A user's star on a repository."""
    __tablename__ = "stars"
    __table_args__ = (
        UniqueConstraint("user_id", "repo_id", name="uq_stars_user_repo"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    repo_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("repositories.id", ondelete="CASCADE"), nullable=False, index=True
    )
