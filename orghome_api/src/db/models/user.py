from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.db.base import Base, UUIDPkMixin, TimestampMixin


class User(UUIDPkMixin, TimestampMixin, Base):
    """Individual account; may view org pages, belong to orgs, watch and star repos."""
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    lower_name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    full_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, server_default="true")
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default="false")
