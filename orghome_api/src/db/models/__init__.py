"""
ORM models for users, organizations (members, teams) and repositories
(watches, stars).

Importing this package ensures model classes are registered with the Base
metadata for Alembic and runtime usage.
"""

from .user import User  # noqa: F401
from .organization import (  # noqa: F401
    OrgVisibility,
    Organization,
    OrgUser,
    Team,
    TeamAuthorize,
    TeamUser,
)
from .repository import (  # noqa: F401
    Repository,
    Star,
    Watch,
    WatchMode,
)
