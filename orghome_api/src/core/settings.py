from __future__ import annotations

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application-level settings for the FastAPI service.

    This is separate from src.db.config.Settings, which focuses on the database layer.
    Instances are frozen so a single snapshot can be handed to services per request.
    """

    # FastAPI metadata
    APP_NAME: str = Field(default="Org Home API")
    APP_DESCRIPTION: str = Field(
        default=(
            "Organization landing pages: repository listing with search, sorting "
            "and pagination, member roster, and per-viewer watch/star flags."
        )
    )
    APP_VERSION: str = Field(default="0.1.0")

    # CORS
    CORS_ORIGINS: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Comma-separated list or JSON array of allowed origins. Default: *",
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True)
    CORS_ALLOW_METHODS: List[str] = Field(default_factory=lambda: ["*"])
    CORS_ALLOW_HEADERS: List[str] = Field(default_factory=lambda: ["*"])

    # Startup behavior
    RUN_MIGRATIONS_ON_STARTUP: bool = Field(
        default=True,
        description="If true, run Alembic migrations (upgrade head) at app startup.",
    )
    AUTO_SEED: bool = Field(
        default=False,
        description="If true, seed a demo organization after migrations.",
    )

    # Listing
    REPO_PAGING_NUM: int = Field(default=20, ge=1, description="Repositories per org home page")
    MEMBERS_PAGING_NUM: int = Field(default=25, ge=1, description="Members shown on the org home page")
    PAGINATION_WINDOW: int = Field(default=5, ge=1, description="Page links shown around the current page")
    SEARCH_REPO_DESCRIPTION: bool = Field(
        default=True, description="Match search keywords against repository descriptions too."
    )

    # Mirrors
    MIRROR_DISABLE_NEW_PULL: bool = Field(
        default=False, description="Disable creation of new pull mirrors."
    )

    # Viewer tokens
    JWT_SECRET_KEY: str = Field(default="change-me", description="HMAC secret for viewer tokens")
    JWT_ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60)

    # Environment label
    ENVIRONMENT: Optional[str] = Field(
        default=None, description="Environment label (dev/test/prod)"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore", frozen=True
    )

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        """
        Accept both JSON array format and comma-separated formats for CORS origins.
        """
        if v is None:
            return ["*"]
        if isinstance(v, str):
            parts = [p.strip() for p in v.split(",") if p.strip()]
            return parts or ["*"]
        if isinstance(v, list):
            return v or ["*"]
        return ["*"]


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """
    Return the process-wide AppSettings snapshot populated from environment variables.

    Call get_app_settings.cache_clear() to pick up changed environment values.
    """
    return AppSettings()
