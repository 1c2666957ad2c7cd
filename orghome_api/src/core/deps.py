from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.core.logging import viewer_var
from src.core.security import get_token_subject
from src.core.settings import AppSettings, get_app_settings
from src.db.session import get_async_session, get_session_maker
from src.repositories.user import UserRepository
from src.schemas.org_home import Viewer
from src.services.enrichment import ResultEnricher, SessionRelationshipIndex
from src.services.markup import MarkdownRenderer
from src.services.org_home import OrgHomeService

# Anonymous access is allowed, so a missing header is not an error.
bearer_scheme = HTTPBearer(auto_error=False)

_renderer = MarkdownRenderer()


# PUBLIC_INTERFACE
async def get_optional_viewer(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_async_session),
) -> Optional[Viewer]:
    """
    Resolve the signed-in viewer from an optional bearer token.

    Returns:
        Viewer, or None when no Authorization header was sent.
    Raises:
        HTTPException: 401 for an invalid token or unknown user, 403 for an inactive user.
    """
    if credentials is None:
        return None

    subject = get_token_subject(credentials.credentials)
    if not subject:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    try:
        user_id = UUID(subject)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = await UserRepository(session).get_user_by_id(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")

    viewer_var.set(user.name)
    return Viewer.model_validate(user)


# PUBLIC_INTERFACE
def get_relationship_session_maker() -> async_sessionmaker[AsyncSession]:
    """Session factory used by the concurrent relationship lookups."""
    return get_session_maker()


# PUBLIC_INTERFACE
async def get_org_home_service(
    session: AsyncSession = Depends(get_async_session),
    session_maker: async_sessionmaker[AsyncSession] = Depends(get_relationship_session_maker),
    settings: AppSettings = Depends(get_app_settings),
) -> OrgHomeService:
    """Build the org home service around the request session and settings snapshot."""
    enricher = ResultEnricher(SessionRelationshipIndex(session_maker))
    return OrgHomeService(session, settings, enricher, renderer=_renderer)
