from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from src.core.deps import get_optional_viewer, get_org_home_service
from src.core.exceptions import OrganizationNotFound
from src.core.logging import org_var
from src.schemas.common import ErrorResponse
from src.schemas.org_home import OrgHomeQuery, OrgHomeResponse, Viewer
from src.services.org_home import OrgHomeService

router = APIRouter(tags=["Organizations"])


# PUBLIC_INTERFACE
@router.get(
    "/{org}/",
    response_model=OrgHomeResponse,
    summary="Organization home",
    description=(
        "Repositories of the organization with search, language filter, sorting and "
        "pagination, its member roster, and the viewer's watch/star flags."
    ),
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def org_home(
    org: str = Path(..., description="Organization name"),
    sort: Optional[str] = Query(None, description="Sort order, e.g. newest, moststars, alphabetically"),
    q: Optional[str] = Query(None, description="Keyword; comma separates alternatives"),
    language: Optional[str] = Query(None, description="Primary language filter"),
    page: Optional[str] = Query(None, description="Page number (1-based)"),
    viewer: Optional[Viewer] = Depends(get_optional_viewer),
    service: OrgHomeService = Depends(get_org_home_service),
) -> OrgHomeResponse:
    """
    Render the org home payload.

    Unknown sort values fall back to recentupdate; page values that are missing,
    unparsable or below 1 become 1.
    """
    org_var.set(org)
    try:
        return await service.build_page(
            org, OrgHomeQuery(sort=sort, q=q, language=language, page=page), viewer
        )
    except OrganizationNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Organization not found")
