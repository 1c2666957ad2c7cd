from __future__ import annotations

from datetime import datetime
from typing import Dict, FrozenSet, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Viewer(BaseModel):
    """The signed-in identity requesting a page. Anonymous requests have no Viewer."""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: UUID = Field(..., description="User ID")
    name: str = Field(..., description="User name")
    is_admin: bool = Field(False, description="Site administrator flag")


class MemberVisibility(BaseModel):
    """Scope of a member listing."""
    model_config = ConfigDict(frozen=True)

    public_only: bool = Field(True, description="Only list members whose membership is public")


class RepoRelationships(BaseModel):
    """
    Viewer relationships with the repositories of one page.

    An empty set is the only representation of "no relationship"; a failed
    lookup also yields an empty set.
    """
    model_config = ConfigDict(frozen=True)

    watched: FrozenSet[UUID] = Field(default_factory=frozenset)
    starred: FrozenSet[UUID] = Field(default_factory=frozenset)


class OrganizationRead(BaseModel):
    """Organization metadata shown in the page header."""
    id: UUID = Field(..., description="Organization ID")
    name: str = Field(..., description="Organization name")
    full_name: Optional[str] = Field(None, description="Full name")
    description: Optional[str] = Field(None, description="Raw description")
    website: Optional[str] = Field(None)
    location: Optional[str] = Field(None)
    visibility: str = Field(..., description="public, limited or private")

    class Config:
        from_attributes = True


class RepositoryRead(BaseModel):
    """Repository summary for listings."""
    id: UUID = Field(..., description="Repository ID")
    name: str = Field(..., description="Repository name")
    description: Optional[str] = Field(None)
    primary_language: Optional[str] = Field(None)
    is_private: bool = Field(False)
    is_fork: bool = Field(False)
    is_mirror: bool = Field(False)
    num_stars: int = Field(0)
    num_forks: int = Field(0)
    created_at: datetime = Field(..., description="Created timestamp")
    updated_at: datetime = Field(..., description="Updated timestamp")

    class Config:
        from_attributes = True


class MemberRead(BaseModel):
    """Organization member."""
    id: UUID = Field(..., description="User ID")
    name: str = Field(..., description="User name")
    full_name: Optional[str] = Field(None)

    class Config:
        from_attributes = True


class TeamRead(BaseModel):
    """Organization team visible to the viewer."""
    id: UUID = Field(..., description="Team ID")
    name: str = Field(..., description="Team name")
    description: Optional[str] = Field(None)
    authorize: str = Field(..., description="Access level granted by the team")

    class Config:
        from_attributes = True


class PageLink(BaseModel):
    """One entry of the pagination window."""
    num: int = Field(..., ge=1)
    is_current: bool = Field(False)
    link: str = Field(...)


class PaginationRead(BaseModel):
    """Pagination descriptor for page links."""
    total: int = Field(..., ge=0, description="Total number of items")
    page_size: int = Field(..., ge=1)
    current: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
    previous: Optional[int] = Field(None, description="Previous page number, if any")
    next: Optional[int] = Field(None, description="Next page number, if any")
    pages: List[PageLink] = Field(default_factory=list, description="Window of surrounding pages")
    params: Dict[str, str] = Field(default_factory=dict, description="Query params carried into links")


# PUBLIC_INTERFACE
class OrgHomeResponse(BaseModel):
    """Everything needed to render an organization's home page."""
    title: str = Field(..., description="Organization display name")
    owner: OrganizationRead
    rendered_description: Optional[str] = Field(None, description="Description rendered to HTML")
    sort_type: str = Field(..., description="Effective sort label")
    keyword: str = Field("")
    language: str = Field("")
    repos: List[RepositoryRead] = Field(default_factory=list)
    total: int = Field(0, ge=0, description="Total repositories matching the filters")
    members: List[MemberRead] = Field(default_factory=list)
    members_total: int = Field(0, ge=0)
    teams: List[TeamRead] = Field(default_factory=list)
    is_owner: bool = Field(False)
    is_member: bool = Field(False)
    disable_new_pull_mirrors: bool = Field(False)
    watched_repos: Optional[Dict[UUID, bool]] = Field(
        None, description="Repositories on this page the viewer watches; null when anonymous"
    )
    starred_repos: Optional[Dict[UUID, bool]] = Field(
        None, description="Repositories on this page the viewer starred; null when anonymous"
    )
    page: PaginationRead


class OrgHomeQuery(BaseModel):
    """Raw query parameters of the org home page, before normalization."""
    sort: Optional[str] = None
    q: Optional[str] = None
    language: Optional[str] = None
    page: Optional[str] = None
