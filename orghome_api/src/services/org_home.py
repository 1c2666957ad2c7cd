from __future__ import annotations

import logging
from typing import List, Optional, Tuple, Union

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.exceptions import OrganizationNotFound, RenderError, ServiceError
from src.core.settings import AppSettings
from src.db.models.organization import Organization, Team
from src.repositories.organization import FindOrgMembersOptions, OrganizationRepository
from src.repositories.repository import RepositoryRepository, SearchRepoOptions
from src.schemas.org_home import (
    MemberRead,
    OrganizationRead,
    OrgHomeQuery,
    OrgHomeResponse,
    RepoRelationships,
    RepositoryRead,
    TeamRead,
    Viewer,
)
from src.services.base import BaseService
from src.services.enrichment import ResultEnricher
from src.services.markup import MarkdownRenderer
from src.services.pagination import Paginator
from src.services.sorting import map_query_sort_to_order
from src.services.visibility import can_view_organization, resolve_member_visibility

logger = logging.getLogger(__name__)

# Paths with these suffixes belong to a user's key listings, not to org pages.
RESERVED_SUFFIXES = (".keys", ".gpg")


# PUBLIC_INTERFACE
def normalize_page(raw: Union[str, int, None]) -> int:
    """Parse a page number; missing, unparsable, zero or negative values become 1."""
    try:
        page = int(raw) if raw is not None else 0
    except (TypeError, ValueError):
        page = 0
    return page if page > 0 else 1


def _relationship_map(ids) -> dict:
    return {repo_id: True for repo_id in ids}


class OrgHomeService(BaseService):
    """
    Assembles the organization home page.

    Repository search, member listing and counting run one after another on
    the request session; only the viewer's watch/star lookups run concurrently,
    through the ResultEnricher.
    """

    def __init__(
        self,
        session: AsyncSession,
        settings: AppSettings,
        enricher: ResultEnricher,
        renderer: Optional[MarkdownRenderer] = None,
    ) -> None:
        super().__init__(session)
        self.settings = settings
        self.enricher = enricher
        self.renderer = renderer or MarkdownRenderer()
        self.orgs = OrganizationRepository(session)
        self.repos = RepositoryRepository(session)

    # PUBLIC_INTERFACE
    async def build_page(
        self, org_name: str, query: OrgHomeQuery, viewer: Optional[Viewer]
    ) -> OrgHomeResponse:
        """
        Build the org home payload for the given viewer.

        Raises:
            OrganizationNotFound: reserved path suffix, unknown org, or org hidden from viewer.
            ServiceError: a lookup the page depends on failed.
        """
        if org_name.endswith(RESERVED_SUFFIXES):
            raise OrganizationNotFound(org_name)

        org = await self._resolve_org(org_name, viewer)
        is_member, is_owner = await self._viewer_roles(org, viewer)
        teams = await self._visible_teams(org, viewer, is_member, is_owner)

        rendered_description = None
        if org.description:
            rendered_description = self._render_description(org.description)

        sort_type, order_by = map_query_sort_to_order(query.sort)
        keyword = (query.q or "").strip()
        language = (query.language or "").strip()
        page = normalize_page(query.page)

        try:
            repos, total = await self.repos.search_repositories(
                SearchRepoOptions(
                    owner_id=org.id,
                    keyword=keyword,
                    language=language,
                    order_by=order_by,
                    page=page,
                    page_size=self.settings.REPO_PAGING_NUM,
                    private=viewer is not None,
                    actor_id=viewer.id if viewer else None,
                    actor_is_admin=bool(viewer and viewer.is_admin),
                    include_description=self.settings.SEARCH_REPO_DESCRIPTION,
                )
            )
        except Exception as exc:
            raise ServiceError("SearchRepository", exc) from exc

        visibility = await resolve_member_visibility(self.orgs, org, viewer)
        member_opts = FindOrgMembersOptions(
            org_id=org.id,
            public_only=visibility.public_only,
            page=1,
            page_size=self.settings.MEMBERS_PAGING_NUM,
        )
        try:
            members = await self.orgs.find_org_members(member_opts)
        except Exception as exc:
            raise ServiceError("FindOrgMembers", exc) from exc
        try:
            members_total = await self.orgs.count_org_members(member_opts)
        except Exception as exc:
            raise ServiceError("CountOrgMembers", exc) from exc

        relationships: Optional[RepoRelationships] = None
        if viewer is not None:
            relationships = await self.enricher.enrich(viewer.id, [r.id for r in repos])

        pager = Paginator(
            total=total,
            page_size=self.settings.REPO_PAGING_NUM,
            current=page,
            window=self.settings.PAGINATION_WINDOW,
        )
        pager.set_default_params({"sort": sort_type, "q": keyword})
        pager.add_param("language", language)

        logger.info(
            "Org home %s: %d/%d repos, %d members (public_only=%s)",
            org.name, len(repos), total, members_total, visibility.public_only,
        )

        return OrgHomeResponse(
            title=org.display_name(),
            owner=OrganizationRead.model_validate(org),
            rendered_description=rendered_description,
            sort_type=sort_type,
            keyword=keyword,
            language=language,
            repos=[RepositoryRead.model_validate(r) for r in repos],
            total=total,
            members=[MemberRead.model_validate(m) for m in members],
            members_total=members_total,
            teams=[TeamRead.model_validate(t) for t in teams],
            is_owner=is_owner,
            is_member=is_member,
            disable_new_pull_mirrors=self.settings.MIRROR_DISABLE_NEW_PULL,
            watched_repos=_relationship_map(relationships.watched) if relationships else None,
            starred_repos=_relationship_map(relationships.starred) if relationships else None,
            page=pager.to_read(f"/{org.name}/"),
        )

    async def _resolve_org(self, org_name: str, viewer: Optional[Viewer]) -> Organization:
        try:
            org = await self.orgs.get_org_by_name(org_name)
        except Exception as exc:
            raise ServiceError("GetOrgByName", exc) from exc
        if org is None:
            raise OrganizationNotFound(org_name)
        if not await can_view_organization(self.orgs, org, viewer):
            # Hidden orgs look exactly like missing ones.
            raise OrganizationNotFound(org_name)
        return org

    async def _viewer_roles(self, org: Organization, viewer: Optional[Viewer]) -> Tuple[bool, bool]:
        if viewer is None:
            return False, False
        if viewer.is_admin:
            return True, True
        try:
            is_owner = await self.orgs.is_org_owner(org.id, viewer.id)
            is_member = is_owner or await self.orgs.is_org_member(org.id, viewer.id)
        except Exception as exc:
            raise ServiceError("IsOrgMember", exc) from exc
        return is_member, is_owner

    async def _visible_teams(
        self, org: Organization, viewer: Optional[Viewer], is_member: bool, is_owner: bool
    ) -> List[Team]:
        if viewer is None or not is_member:
            return []
        try:
            if is_owner:
                return await self.orgs.list_teams(org.id)
            return await self.orgs.list_user_teams(org.id, viewer.id)
        except Exception as exc:
            raise ServiceError("LoadTeams", exc) from exc

    def _render_description(self, description: str) -> str:
        try:
            return self.renderer.render_string(description, mode="document")
        except RenderError as exc:
            raise ServiceError("RenderString", exc) from exc
