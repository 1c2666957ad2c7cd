"""
Visibility rules for organizations and their member rosters.
"""
from __future__ import annotations

from typing import Optional

from src.core.exceptions import ServiceError
from src.db.models.organization import Organization, OrgVisibility
from src.repositories.organization import OrganizationRepository
from src.schemas.org_home import MemberVisibility, Viewer


# PUBLIC_INTERFACE
async def resolve_member_visibility(
    orgs: OrganizationRepository, org: Organization, viewer: Optional[Viewer]
) -> MemberVisibility:
    """
    Decide whether the viewer may see private members of the organization.

    Anonymous viewers only see public members. Members and site admins see
    everyone. A failing membership check is fatal and raised as ServiceError.
    """
    if viewer is None:
        return MemberVisibility(public_only=True)

    try:
        is_member = await orgs.is_org_member(org.id, viewer.id)
    except Exception as exc:
        raise ServiceError("IsOrgMember", exc) from exc

    return MemberVisibility(public_only=not is_member and not viewer.is_admin)


# PUBLIC_INTERFACE
async def can_view_organization(
    orgs: OrganizationRepository, org: Organization, viewer: Optional[Viewer]
) -> bool:
    """
    True when the organization itself is visible to the viewer.

    Admins see everything; limited orgs need a signed-in viewer; private orgs
    need membership.
    """
    if viewer is not None and viewer.is_admin:
        return True
    if org.visibility == OrgVisibility.PUBLIC.value:
        return True
    if viewer is None:
        return False
    if org.visibility == OrgVisibility.LIMITED.value:
        return True
    try:
        return await orgs.is_org_member(org.id, viewer.id)
    except Exception as exc:
        raise ServiceError("IsOrgMember", exc) from exc
