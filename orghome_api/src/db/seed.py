"""
Database seeding with a small demo organization.

Seeds:
- Users: an admin, an org owner, a member with private membership, an outsider
- Organization "demo" with Owners and Developers teams
- A dozen repositories in a few languages, one of them private
- Watches and stars for the outsider

Usage:
  python -m src.db.run_migrations upgrade head
  python -m src.db.seed
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import (
    Organization,
    OrgUser,
    Repository,
    Star,
    Team,
    TeamAuthorize,
    TeamUser,
    User,
    Watch,
    WatchMode,
)
from src.db.session import get_async_session

logger = logging.getLogger(__name__)

DEMO_ORG = "demo"
LANGUAGES = ["Go", "Python", "Rust"]


# PUBLIC_INTERFACE
async def seed_all() -> None:
    """
    Seed the demo organization unless it already exists.
    """
    async for session in get_async_session():
        existing = await session.execute(select(Organization.id).where(Organization.lower_name == DEMO_ORG))
        if existing.first():
            logger.info("Demo organization already present; skipping seed")
            return

        users = _seed_users(session)
        await session.flush()
        org = await _seed_org(session, users)
        repos = _seed_repositories(session, org)
        await session.flush()
        _seed_relationships(session, users["outsider"], repos)
        await session.commit()


def _seed_users(session: AsyncSession) -> Dict[str, User]:
    users = {
        "admin": User(name="admin", lower_name="admin", full_name="Site Admin", is_admin=True),
        "owner": User(name="olivia", lower_name="olivia", full_name="Olivia Owner"),
        "member": User(name="mason", lower_name="mason", full_name="Mason Member"),
        "outsider": User(name="otto", lower_name="otto", full_name="Otto Outsider"),
    }
    session.add_all(users.values())
    return users


async def _seed_org(session: AsyncSession, users: Dict[str, User]) -> Organization:
    org = Organization(
        name="Demo",
        lower_name=DEMO_ORG,
        full_name="Demo Organization",
        description="Sample projects for **Org Home**.\n\nSee the repositories below.",
        visibility="public",
    )
    session.add(org)
    # ids are assigned on flush
    await session.flush()
    session.add_all(
        [
            OrgUser(org_id=org.id, user_id=users["owner"].id, is_public=True),
            OrgUser(org_id=org.id, user_id=users["member"].id, is_public=False),
        ]
    )
    owners = Team(org_id=org.id, name="Owners", lower_name="owners", authorize=TeamAuthorize.OWNER.value)
    developers = Team(org_id=org.id, name="Developers", lower_name="developers", authorize=TeamAuthorize.WRITE.value)
    session.add_all([owners, developers])
    await session.flush()
    session.add_all(
        [
            TeamUser(team_id=owners.id, user_id=users["owner"].id),
            TeamUser(team_id=developers.id, user_id=users["member"].id),
        ]
    )
    return org


def _seed_repositories(session: AsyncSession, org: Organization) -> List[Repository]:
    now = datetime.now(tz=timezone.utc)
    repos: List[Repository] = []
    for i in range(12):
        name = f"project-{i:02d}"
        repos.append(
            Repository(
                owner_id=org.id,
                name=name,
                lower_name=name,
                description=f"Demo project number {i}",
                primary_language=LANGUAGES[i % len(LANGUAGES)],
                is_private=i == 11,
                num_stars=i * 3,
                num_forks=i,
                created_at=now - timedelta(days=30 - i),
                updated_at=now - timedelta(hours=i),
            )
        )
    session.add_all(repos)
    return repos


def _seed_relationships(session: AsyncSession, user: User, repos: List[Repository]) -> None:
    for repo in repos[:4]:
        session.add(Watch(user_id=user.id, repo_id=repo.id, mode=int(WatchMode.NORMAL)))
    for repo in repos[2:6]:
        session.add(Star(user_id=user.id, repo_id=repo.id))


if __name__ == "__main__":
    asyncio.run(seed_all())
