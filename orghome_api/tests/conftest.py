"""Shared fixtures: a file-backed SQLite database, a data builder and an HTTP client."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from src.core.settings import AppSettings
from src.db.base import Base
from src.db.models import (
    Organization,
    OrgUser,
    Repository,
    Star,
    Team,
    TeamUser,
    User,
    Watch,
    WatchMode,
)
from src.db.session import make_session_maker

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        REPO_PAGING_NUM=20,
        MEMBERS_PAGING_NUM=25,
        PAGINATION_WINDOW=5,
        RUN_MIGRATIONS_ON_STARTUP=False,
        JWT_SECRET_KEY="test-secret",
    )


@pytest_asyncio.fixture
async def engine(tmp_path):
    # A file, not :memory:, so concurrent lookups on separate connections see the same data
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'orghome.db'}")
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_maker(engine) -> async_sessionmaker[AsyncSession]:
    return make_session_maker(engine)


@pytest_asyncio.fixture
async def session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as s:
        yield s


class DataBuilder:
    """Creates committed rows so other sessions can read them."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _save(self, *entities):
        self.session.add_all(entities)
        await self.session.commit()
        return entities[0] if len(entities) == 1 else entities

    async def user(self, name: str, *, is_admin: bool = False, is_active: bool = True) -> User:
        return await self._save(
            User(name=name, lower_name=name.lower(), full_name=name.title(), is_admin=is_admin, is_active=is_active)
        )

    async def org(self, name: str, *, visibility: str = "public", description: Optional[str] = None) -> Organization:
        return await self._save(
            Organization(name=name, lower_name=name.lower(), visibility=visibility, description=description)
        )

    async def member(self, org: Organization, user: User, *, public: bool = True) -> OrgUser:
        return await self._save(OrgUser(org_id=org.id, user_id=user.id, is_public=public))

    async def team(self, org: Organization, name: str, *, authorize: str = "read", users=()) -> Team:
        team = await self._save(Team(org_id=org.id, name=name, lower_name=name.lower(), authorize=authorize))
        for u in users:
            await self._save(TeamUser(team_id=team.id, user_id=u.id))
        return team

    async def repo(
        self,
        org: Organization,
        name: str,
        *,
        stars: int = 0,
        forks: int = 0,
        language: Optional[str] = None,
        description: Optional[str] = None,
        private: bool = False,
        age: int = 0,
    ) -> Repository:
        return await self._save(
            Repository(
                owner_id=org.id,
                name=name,
                lower_name=name.lower(),
                description=description,
                primary_language=language,
                is_private=private,
                num_stars=stars,
                num_forks=forks,
                created_at=BASE_TIME + timedelta(days=age),
                updated_at=BASE_TIME + timedelta(hours=age),
            )
        )

    async def watch(self, user: User, repo: Repository, mode: WatchMode = WatchMode.NORMAL) -> Watch:
        return await self._save(Watch(user_id=user.id, repo_id=repo.id, mode=int(mode)))

    async def star(self, user: User, repo: Repository) -> Star:
        return await self._save(Star(user_id=user.id, repo_id=repo.id))


@pytest.fixture
def build(session) -> DataBuilder:
    return DataBuilder(session)


@pytest_asyncio.fixture
async def client(session_maker, settings) -> AsyncGenerator[AsyncClient, None]:
    from src.api.main import app
    from src.core.deps import get_relationship_session_maker
    from src.core.settings import get_app_settings
    from src.db.session import get_async_session

    async def _session():
        async with session_maker() as s:
            yield s

    app.dependency_overrides[get_async_session] = _session
    app.dependency_overrides[get_relationship_session_maker] = lambda: session_maker
    app.dependency_overrides[get_app_settings] = lambda: settings
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()
