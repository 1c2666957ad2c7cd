from src.repositories.organization import FindOrgMembersOptions, OrganizationRepository
from src.repositories.repository import (
    RelationshipRepository,
    RepositoryRepository,
    SearchOrderBy,
    SearchRepoOptions,
)
from src.repositories.user import UserRepository


async def _names(session, **opts):
    repos, total = await RepositoryRepository(session).search_repositories(SearchRepoOptions(**opts))
    return [r.name for r in repos], total


async def test_search_is_scoped_to_owner_and_counts_all_matches(session, build):
    acme = await build.org("acme")
    other = await build.org("other")
    for i in range(5):
        await build.repo(acme, f"acme-{i}", stars=i)
    await build.repo(other, "elsewhere")

    names, total = await _names(session, owner_id=acme.id, order_by=SearchOrderBy.STARS_REVERSE, page=2, page_size=2)

    assert names == ["acme-2", "acme-1"]
    assert total == 5


async def test_search_page_past_the_end_is_empty(session, build):
    acme = await build.org("acme")
    await build.repo(acme, "only")

    names, total = await _names(session, owner_id=acme.id, page=3, page_size=20)

    assert names == []
    assert total == 1


async def test_search_huge_page_skips_the_page_query(session, build):
    acme = await build.org("acme")
    await build.repo(acme, "only")

    names, total = await _names(session, owner_id=acme.id, page=10**20, page_size=20)

    assert names == []
    assert total == 1


async def test_search_orders(session, build):
    acme = await build.org("acme")
    await build.repo(acme, "Bravo", stars=1, forks=9, age=2)
    await build.repo(acme, "alpha", stars=5, forks=0, age=1)
    await build.repo(acme, "charlie", stars=3, forks=4, age=3)

    async def order(o):
        names, _ = await _names(session, owner_id=acme.id, order_by=o)
        return names

    assert await order(SearchOrderBy.ALPHABETICALLY) == ["alpha", "Bravo", "charlie"]
    assert await order(SearchOrderBy.ALPHABETICALLY_REVERSE) == ["charlie", "Bravo", "alpha"]
    assert await order(SearchOrderBy.STARS_REVERSE) == ["alpha", "charlie", "Bravo"]
    assert await order(SearchOrderBy.FORKS) == ["alpha", "charlie", "Bravo"]
    assert await order(SearchOrderBy.NEWEST) == ["charlie", "Bravo", "alpha"]
    assert await order(SearchOrderBy.LEAST_UPDATED) == ["alpha", "Bravo", "charlie"]


async def test_search_keyword_matches_name_and_description(session, build):
    acme = await build.org("acme")
    await build.repo(acme, "api-server")
    await build.repo(acme, "frontend", description="Talks to the API")
    await build.repo(acme, "docs")

    names, total = await _names(session, owner_id=acme.id, keyword="API", order_by=SearchOrderBy.ALPHABETICALLY)
    assert names == ["api-server", "frontend"]
    assert total == 2

    names, _ = await _names(session, owner_id=acme.id, keyword="api", include_description=False)
    assert names == ["api-server"]


async def test_search_keyword_alternatives_and_wildcards(session, build):
    acme = await build.org("acme")
    await build.repo(acme, "docs")
    await build.repo(acme, "cli")
    await build.repo(acme, "web_ui")

    names, _ = await _names(
        session, owner_id=acme.id, keyword="docs, cli", order_by=SearchOrderBy.ALPHABETICALLY
    )
    assert names == ["cli", "docs"]

    # LIKE metacharacters are matched literally
    names, _ = await _names(session, owner_id=acme.id, keyword="b_u")
    assert names == ["web_ui"]
    names, _ = await _names(session, owner_id=acme.id, keyword="%")
    assert names == []


async def test_search_language_is_case_insensitive(session, build):
    acme = await build.org("acme")
    await build.repo(acme, "gopher", language="Go")
    await build.repo(acme, "snake", language="Python")

    names, total = await _names(session, owner_id=acme.id, language="go")

    assert names == ["gopher"]
    assert total == 1


async def test_private_repositories_need_access(session, build):
    acme = await build.org("acme")
    member = await build.user("mia")
    stranger = await build.user("sam")
    admin = await build.user("root", is_admin=True)
    await build.member(acme, member, public=False)
    await build.repo(acme, "open")
    await build.repo(acme, "secret", private=True)

    order = SearchOrderBy.ALPHABETICALLY
    assert (await _names(session, owner_id=acme.id, order_by=order))[0] == ["open"]
    assert (await _names(session, owner_id=acme.id, order_by=order, private=True, actor_id=stranger.id))[0] == ["open"]
    assert (await _names(session, owner_id=acme.id, order_by=order, private=True, actor_id=member.id))[0] == [
        "open",
        "secret",
    ]
    assert (
        await _names(session, owner_id=acme.id, order_by=order, private=True, actor_id=admin.id, actor_is_admin=True)
    )[0] == ["open", "secret"]


async def test_members_listing_and_count_share_scope(session, build):
    acme = await build.org("acme")
    for name, public in [("carol", True), ("alice", False), ("bob", True)]:
        await build.member(acme, await build.user(name), public=public)
    outsider = await build.user("zed")
    repo = OrganizationRepository(session)

    public = FindOrgMembersOptions(org_id=acme.id, public_only=True)
    everyone = FindOrgMembersOptions(org_id=acme.id, public_only=False)

    assert [u.name for u in await repo.find_org_members(public)] == ["bob", "carol"]
    assert await repo.count_org_members(public) == 2
    assert [u.name for u in await repo.find_org_members(everyone)] == ["alice", "bob", "carol"]
    assert await repo.count_org_members(everyone) == 3

    small_page = FindOrgMembersOptions(org_id=acme.id, public_only=False, page=2, page_size=2)
    assert [u.name for u in await repo.find_org_members(small_page)] == ["carol"]
    assert await repo.count_org_members(small_page) == 3
    assert outsider.name not in [u.name for u in await repo.find_org_members(everyone)]


async def test_membership_ownership_and_teams(session, build):
    acme = await build.org("acme")
    owner = await build.user("olivia")
    dev = await build.user("dev")
    outsider = await build.user("otto")
    await build.member(acme, owner)
    await build.member(acme, dev, public=False)
    await build.team(acme, "Owners", authorize="owner", users=[owner])
    await build.team(acme, "Developers", authorize="write", users=[dev])
    repo = OrganizationRepository(session)

    assert await repo.is_org_member(acme.id, dev.id) is True
    assert await repo.is_org_member(acme.id, outsider.id) is False
    assert await repo.is_org_owner(acme.id, owner.id) is True
    assert await repo.is_org_owner(acme.id, dev.id) is False
    assert [t.name for t in await repo.list_teams(acme.id)] == ["Developers", "Owners"]
    assert [t.name for t in await repo.list_user_teams(acme.id, dev.id)] == ["Developers"]


async def test_lookup_by_name_is_case_insensitive(session, build):
    acme = await build.org("Acme")
    user = await build.user("Vera")

    assert (await OrganizationRepository(session).get_org_by_name("ACME")).id == acme.id
    assert await OrganizationRepository(session).get_org_by_name("nope") is None
    assert (await UserRepository(session).get_user_by_id(user.id)).name == "Vera"


async def test_relationship_filters_stay_within_candidates(session, build):
    from src.db.models import WatchMode

    acme = await build.org("acme")
    viewer = await build.user("vera")
    other = await build.user("other")
    r1 = await build.repo(acme, "r1")
    r2 = await build.repo(acme, "r2")
    r3 = await build.repo(acme, "r3")
    await build.watch(viewer, r1)
    await build.watch(viewer, r2, mode=WatchMode.AUTO)
    await build.watch(viewer, r3, mode=WatchMode.NONE)
    await build.watch(other, r3)
    await build.star(viewer, r2)
    await build.star(viewer, r3)
    rel = RelationshipRepository(session)

    assert set(await rel.filter_watched_repo_ids(viewer.id, [r1.id, r2.id, r3.id])) == {r1.id, r2.id}
    assert set(await rel.filter_watched_repo_ids(viewer.id, [r2.id])) == {r2.id}
    assert await rel.filter_starred_repo_ids(viewer.id, [r1.id]) == []
    assert set(await rel.filter_starred_repo_ids(viewer.id, [r1.id, r2.id, r3.id])) == {r2.id, r3.id}
    assert await rel.filter_watched_repo_ids(viewer.id, []) == []
