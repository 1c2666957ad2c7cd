import asyncio
import logging
from uuid import uuid4


from src.schemas.org_home import RepoRelationships
from src.services.enrichment import ResultEnricher, SessionRelationshipIndex


class _FakeIndex:
    """Returns canned answers; records calls; may fail or block per relationship."""

    def __init__(self, watched=(), starred=(), fail=(), gate=None) -> None:
        self.answers = {"watched": list(watched), "starred": list(starred)}
        self.fail = set(fail)
        self.gate = gate
        self.calls = []
        self.started = {"watched": asyncio.Event(), "starred": asyncio.Event()}

    async def _answer(self, kind, user_id, repo_ids):
        self.calls.append((kind, user_id, list(repo_ids)))
        self.started[kind].set()
        if self.gate is not None:
            await self.gate(kind, self)
        if kind in self.fail:
            raise RuntimeError(f"{kind} lookup down")
        return self.answers[kind]

    async def filter_watched_repo_ids(self, user_id, repo_ids):
        return await self._answer("watched", user_id, repo_ids)

    async def filter_starred_repo_ids(self, user_id, repo_ids):
        return await self._answer("starred", user_id, repo_ids)


async def test_enrich_returns_both_relationship_sets():
    a, b, c = uuid4(), uuid4(), uuid4()
    index = _FakeIndex(watched=[a], starred=[b, c])
    viewer = uuid4()

    result = await ResultEnricher(index).enrich(viewer, [a, b, c])

    assert result == RepoRelationships(watched=frozenset({a}), starred=frozenset({b, c}))
    assert sorted(kind for kind, _, _ in index.calls) == ["starred", "watched"]
    assert all(user == viewer and ids == [a, b, c] for _, user, ids in index.calls)


async def test_lookups_run_concurrently():
    async def wait_for_sibling(kind, index):
        # Each lookup only finishes once the other has started.
        sibling = "starred" if kind == "watched" else "watched"
        await asyncio.wait_for(index.started[sibling].wait(), timeout=1)

    a = uuid4()
    index = _FakeIndex(watched=[a], starred=[a], gate=wait_for_sibling)

    result = await ResultEnricher(index).enrich(uuid4(), [a])

    assert result.watched == frozenset({a})
    assert result.starred == frozenset({a})


async def test_join_waits_for_the_slower_lookup():
    release = asyncio.Event()

    async def slow_stars(kind, index):
        if kind == "starred":
            await release.wait()

    a = uuid4()
    index = _FakeIndex(watched=[a], starred=[a], gate=slow_stars)
    task = asyncio.create_task(ResultEnricher(index).enrich(uuid4(), [a]))

    await asyncio.wait_for(index.started["starred"].wait(), timeout=1)
    await asyncio.sleep(0)
    assert not task.done()

    release.set()
    result = await asyncio.wait_for(task, timeout=1)
    assert result.starred == frozenset({a})


async def test_watch_failure_does_not_affect_stars(caplog):
    a, b = uuid4(), uuid4()
    index = _FakeIndex(watched=[a], starred=[b], fail={"watched"})

    with caplog.at_level(logging.WARNING, logger="src.services.enrichment"):
        result = await ResultEnricher(index).enrich(uuid4(), [a, b])

    assert result.watched == frozenset()
    assert result.starred == frozenset({b})
    assert "Failed getting watched repository ids" in caplog.text


async def test_both_failures_still_complete():
    a = uuid4()
    index = _FakeIndex(fail={"watched", "starred"})

    result = await ResultEnricher(index).enrich(uuid4(), [a])

    assert result == RepoRelationships()


async def test_failed_lookup_does_not_cancel_sibling():
    async def stars_finish_late(kind, index):
        if kind == "starred":
            await asyncio.sleep(0.01)

    a = uuid4()
    index = _FakeIndex(starred=[a], fail={"watched"}, gate=stars_finish_late)

    result = await ResultEnricher(index).enrich(uuid4(), [a])

    assert result.starred == frozenset({a})


async def test_empty_page_skips_lookups():
    index = _FakeIndex()

    result = await ResultEnricher(index).enrich(uuid4(), [])

    assert result == RepoRelationships()
    assert index.calls == []


async def test_ids_outside_the_page_are_dropped():
    on_page, foreign = uuid4(), uuid4()
    index = _FakeIndex(watched=[on_page, foreign], starred=[foreign])

    result = await ResultEnricher(index).enrich(uuid4(), [on_page])

    assert result.watched == frozenset({on_page})
    assert result.starred == frozenset()


async def test_session_index_reads_database(session_maker, build):
    from src.db.models import WatchMode

    org = await build.org("acme")
    viewer = await build.user("vera")
    watched = await build.repo(org, "watched")
    ignored = await build.repo(org, "ignored")
    starred = await build.repo(org, "starred")
    await build.watch(viewer, watched)
    await build.watch(viewer, ignored, mode=WatchMode.DONT)
    await build.star(viewer, starred)

    enricher = ResultEnricher(SessionRelationshipIndex(session_maker))
    result = await enricher.enrich(viewer.id, [watched.id, ignored.id, starred.id])

    assert result.watched == frozenset({watched.id})
    assert result.starred == frozenset({starred.id})
