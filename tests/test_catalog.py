"""Tests for the catalog cache."""

import pytest

from mcp_server.catalog import CatalogCache
from mcp_server.errors import RemoteUnavailable

from conftest import FakeClock


class CountingFetch:
    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        result = self.results[min(self.calls, len(self.results)) - 1]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.mark.asyncio
async def test_fresh_reads_do_not_refetch(projects, tasks):
    clock = FakeClock()
    fetch_projects = CountingFetch(projects)
    cache = CatalogCache(fetch_projects, CountingFetch(tasks), ttl=3600, clock=clock)

    assert await cache.projects() == projects
    clock.advance(3599)
    assert await cache.projects() == projects
    assert fetch_projects.calls == 1


@pytest.mark.asyncio
async def test_refetch_once_window_has_elapsed(projects, tasks):
    clock = FakeClock()
    newer = projects[1:]
    fetch_projects = CountingFetch(projects, newer)
    cache = CatalogCache(fetch_projects, CountingFetch(tasks), ttl=3600, clock=clock)

    await cache.projects()
    clock.advance(3600)
    assert await cache.projects() == newer
    assert fetch_projects.calls == 2


@pytest.mark.asyncio
async def test_empty_list_is_refetched(projects, tasks):
    fetch_projects = CountingFetch([], projects)
    cache = CatalogCache(fetch_projects, CountingFetch(tasks), clock=FakeClock())

    assert await cache.projects() == []
    assert await cache.projects() == projects
    assert fetch_projects.calls == 2


@pytest.mark.asyncio
async def test_failure_propagates_instead_of_serving_stale_data(projects, tasks):
    clock = FakeClock()
    fetch_projects = CountingFetch(projects, RemoteUnavailable("Harvest down", 503))
    cache = CatalogCache(fetch_projects, CountingFetch(tasks), ttl=60, clock=clock)

    await cache.projects()
    clock.advance(61)
    with pytest.raises(RemoteUnavailable):
        await cache.projects()


@pytest.mark.asyncio
async def test_projects_and_tasks_are_cached_independently(projects, tasks):
    fetch_projects = CountingFetch(projects)
    fetch_tasks = CountingFetch(tasks)
    cache = CatalogCache(fetch_projects, fetch_tasks, clock=FakeClock())

    await cache.tasks()
    await cache.tasks()
    assert fetch_tasks.calls == 1
    assert fetch_projects.calls == 0


@pytest.mark.asyncio
async def test_callers_cannot_mutate_the_cached_list(projects, tasks):
    cache = CatalogCache(CountingFetch(projects), CountingFetch(tasks), clock=FakeClock())

    first = await cache.projects()
    first.clear()
    assert await cache.projects() == projects


@pytest.mark.asyncio
async def test_invalidate_forces_refetch(projects, tasks):
    fetch_projects = CountingFetch(projects)
    cache = CatalogCache(fetch_projects, CountingFetch(tasks), clock=FakeClock())

    await cache.projects()
    cache.invalidate()
    await cache.projects()
    assert fetch_projects.calls == 2
