"""Tests for project and task resolution."""

import pytest

from mcp_server.catalog import CatalogCache
from mcp_server.errors import NotFound
from mcp_server.models import Project, Task
from mcp_server.resolver import EntityResolver

from conftest import FakeClock


def make_resolver(projects, tasks):
    async def fetch_projects():
        return projects

    async def fetch_tasks():
        return tasks

    return EntityResolver(CatalogCache(fetch_projects, fetch_tasks, clock=FakeClock()))


class TestResolveProject:
    @pytest.mark.asyncio
    async def test_empty_catalog_is_not_found(self, tasks):
        resolver = make_resolver([], tasks)
        with pytest.raises(NotFound) as exc:
            await resolver.resolve_project("API")
        assert exc.value.entity == "project"

    @pytest.mark.asyncio
    async def test_exact_name_beats_earlier_substring(self, tasks):
        projects = [
            Project(id=1, name="API Docs"),
            Project(id=2, name="API"),
        ]
        resolver = make_resolver(projects, tasks)
        assert (await resolver.resolve_project("api")).id == 2

    @pytest.mark.asyncio
    async def test_substring(self, projects, tasks):
        resolver = make_resolver(projects, tasks)
        assert (await resolver.resolve_project("API")).name == "API Platform"

    @pytest.mark.asyncio
    async def test_code(self, projects, tasks):
        resolver = make_resolver(projects, tasks)
        assert (await resolver.resolve_project("gc")).name == "Good Code Website"

    @pytest.mark.asyncio
    async def test_name_tiers_come_before_code(self, tasks):
        projects = [
            Project(id=1, name="Billing", code="WEB"),
            Project(id=2, name="Web Store", code="WS"),
        ]
        resolver = make_resolver(projects, tasks)
        assert (await resolver.resolve_project("web")).id == 2

    @pytest.mark.asyncio
    async def test_unmatched_hint_falls_back_to_first(self, projects, tasks):
        resolver = make_resolver(projects, tasks)
        assert (await resolver.resolve_project("default")).name == "Internal"


class TestResolveTask:
    @pytest.mark.asyncio
    async def test_empty_catalog_is_not_found(self, projects):
        resolver = make_resolver(projects, [])
        with pytest.raises(NotFound) as exc:
            await resolver.resolve_task("meeting")
        assert exc.value.entity == "task"

    @pytest.mark.asyncio
    async def test_alias_maps_to_family(self, projects, tasks):
        resolver = make_resolver(projects, tasks)
        assert (await resolver.resolve_task("standup")).name == "Meetings"
        assert (await resolver.resolve_task("coding")).name == "Development"

    @pytest.mark.asyncio
    async def test_exact_name_beats_alias(self, projects):
        tasks = [Task(id=1, name="Team Meeting"), Task(id=2, name="Meeting")]
        resolver = make_resolver(projects, tasks)
        assert (await resolver.resolve_task("meeting")).id == 2

    @pytest.mark.asyncio
    async def test_substring(self, projects, tasks):
        resolver = make_resolver(projects, tasks)
        assert (await resolver.resolve_task("management")).name == "Project Management"

    @pytest.mark.asyncio
    async def test_unmatched_hint_falls_back_to_first(self, projects, tasks):
        resolver = make_resolver(projects, tasks)
        assert (await resolver.resolve_task("general")).name == "Project Management"
