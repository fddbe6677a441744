"""Tests for composing and submitting time entries."""

import pytest

from mcp_server.entries import task_hint_for
from mcp_server.errors import EntryCreationFailed, RemoteUnavailable
from mcp_server.services import Services


class TestTaskHint:
    def test_keyword_priority(self):
        assert task_hint_for("design review") == "review"

    def test_default(self):
        assert task_hint_for("answered emails") == "general"


@pytest.mark.asyncio
async def test_build_from_description(services, fake_harvest, today):
    created = await services.builder.build("2h development on API docs")

    assert created.hours == 2.0
    assert created.spent_date == today
    assert created.project_name == "API Platform"
    assert created.task_name == "Development"
    assert created.id == 9001
    assert fake_harvest.created == [{
        "project_id": 2,
        "task_id": 101,
        "spent_date": today.isoformat(),
        "hours": 2.0,
        "notes": "2h development on API docs",
    }]


@pytest.mark.asyncio
async def test_explicit_arguments_override_interpretation(services, fake_harvest):
    created = await services.builder.build("30m meeting about the API today", project="GC", date_text="2025-06-02")

    assert created.project_name == "Good Code Website"
    assert created.task_name == "Meetings"
    assert created.hours == 0.5
    assert fake_harvest.created[0]["spent_date"] == "2025-06-02"


@pytest.mark.asyncio
async def test_missing_project_hint_falls_back(services):
    created = await services.builder.build("45 minutes of email")
    assert created.project_name == "Internal"
    assert created.task_name == "Project Management"


@pytest.mark.asyncio
async def test_compose_does_not_submit(services, fake_harvest):
    request, project, task = await services.builder.compose("1h planning", date_text="yesterday")
    assert (project, task) == ("Internal", "Project Management")
    assert request.spent_date.isoformat() == "2025-06-03"
    assert fake_harvest.paths("POST") == []


@pytest.mark.asyncio
@pytest.mark.parametrize("empty,entity", [("projects", "project"), ("tasks", "task")])
async def test_empty_catalog_fails_entry_creation(harvest_client, fake_harvest, today, empty, entity):
    setattr(fake_harvest, empty, [])
    services = Services.create(harvest_client, today=lambda: today)

    with pytest.raises(EntryCreationFailed) as exc:
        await services.builder.build("1h development")
    assert exc.value.entity == entity
    assert fake_harvest.created == []


@pytest.mark.asyncio
async def test_remote_write_failure_is_not_retried(services, fake_harvest):
    await services.catalog.projects()
    await services.catalog.tasks()
    fake_harvest.fail_status = 500

    with pytest.raises(RemoteUnavailable) as exc:
        await services.builder.build("1h development")
    assert exc.value.status_code == 500
    assert len(fake_harvest.paths("POST")) == 1

