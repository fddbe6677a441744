"""Tests for the Harvest API wrapper."""

from datetime import date

import httpx
import pytest

from mcp_server.errors import RemoteUnavailable
from mcp_server.harvest import HarvestAPI
from mcp_server.models import TimeEntryRequest

from conftest import BASE_URL, FakeHarvest, entry_row, project_rows


@pytest.mark.asyncio
async def test_pagination_collects_every_page():
    rows = project_rows() + [
        {"id": i, "name": f"Project {i}", "is_active": True} for i in range(4, 8)
    ]
    fake = FakeHarvest(projects=rows)
    api = HarvestAPI(httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(fake)), page_size=3)

    projects = await api.fetch_projects()

    assert [p.id for p in projects] == [1, 2, 3, 4, 5, 6, 7]
    assert [r.url.params["page"] for r in fake.requests] == ["1", "2", "3"]
    assert all(r.url.params["is_active"] == "true" for r in fake.requests)


@pytest.mark.asyncio
async def test_project_snapshot_fields(harvest_api):
    project = (await harvest_api.fetch_projects())[1]
    assert project.code == "API"
    assert project.client.name == "Acme"


@pytest.mark.asyncio
async def test_time_entries_are_requested_for_range(harvest_api, fake_harvest):
    fake_harvest.entries = [entry_row(1, "2025-06-03", 1.0, "Docs")]

    entries = await harvest_api.fetch_time_entries(date(2025, 6, 3), date(2025, 6, 3))

    assert entries[0].spent_date == date(2025, 6, 3)
    assert entries[0].project.code == "API"
    params = fake_harvest.requests[0].url.params
    assert (params["from"], params["to"]) == ("2025-06-03", "2025-06-03")


@pytest.mark.asyncio
async def test_create_time_entry_posts_body(harvest_api, fake_harvest):
    request = TimeEntryRequest(project_id=2, task_id=101, spent_date=date(2025, 6, 4), hours=1.5, notes="Docs")

    data = await harvest_api.create_time_entry(request)

    assert data["id"] == 9001
    assert fake_harvest.created[0]["spent_date"] == "2025-06-04"


@pytest.mark.asyncio
async def test_http_error_is_remote_unavailable(harvest_api, fake_harvest):
    fake_harvest.fail_status = 403
    with pytest.raises(RemoteUnavailable) as exc:
        await harvest_api.fetch_tasks()
    assert exc.value.status_code == 403
    assert "Harvest is down" in str(exc.value)


@pytest.mark.asyncio
async def test_network_error_is_remote_unavailable():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    api = HarvestAPI(httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(refuse)))
    with pytest.raises(RemoteUnavailable) as exc:
        await api.get_current_user()
    assert exc.value.status_code is None
