"""Pytest configuration and fixtures."""

import json
from datetime import date

import httpx
import pytest

from mcp_server.harvest import HarvestAPI
from mcp_server.models import Project, Task
from mcp_server.services import Services

TODAY = date(2025, 6, 4)  # a Wednesday
BASE_URL = "https://harvest.test/api/v2"


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeHarvest:
    """In-memory stand-in for the Harvest REST API, used as an httpx transport handler."""

    def __init__(self, projects=None, tasks=None, entries=None):
        self.projects = list(projects or [])
        self.tasks = list(tasks or [])
        self.entries = list(entries or [])
        self.requests: list[httpx.Request] = []
        self.created: list[dict] = []
        self.fail_status: int | None = None
        self.next_id = 9001

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_status:
            return httpx.Response(self.fail_status, text="Harvest is down")
        path = request.url.path
        if path.endswith("/projects"):
            return self._page("projects", self.projects, request)
        if path.endswith("/tasks"):
            return self._page("tasks", self.tasks, request)
        if path.endswith("/time_entries") and request.method == "POST":
            body = json.loads(request.content)
            self.created.append(body)
            entry_id, self.next_id = self.next_id, self.next_id + 1
            return httpx.Response(201, json={"id": entry_id, **body})
        if path.endswith("/time_entries"):
            start = request.url.params.get("from")
            end = request.url.params.get("to")
            rows = [e for e in self.entries if start <= e["spent_date"] <= end]
            return self._page("time_entries", rows, request)
        if path.endswith("/users/me"):
            return httpx.Response(200, json={"id": 1, "first_name": "Ada", "last_name": "Lovelace"})
        return httpx.Response(404, json={"error": "not_found"})

    def _page(self, key: str, rows: list, request: httpx.Request) -> httpx.Response:
        per_page = int(request.url.params.get("per_page", 100))
        page = int(request.url.params.get("page", 1))
        chunk = rows[(page - 1) * per_page: page * per_page]
        next_page = page + 1 if page * per_page < len(rows) else None
        return httpx.Response(200, json={key: chunk, "per_page": per_page, "page": page, "next_page": next_page})

    def paths(self, method: str = "GET") -> list[str]:
        return [r.url.path for r in self.requests if r.method == method]


def project_rows():
    return [
        {"id": 1, "name": "Internal", "code": "INT", "is_active": True, "client": {"id": 10, "name": "Us"}},
        {"id": 2, "name": "API Platform", "code": "API", "is_active": True, "client": {"id": 11, "name": "Acme"}},
        {"id": 3, "name": "Good Code Website", "code": "GC", "is_active": True, "client": {"id": 12, "name": "Good Code"}},
    ]


def task_rows():
    return [
        {"id": 100, "name": "Project Management", "is_active": True},
        {"id": 101, "name": "Development", "is_active": True},
        {"id": 102, "name": "Meetings", "is_active": True},
        {"id": 103, "name": "Design", "is_active": True},
        {"id": 104, "name": "Code Review", "is_active": True},
    ]


def entry_row(entry_id, spent_date, hours, notes=None, project=(2, "API Platform", "API"), task=(101, "Development")):
    return {
        "id": entry_id,
        "spent_date": spent_date,
        "hours": hours,
        "notes": notes,
        "project": {"id": project[0], "name": project[1], "code": project[2]},
        "task": {"id": task[0], "name": task[1]},
    }


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def projects():
    return [Project.model_validate(row) for row in project_rows()]


@pytest.fixture
def tasks():
    return [Task.model_validate(row) for row in task_rows()]


@pytest.fixture
def fake_harvest():
    return FakeHarvest(project_rows(), task_rows())


@pytest.fixture
def harvest_client(fake_harvest):
    return httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(fake_harvest))


@pytest.fixture
def harvest_api(harvest_client):
    return HarvestAPI(harvest_client)


@pytest.fixture
def services(harvest_client, today, clock):
    return Services.create(harvest_client, today=lambda: today, clock=clock)
