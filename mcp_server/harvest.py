"""Utility functions for interacting with the Harvest v2 API."""
import logging
from datetime import date

import httpx

from .config import BASE_URL, HEADERS, HTTP_TIMEOUT, PAGE_SIZE
from .errors import RemoteUnavailable
from .models import Project, Task, TimeEntry, TimeEntryRequest

logger = logging.getLogger(__name__)


def make_client(headers: dict | None = None, **kwargs) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=BASE_URL,
        headers=headers if headers is not None else HEADERS,
        timeout=HTTP_TIMEOUT,
        **kwargs,
    )


class HarvestAPI:
    """Thin async wrapper around the Harvest endpoints this project uses.

    Every transport or HTTP failure is reported as ``RemoteUnavailable``; no
    call is retried.
    """

    def __init__(self, client: httpx.AsyncClient, page_size: int = PAGE_SIZE):
        self.client = client
        self.page_size = page_size

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            r = await self.client.request(method, path, **kwargs)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise RemoteUnavailable(
                f"Harvest {method} {path} failed with {status}: {e.response.text}",
                status_code=status,
            ) from e
        except httpx.RequestError as e:
            raise RemoteUnavailable(f"Harvest {method} {path} failed: {e}") from e
        return r.json() if r.content else {}

    async def _paginate(self, path: str, key: str, params: dict | None = None) -> list[dict]:
        """Collect every page of a list endpoint into a single list."""
        params = dict(params or {})
        params["per_page"] = self.page_size
        items: list[dict] = []
        page = 1
        while True:
            params["page"] = page
            data = await self._request("GET", path, params=params)
            batch = data.get(key, [])
            items.extend(batch)
            logger.debug("GET %s page %s returned %s %s", path, page, len(batch), key)
            next_page = data.get("next_page")
            if not next_page or len(batch) < self.page_size:
                break
            page = next_page
        return items

    async def fetch_projects(self) -> list[Project]:
        rows = await self._paginate("/projects", "projects", {"is_active": "true"})
        return [Project.model_validate(row) for row in rows]

    async def fetch_tasks(self) -> list[Task]:
        rows = await self._paginate("/tasks", "tasks", {"is_active": "true"})
        return [Task.model_validate(row) for row in rows]

    async def fetch_time_entries(self, start: date, end: date) -> list[TimeEntry]:
        rows = await self._paginate(
            "/time_entries",
            "time_entries",
            {"from": start.isoformat(), "to": end.isoformat()},
        )
        return [TimeEntry.model_validate(row) for row in rows]

    async def create_time_entry(self, entry: TimeEntryRequest) -> dict:
        return await self._request("POST", "/time_entries", json=entry.harvest_body())

    async def get_current_user(self) -> dict:
        return await self._request("GET", "/users/me")
