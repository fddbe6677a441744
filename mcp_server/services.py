"""Per-process service container shared by every protocol surface."""
from dataclasses import dataclass
from datetime import date
from typing import Callable

import httpx
from fastapi import HTTPException, Request

from .catalog import CatalogCache
from .config import missing_credentials
from .entries import EntryBuilder
from .harvest import HarvestAPI, make_client
from .resolver import EntityResolver


@dataclass
class Services:
    harvest: HarvestAPI
    catalog: CatalogCache
    resolver: EntityResolver
    builder: EntryBuilder
    today: Callable[[], date] = date.today

    @classmethod
    def create(
        cls,
        client: httpx.AsyncClient | None = None,
        today: Callable[[], date] = date.today,
        **cache_options,
    ) -> "Services":
        harvest = HarvestAPI(client or make_client())
        catalog = CatalogCache(harvest.fetch_projects, harvest.fetch_tasks, **cache_options)
        resolver = EntityResolver(catalog)
        builder = EntryBuilder(harvest, resolver, today=today)
        return cls(harvest=harvest, catalog=catalog, resolver=resolver, builder=builder, today=today)

    async def aclose(self) -> None:
        await self.harvest.client.aclose()


def get_services(request: Request) -> Services:
    """FastAPI dependency returning the container built at application start-up."""
    missing = missing_credentials()
    if missing:
        raise HTTPException(500, f"{', '.join(missing)} not set")
    return request.app.state.services
