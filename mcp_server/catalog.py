"""Time-limited cache of the active Harvest projects and tasks."""
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, TypeVar

from .config import CACHE_TTL
from .models import Project, Task

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class _Snapshot(Generic[T]):
    items: tuple[T, ...]
    fetched_at: float


class _CachedList(Generic[T]):
    def __init__(self, name: str, fetch: Callable[[], Awaitable[list[T]]]):
        self.name = name
        self.fetch = fetch
        self.snapshot: _Snapshot[T] | None = None

    def fresh(self, now: float, ttl: float) -> bool:
        snap = self.snapshot
        return bool(snap and snap.items) and now - snap.fetched_at < ttl


class CatalogCache:
    """Memoizes the project and task lists for ``ttl`` seconds.

    A stale or empty list is refetched before the read returns. Fetch errors
    propagate and the stale snapshot is never served in their place. Each
    successful fetch replaces its snapshot in one assignment, so concurrent
    refreshes can only cause a redundant fetch, never a half-written list.
    """

    def __init__(
        self,
        fetch_projects: Callable[[], Awaitable[list[Project]]],
        fetch_tasks: Callable[[], Awaitable[list[Task]]],
        ttl: float = CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self.clock = clock
        self._projects = _CachedList("projects", fetch_projects)
        self._tasks = _CachedList("tasks", fetch_tasks)

    async def _read(self, cached: _CachedList[T]) -> list[T]:
        if cached.fresh(self.clock(), self.ttl):
            return list(cached.snapshot.items)
        logger.debug("Refreshing %s catalog", cached.name)
        items = tuple(await cached.fetch())
        cached.snapshot = _Snapshot(items=items, fetched_at=self.clock())
        logger.info("Cached %s active %s", len(items), cached.name)
        return list(items)

    async def projects(self) -> list[Project]:
        return await self._read(self._projects)

    async def tasks(self) -> list[Task]:
        return await self._read(self._tasks)

    def invalidate(self) -> None:
        self._projects.snapshot = None
        self._tasks.snapshot = None
