"""Compose and submit Harvest time entries from natural-language descriptions."""
import logging
from datetime import date
from typing import Callable, Optional

from .errors import EntryCreationFailed, NotFound
from .harvest import HarvestAPI
from .interpreter import interpret, resolve_date_text
from .models import CreatedEntry, TimeEntryRequest
from .resolver import EntityResolver

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_HINT = "default"
DEFAULT_TASK_HINT = "general"
ENTRY_TASK_KEYWORDS = ["meeting", "development", "review", "planning", "design", "internal"]


def task_hint_for(description: str) -> str:
    lower = description.lower()
    for keyword in ENTRY_TASK_KEYWORDS:
        if keyword in lower:
            return keyword
    return DEFAULT_TASK_HINT


class EntryBuilder:
    def __init__(
        self,
        harvest: HarvestAPI,
        resolver: EntityResolver,
        today: Callable[[], date] = date.today,
    ):
        self.harvest = harvest
        self.resolver = resolver
        self.today = today

    async def compose(
        self,
        description: str,
        project: Optional[str] = None,
        date_text: Optional[str] = None,
    ) -> tuple[TimeEntryRequest, str, str]:
        """Resolve everything needed for an entry without submitting it.

        Returns the request body plus the resolved project and task names.
        """
        today = self.today()
        hints = interpret(description, today)
        spent_date = resolve_date_text(date_text, today) if date_text else hints.spent_date
        project_hint = project or hints.project_hint or DEFAULT_PROJECT_HINT
        task_hint = task_hint_for(description)

        try:
            resolved_project = await self.resolver.resolve_project(project_hint)
        except NotFound as e:
            raise EntryCreationFailed("project", project_hint) from e
        try:
            resolved_task = await self.resolver.resolve_task(task_hint)
        except NotFound as e:
            raise EntryCreationFailed("task", task_hint) from e

        request = TimeEntryRequest(
            project_id=resolved_project.id,
            task_id=resolved_task.id,
            spent_date=spent_date,
            hours=hints.hours,
            notes=description,
        )
        return request, resolved_project.name, resolved_task.name

    async def build(
        self,
        description: str,
        project: Optional[str] = None,
        date_text: Optional[str] = None,
    ) -> CreatedEntry:
        request, project_name, task_name = await self.compose(description, project, date_text)
        logger.info(
            "Creating %sh entry on %s for %s / %s",
            request.hours, request.spent_date, project_name, task_name,
        )
        data = await self.harvest.create_time_entry(request)
        return CreatedEntry(
            id=data["id"],
            project_name=project_name,
            task_name=task_name,
            spent_date=request.spent_date,
            hours=request.hours,
            notes=request.notes,
        )
