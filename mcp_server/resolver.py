"""Map free-text hints onto cached Harvest projects and tasks."""
import logging
from typing import Optional

from .catalog import CatalogCache
from .errors import NotFound
from .models import Project, Task

logger = logging.getLogger(__name__)

# canonical task family -> phrases that imply it, checked in this order
TASK_ALIASES: list[tuple[str, tuple[str, ...]]] = [
    ("meeting", ("meeting", "meetings", "standup", "sync")),
    ("development", ("development", "coding", "programming", "dev")),
    ("design", ("design", "ui", "ux")),
    ("review", ("review", "code review", "pr review")),
    ("planning", ("planning", "estimation", "grooming")),
    ("internal", ("internal", "admin", "administrative")),
]


def _exact(entities, term: str):
    return next((e for e in entities if e.name.lower() == term), None)


def _contains(entities, term: str):
    return next((e for e in entities if term in e.name.lower()), None)


def _alias_family(term: str) -> Optional[str]:
    for family, aliases in TASK_ALIASES:
        if any(alias in term for alias in aliases):
            return family
    return None


class EntityResolver:
    """Tiered matching: exact name, alias family (tasks), substring, code
    (projects), then the first cached entity.

    Falling back to the first entity means a weak hint never blocks entry
    creation, at the price of possibly attributing time to the wrong project.
    Only an empty catalog raises ``NotFound``.
    """

    def __init__(self, catalog: CatalogCache):
        self.catalog = catalog

    async def resolve_project(self, hint: Optional[str]) -> Project:
        projects = await self.catalog.projects()
        if not projects:
            raise NotFound("project", hint)
        term = (hint or "").strip().lower()

        project = _exact(projects, term)
        if project:
            logger.debug("Project '%s' matched exactly: %s", hint, project.name)
            return project
        project = _contains(projects, term)
        if project:
            logger.debug("Project '%s' matched by name: %s", hint, project.name)
            return project
        project = next((p for p in projects if p.code and p.code.lower() == term), None)
        if project:
            logger.debug("Project '%s' matched by code: %s", hint, project.code)
            return project

        logger.info("No project matches '%s', falling back to %s", hint, projects[0].name)
        return projects[0]

    async def resolve_task(self, hint: Optional[str]) -> Task:
        tasks = await self.catalog.tasks()
        if not tasks:
            raise NotFound("task", hint)
        term = (hint or "").strip().lower()

        task = _exact(tasks, term)
        if task:
            return task
        family = _alias_family(term)
        if family:
            task = _contains(tasks, family)
            if task:
                logger.debug("Task '%s' matched via '%s' family: %s", hint, family, task.name)
                return task
        task = _contains(tasks, term)
        if task:
            return task

        logger.info("No task matches '%s', falling back to %s", hint, tasks[0].name)
        return tasks[0]
