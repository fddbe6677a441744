"""Tool implementations and the tool-invocation boundary."""
import logging
from collections import defaultdict
from datetime import timedelta
from typing import Any, Awaitable, Callable, Optional

from .errors import UnrecognizedOperation
from .models import TimeEntry, ToolResult, format_hours
from .services import Services

logger = logging.getLogger(__name__)

DEFAULT_RECENT_DAYS = 7


def _entry_line(entry: TimeEntry) -> str:
    return f"• {format_hours(entry.hours)}h - {entry.project.name}: {entry.label}"


async def add_time_entry(
    services: Services,
    description: str,
    project: Optional[str] = None,
    date: Optional[str] = None,
) -> str:
    created = await services.builder.build(description, project, date)
    return (
        f"✅ Added {format_hours(created.hours)}h to {created.project_name} - {created.task_name}\n"
        f"Date: {created.spent_date.isoformat()}\n"
        f"Notes: {created.notes}\n"
        f"Entry ID: {created.id}"
    )


async def list_recent_entries(services: Services, days: Optional[int] = None) -> str:
    days = max(1, int(days)) if days else DEFAULT_RECENT_DAYS
    today = services.today()
    entries = await services.harvest.fetch_time_entries(today - timedelta(days=days), today)

    by_date: dict = defaultdict(list)
    for entry in entries:
        by_date[entry.spent_date].append(entry)

    output = [f"📊 Time entries for the last {days} days:", ""]
    for spent_date in sorted(by_date, reverse=True):
        day_entries = by_date[spent_date]
        total = sum(e.hours for e in day_entries)
        output.append(
            f"**{spent_date.strftime('%A, %B')} {spent_date.day}** ({format_hours(total)}h total)"
        )
        output.extend(f"  {_entry_line(e)}" for e in day_entries)
        output.append("")
    if not by_date:
        output.append("No time entries found.")
    return "\n".join(output)


async def get_today_total(services: Services) -> str:
    today = services.today()
    entries = await services.harvest.fetch_time_entries(today, today)
    total = sum(e.hours for e in entries)

    output = [f"📅 Today's time tracking ({today.isoformat()}):", "", f"Total: {format_hours(total)} hours", ""]
    if entries:
        output.append("Entries:")
        output.extend(_entry_line(e) for e in entries)
    else:
        output.append("No entries logged yet today.")
    return "\n".join(output)


TOOLS: dict[str, Callable[..., Awaitable[str]]] = {
    "add_time_entry": add_time_entry,
    "list_recent_entries": list_recent_entries,
    "get_today_total": get_today_total,
}


async def call_tool(services: Services, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
    """Run a tool by name. Failures become an error result instead of an
    exception; only an unknown tool name raises."""
    handler = TOOLS.get(name)
    if handler is None:
        raise UnrecognizedOperation("tool", name)
    try:
        text = await handler(services, **(arguments or {}))
    except Exception as e:
        logger.exception("Tool %s failed", name)
        return ToolResult(text=f"❌ Error: {e}", is_error=True)
    return ToolResult(text=text)
