"""Merge Harvest time entries and Linear activity into a daily standup message."""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date, timezone, tzinfo
from typing import Optional

from mcp_server.harvest import HarvestAPI
from mcp_server.models import TimeEntry

from .linear import Issue, LinearClient, TrackerActivity, TrackerError

logger = logging.getLogger(__name__)

PROJECT_CODES = {
    "good code": "GC",
    "goodcode": "GC",
}

MAX_PLANS = 3
FALLBACK_PLANS = [
    "Continue with current sprint tasks",
    "Review and respond to PRs",
    "Team standup meeting",
]
NO_BLOCKERS = "No blockers"


def project_code(name: Optional[str], code: Optional[str] = None) -> str:
    if code:
        return code
    name = name or "Unknown"
    lower = name.lower()
    for known, mapped in PROJECT_CODES.items():
        if known in lower:
            return mapped
    words = name.split()
    if len(words) > 1:
        return "".join(w[0] for w in words).upper()
    return name[:3].upper()


def format_time_entry(entry: TimeEntry) -> str:
    code = project_code(entry.project.name, entry.project.code)
    task, notes = entry.task.name, entry.notes or ""
    if task and notes:
        description = f"{task}: {notes}"
    else:
        description = task or notes or "No description"
    return f"[{code}] {description}"


def format_issue(issue: Issue, action: str = "Worked on") -> str:
    code = project_code(issue.project_name or "Linear")
    return f"[{code}] {action} {issue.identifier}: {issue.title}"


def already_logged(issue: Issue, entries: list[TimeEntry]) -> bool:
    return any(
        e.notes and ((issue.identifier and issue.identifier in e.notes) or (issue.title and issue.title in e.notes))
        for e in entries
    )


def format_digest(
    entries: list[TimeEntry],
    activity: TrackerActivity,
    plans: list[str],
    blockers: str = "",
) -> str:
    done = [f"• {format_time_entry(e)}" for e in entries]
    done += [f"• {format_issue(i, 'Completed')}" for i in activity.completed]
    done += [f"• {format_issue(i)}" for i in activity.worked_on if not already_logged(i, entries)]
    done_text = "\n".join(done) or "• No activities recorded"
    today_text = "\n".join(f"• {p}" for p in plans) or "• To be determined"

    return (
        f"*What have you done since yesterday?*\n{done_text}\n\n"
        f"*What will you do today?*\n{today_text}\n\n"
        f"*Anything blocking your progress? Any vacation/etc coming up?*\n{blockers or NO_BLOCKERS}"
    )


@dataclass
class Digest:
    day: date
    entries: list[TimeEntry] = field(default_factory=list)
    activity: TrackerActivity = field(default_factory=TrackerActivity)
    plans: list[str] = field(default_factory=list)
    blockers: str = ""

    def render(self) -> str:
        return format_digest(self.entries, self.activity, self.plans, self.blockers)


class DigestAggregator:
    def __init__(self, harvest: HarvestAPI, tracker: Optional[LinearClient] = None, tz: Optional[tzinfo] = None):
        self.harvest = harvest
        self.tracker = tracker
        self.tz = tz

    async def tracker_activity(self, day: date) -> TrackerActivity:
        if self.tracker is None:
            logger.info("Linear API key not configured, skipping Linear integration")
            return TrackerActivity()
        try:
            return await self.tracker.activity(day, self.tz or timezone.utc)
        except TrackerError as e:
            logger.warning("Error fetching Linear activity: %s", e)
            return TrackerActivity()

    async def plans(self) -> list[str]:
        plans: list[str] = []
        if self.tracker is not None:
            try:
                issues = await self.tracker.open_assigned()
            except TrackerError as e:
                logger.warning("Error fetching today's Linear issues: %s", e)
                issues = []
            plans = [format_issue(i, "Work on") for i in issues[:MAX_PLANS]]
        return plans or list(FALLBACK_PLANS)

    async def collect(self, day: date) -> Digest:
        """Fetch ``day``'s time entries and tracker activity concurrently."""
        entries, activity = await asyncio.gather(
            self.harvest.fetch_time_entries(day, day),
            self.tracker_activity(day),
        )
        logger.info(
            "Found %s Harvest entries, %s completed and %s worked-on Linear issues",
            len(entries), len(activity.completed), len(activity.worked_on),
        )
        return Digest(day=day, entries=entries, activity=activity, plans=await self.plans())
