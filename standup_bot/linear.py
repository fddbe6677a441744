"""Read-only Linear GraphQL queries for the daily digest."""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Optional

import httpx

from mcp_server.config import HTTP_TIMEOUT, LINEAR_URL

logger = logging.getLogger(__name__)

ISSUE_FIELDS = """
    id
    identifier
    title
    priority
    completedAt
    project { name }
"""

VIEWER_QUERY = "query { viewer { id name } }"

ISSUES_QUERY = """
query Issues($filter: IssueFilter, $first: Int) {
  issues(filter: $filter, first: $first) {
    nodes { %s }
  }
}
""" % ISSUE_FIELDS

COMMENTS_QUERY = """
query Comments($filter: CommentFilter, $first: Int) {
  comments(filter: $filter, first: $first, includeArchived: false) {
    nodes { issue { %s } }
  }
}
""" % ISSUE_FIELDS


class TrackerError(Exception):
    pass


@dataclass(frozen=True)
class Issue:
    id: str
    identifier: str
    title: str
    project_name: Optional[str] = None
    priority: int = 0
    completed: bool = False

    @classmethod
    def from_node(cls, node: dict) -> "Issue":
        return cls(
            id=node["id"],
            identifier=node.get("identifier", ""),
            title=node.get("title", ""),
            project_name=(node.get("project") or {}).get("name"),
            priority=node.get("priority") or 0,
            completed=bool(node.get("completedAt")),
        )


@dataclass
class TrackerActivity:
    worked_on: list[Issue] = field(default_factory=list)
    completed: list[Issue] = field(default_factory=list)


def day_bounds(day: date, tz=timezone.utc) -> tuple[str, str]:
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day, time.max, tzinfo=tz)
    return start.isoformat(), end.isoformat()


class LinearClient:
    def __init__(self, client: httpx.AsyncClient, url: str = LINEAR_URL, page_size: int = 100):
        self.client = client
        self.url = url
        self.page_size = page_size
        self._viewer: Optional[dict] = None

    @classmethod
    def from_api_key(cls, api_key: str) -> "LinearClient":
        return cls(
            httpx.AsyncClient(
                headers={"Authorization": api_key, "Content-Type": "application/json"},
                timeout=HTTP_TIMEOUT,
            )
        )

    async def _query(self, query: str, variables: Optional[dict] = None) -> dict:
        try:
            r = await self.client.post(self.url, json={"query": query, "variables": variables or {}})
            r.raise_for_status()
        except httpx.HTTPError as e:
            raise TrackerError(f"Linear request failed: {e}") from e
        try:
            payload = r.json()
        except ValueError as e:
            raise TrackerError(f"Linear returned a non-JSON response: {e}") from e
        if not isinstance(payload, dict):
            raise TrackerError("Linear returned an unexpected response")
        if payload.get("errors"):
            raise TrackerError(f"Linear query failed: {payload['errors'][0].get('message')}")
        return payload.get("data") or {}

    async def _nodes(self, query: str, key: str, variables: dict) -> list[dict]:
        data = await self._query(query, variables)
        try:
            return list(data[key]["nodes"])
        except (KeyError, TypeError) as e:
            raise TrackerError(f"Linear response is missing {key}") from e

    async def viewer(self) -> dict:
        if self._viewer is None:
            viewer = (await self._query(VIEWER_QUERY)).get("viewer")
            if not isinstance(viewer, dict) or "id" not in viewer:
                raise TrackerError("Linear response is missing viewer")
            self._viewer = viewer
        return self._viewer

    async def issues(self, issue_filter: dict) -> list[Issue]:
        nodes = await self._nodes(ISSUES_QUERY, "issues", {"filter": issue_filter, "first": self.page_size})
        try:
            return [Issue.from_node(n) for n in nodes]
        except (KeyError, TypeError, AttributeError) as e:
            raise TrackerError(f"Malformed Linear issue: {e}") from e

    async def commented_issues(self, comment_filter: dict) -> list[Issue]:
        nodes = await self._nodes(COMMENTS_QUERY, "comments", {"filter": comment_filter, "first": self.page_size})
        try:
            return [Issue.from_node(n["issue"]) for n in nodes if n.get("issue")]
        except (KeyError, TypeError, AttributeError) as e:
            raise TrackerError(f"Malformed Linear comment: {e}") from e

    async def activity(self, day: date, tz=timezone.utc) -> TrackerActivity:
        """Issues completed on ``day`` and issues updated or commented on but
        still open, all scoped to the current user."""
        me = (await self.viewer())["id"]
        start, end = day_bounds(day, tz)
        window = {"gte": start, "lte": end}
        mine = {"id": {"eq": me}}

        completed = await self.issues({"completedAt": window, "assignee": mine})
        updated = await self.issues(
            {"updatedAt": window, "assignee": mine, "completedAt": {"null": True}}
        )
        commented = await self.commented_issues({"createdAt": window, "user": mine})

        worked_on: dict[str, Issue] = {}
        for issue in updated + [i for i in commented if not i.completed]:
            worked_on.setdefault(issue.id, issue)
        return TrackerActivity(worked_on=list(worked_on.values()), completed=completed)

    async def open_assigned(self) -> list[Issue]:
        """Started or unstarted issues assigned to the current user, most urgent first."""
        me = (await self.viewer())["id"]
        issues = await self.issues(
            {"assignee": {"id": {"eq": me}}, "state": {"type": {"in": ["started", "unstarted"]}}}
        )
        # Linear priority: 1 urgent .. 4 low, 0 none
        return sorted(issues, key=lambda i: (i.priority == 0, i.priority))

    async def aclose(self) -> None:
        await self.client.aclose()
