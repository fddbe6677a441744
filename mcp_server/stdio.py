"""Serve the Harvest tools and prompts over the MCP stdio transport."""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from mcp.server.fastmcp import Context, FastMCP
from mcp.server.fastmcp.exceptions import ToolError

from .config import LOG_LEVEL, missing_credentials
from .operations import call_tool
from .prompts import handle_prompt
from .services import Services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[Services]:
    services = Services.create()
    try:
        yield services
    finally:
        await services.aclose()


mcp = FastMCP("harvest-time-tracker", lifespan=lifespan)


async def _run(ctx: Context, name: str, **arguments) -> str:
    services: Services = ctx.request_context.lifespan_context
    result = await call_tool(services, name, {k: v for k, v in arguments.items() if v is not None})
    if result.is_error:
        raise ToolError(result.text)
    return result.text


@mcp.tool()
async def add_time_entry(
    description: str,
    ctx: Context,
    project: Optional[str] = None,
    date: Optional[str] = None,
) -> str:
    """Add a time entry to Harvest. Supports natural language like
    "meet with Austin for 30m" or "2h development on API"."""
    return await _run(ctx, "add_time_entry", description=description, project=project, date=date)


@mcp.tool()
async def list_recent_entries(ctx: Context, days: Optional[int] = None) -> str:
    """List recent time entries from Harvest (default: last 7 days)."""
    return await _run(ctx, "list_recent_entries", days=days)


@mcp.tool()
async def get_today_total(ctx: Context) -> str:
    """Get total hours logged today."""
    return await _run(ctx, "get_today_total")


@mcp.prompt()
def discover() -> str:
    """Discover all capabilities of the Harvest time tracker - start here!"""
    return handle_prompt("discover")


@mcp.prompt()
def guide() -> str:
    """Get personalized time tracking guidance based on your current status"""
    return handle_prompt("guide")


@mcp.prompt()
def smart_add(description: str) -> str:
    """Add time entries with intelligent parsing and suggestions"""
    return handle_prompt("smart_add", {"description": description})


@mcp.prompt()
def weekly_review(weeks_back: Optional[str] = None) -> str:
    """Analyze your week and identify gaps in time tracking"""
    return handle_prompt("weekly_review", {"weeks_back": weeks_back})


@mcp.prompt()
def quick_log(type: str, duration: Optional[str] = None) -> str:
    """Quick commands for common time entries (meetings, breaks, admin)"""
    return handle_prompt("quick_log", {"type": type, "duration": duration})


def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    missing = missing_credentials()
    if missing:
        raise SystemExit(f"Missing required environment variables: {', '.join(missing)}")
    logger.info("Harvest MCP server running on stdio")
    mcp.run()


if __name__ == "__main__":
    main()
