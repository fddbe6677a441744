"""Shared configuration for the Harvest MCP server and the standup bot."""
import os
from dotenv import load_dotenv

load_dotenv()

BASE_URL = os.getenv("HARVEST_BASE_URL", "https://api.harvestapp.com/api/v2")
ACCOUNT_ID = os.getenv("HARVEST_ACCOUNT_ID")
TOKEN = os.getenv("HARVEST_ACCESS_TOKEN")
USER_AGENT = os.getenv("HARVEST_USER_AGENT", "Harvest MCP Server")


def harvest_headers(user_agent: str = USER_AGENT) -> dict:
    return {
        "Harvest-Account-ID": ACCOUNT_ID or "",
        "Authorization": f"Bearer {TOKEN}",
        "User-Agent": user_agent,
    }


HEADERS = harvest_headers()

CACHE_TTL = float(os.getenv("CATALOG_CACHE_TTL", "3600"))  # seconds
PAGE_SIZE = int(os.getenv("HARVEST_PAGE_SIZE", "100"))
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "30"))

SLACK_WEBHOOK_URL = os.getenv("SLACK_WEBHOOK_URL")
LINEAR_API_KEY = os.getenv("LINEAR_API_KEY")
LINEAR_URL = os.getenv("LINEAR_URL", "https://api.linear.app/graphql")
TIMEZONE = os.getenv("TIMEZONE", "America/New_York")
DIGEST_TIME = os.getenv("DIGEST_TIME", "09:00")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

MCP_HOST = os.getenv("MCP_HOST", "0.0.0.0")
MCP_PORT = int(os.getenv("MCP_PORT", "8000"))
MCP_URL = os.getenv("MCP_URL", f"http://localhost:{MCP_PORT}")


def missing_credentials() -> list[str]:
    missing = []
    if not ACCOUNT_ID:
        missing.append("HARVEST_ACCOUNT_ID")
    if not TOKEN:
        missing.append("HARVEST_ACCESS_TOKEN")
    return missing
