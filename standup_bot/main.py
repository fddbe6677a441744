"""Daily standup bot: posts yesterday's Harvest + Linear activity to Slack.

Run with ``--test`` to post once immediately and exit.
"""
import argparse
import asyncio
import logging
import sys
from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional

from dateutil import tz as dateutil_tz

from mcp_server.config import (
    DIGEST_TIME, LINEAR_API_KEY, LOG_LEVEL, SLACK_WEBHOOK_URL, TIMEZONE,
    harvest_headers, missing_credentials,
)
from mcp_server.errors import RemoteUnavailable
from mcp_server.harvest import HarvestAPI, make_client

from .digest import DigestAggregator
from .linear import LinearClient, TrackerError
from .slack import post_message

logger = logging.getLogger(__name__)


def parse_run_time(value: str) -> tuple[int, int]:
    hour, _, minute = value.partition(":")
    hour, minute = int(hour), int(minute or 0)
    if not (0 <= hour < 24 and 0 <= minute < 60):
        raise ValueError(f"Invalid DIGEST_TIME: {value}")
    return hour, minute


def next_run_at(now: datetime, hour: int, minute: int) -> datetime:
    """The next wall-clock ``hour:minute`` strictly after ``now`` in now's zone."""
    candidate = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate


class StandupBot:
    def __init__(
        self,
        aggregator: DigestAggregator,
        zone: tzinfo,
        webhook_url: Optional[str] = SLACK_WEBHOOK_URL,
    ):
        self.aggregator = aggregator
        self.zone = zone
        self.webhook_url = webhook_url

    def now(self) -> datetime:
        return datetime.now(self.zone)

    async def run_daily_update(self) -> Optional[str]:
        now = self.now()
        logger.info("Running daily update at %s", now.strftime("%Y-%m-%d %H:%M:%S"))
        yesterday = (now - timedelta(days=1)).date()
        try:
            digest = await self.aggregator.collect(yesterday)
            message = digest.render()
            await post_message(message, self.webhook_url)
        except Exception:
            logger.exception("Error in daily update")
            return None
        return message

    async def verify(self) -> None:
        me = await self.aggregator.harvest.get_current_user()
        logger.info("Connected to Harvest as: %s %s", me.get("first_name", ""), me.get("last_name", ""))
        tracker = self.aggregator.tracker
        if tracker is None:
            logger.info("Linear API key not configured - skipping Linear integration")
            return
        try:
            viewer = await tracker.viewer()
            logger.info("Connected to Linear as: %s", viewer.get("name"))
        except TrackerError as e:
            logger.warning("Failed to connect to Linear: %s. Continuing without Linear integration", e)
            await tracker.aclose()
            self.aggregator.tracker = None

    async def run_forever(self, hour: int, minute: int) -> None:
        while True:
            now = self.now()
            target = next_run_at(now, hour, minute)
            logger.info("Next daily update at %s", target.isoformat())
            # compare in UTC so a DST change between now and target is counted
            await asyncio.sleep((target.astimezone(timezone.utc) - now.astimezone(timezone.utc)).total_seconds())
            await self.run_daily_update()


def build_bot() -> StandupBot:
    zone = dateutil_tz.gettz(TIMEZONE)
    if zone is None:
        raise SystemExit(f"Unknown TIMEZONE: {TIMEZONE}")
    harvest = HarvestAPI(make_client(headers=harvest_headers("Harvest Slack Bot")))
    tracker = LinearClient.from_api_key(LINEAR_API_KEY) if LINEAR_API_KEY else None
    return StandupBot(DigestAggregator(harvest, tracker, zone), zone)


async def main_async(test_mode: bool) -> int:
    bot = build_bot()
    logger.info("Starting Harvest + Linear Slack Bot (timezone %s)", TIMEZONE)
    try:
        try:
            await bot.verify()
        except RemoteUnavailable as e:
            logger.error("Failed to connect to Harvest: %s", e)
            return 1
        if test_mode:
            logger.info("--- TEST MODE ---")
            message = await bot.run_daily_update()
            return 0 if message is not None else 1
        hour, minute = parse_run_time(DIGEST_TIME)
        logger.info("Bot scheduled to run daily at %02d:%02d", hour, minute)
        await bot.run_forever(hour, minute)
        return 0
    finally:
        await bot.aggregator.harvest.client.aclose()
        if bot.aggregator.tracker is not None:
            await bot.aggregator.tracker.aclose()


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--test", action="store_true", help="run the daily update once and exit")
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    missing = missing_credentials()
    if missing:
        logger.error("Missing required environment variables: %s", ", ".join(missing))
        return 1
    try:
        return asyncio.run(main_async(args.test))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
