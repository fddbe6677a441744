import logging
from typing import Optional

import httpx

from mcp_server.config import HTTP_TIMEOUT

logger = logging.getLogger(__name__)


async def post_message(
    message: str,
    webhook_url: Optional[str],
    client: Optional[httpx.AsyncClient] = None,
) -> bool:
    """Post ``message`` to an incoming webhook.

    Without a webhook URL the message is only logged and False is returned.
    HTTP failures raise ``httpx.HTTPError``.
    """
    if not webhook_url:
        logger.error("SLACK_WEBHOOK_URL not configured")
        logger.info("Message that would be sent:\n%s", message)
        return False

    if client is None:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as own_client:
            r = await own_client.post(webhook_url, json={"text": message})
    else:
        r = await client.post(webhook_url, json={"text": message})
    r.raise_for_status()
    logger.info("Successfully posted to Slack")
    return True
