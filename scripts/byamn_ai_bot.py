"""
BYAMN AI Bot

Entry point for the GitHub Actions workflow that replies to mentions of
@BYAMN-AI. Reads the event payload from ``GITHUB_EVENT_PATH``.

Usage:
    GITHUB_TOKEN=... GEMINI_API_KEY=... python -m scripts.byamn_ai_bot
"""

import asyncio
import json
import logging
import os
import sys

import httpx

from app.core.config import settings
from app.core.http_client import close_http_client
from app.services.ai_reply_service import reply_to_event


logger = logging.getLogger("byamn_ai_bot")


async def run(event: dict) -> int:
    try:
        await reply_to_event(
            event,
            github_token=settings.GITHUB_TOKEN,
            gemini_api_key=settings.GEMINI_API_KEY,
        )
    except httpx.HTTPError as e:
        logger.error("Error: %s", e)
        return 1
    finally:
        await close_http_client()
    return 0


def main() -> int:
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(message)s")

    if not settings.GITHUB_TOKEN or not settings.GEMINI_API_KEY:
        logger.error("Missing required environment variables.")
        return 1

    event_path = os.environ.get("GITHUB_EVENT_PATH")
    if not event_path:
        logger.error("GITHUB_EVENT_PATH is not set.")
        return 1

    with open(event_path, encoding="utf-8") as f:
        event = json.load(f)

    return asyncio.run(run(event))


if __name__ == "__main__":
    sys.exit(main())
