"""
AI Reply Service

Answers GitHub issue, comment and discussion events that mention the
project bot, using Gemini to write the reply.
"""

import logging
from typing import Any, Dict, Optional

from app.core.config import settings
from app.core.http_client import post_with_retry


logger = logging.getLogger(__name__)

MENTION = "@BYAMN-AI"
GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
FALLBACK_REPLY = "Couldn't generate a valid response."

# Event payload sections checked in order
EVENT_SOURCES = ("comment", "issue", "discussion")


def _first_field(event: Dict[str, Any], field: str) -> Optional[str]:
    for source in EVENT_SOURCES:
        value = (event.get(source) or {}).get(field)
        if value:
            return value
    return None


def extract_content(event: Dict[str, Any]) -> str:
    """Body of the comment, issue or discussion that triggered the event."""
    return _first_field(event, "body") or ""


def extract_url(event: Dict[str, Any]) -> str:
    """Browser URL of the triggering item."""
    return _first_field(event, "html_url") or ""


def extract_issue_url(event: Dict[str, Any]) -> Optional[str]:
    """API URL of the thread to reply on."""
    comment = event.get("comment") or {}
    if comment.get("issue_url"):
        return comment["issue_url"]
    for source in ("issue", "discussion"):
        url = (event.get(source) or {}).get("url")
        if url:
            return url
    return None


def mentions_bot(content: str) -> bool:
    return MENTION in content


def build_prompt(content: str) -> str:
    return f"Reply concisely to this GitHub message:\n{content}"


async def generate_reply(
    prompt: str,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
) -> str:
    """
    Ask Gemini for a reply.

    Args:
        prompt: Prompt text.
        api_key: Gemini API key (defaults to settings).
        model: Gemini model name (defaults to settings).

    Returns:
        Generated text, or a fallback message when the response has none.

    Raises:
        httpx.HTTPStatusError: If Gemini rejects the request.
    """
    response = await post_with_retry(
        GEMINI_URL.format(model=model or settings.GEMINI_MODEL),
        params={"key": api_key or settings.GEMINI_API_KEY},
        json={"contents": [{"parts": [{"text": prompt}]}]},
    )
    response.raise_for_status()

    try:
        return response.json()["candidates"][0]["content"]["parts"][0]["text"] or FALLBACK_REPLY
    except (KeyError, IndexError, TypeError):
        logger.warning("Gemini response had no text: %s", response.text)
        return FALLBACK_REPLY


async def post_comment(issue_url: str, body: str, token: Optional[str] = None) -> None:
    """
    Post a comment on an issue or discussion thread.

    Raises:
        httpx.HTTPStatusError: If GitHub rejects the comment.
    """
    response = await post_with_retry(
        f"{issue_url}/comments",
        json={"body": body},
        headers={
            "Authorization": f"Bearer {token or settings.GITHUB_TOKEN}",
            "Accept": "application/vnd.github+json",
        },
    )
    response.raise_for_status()


async def reply_to_event(
    event: Dict[str, Any],
    github_token: Optional[str] = None,
    gemini_api_key: Optional[str] = None,
) -> bool:
    """
    Reply to a GitHub event if it mentions the bot.

    Args:
        event: Parsed GitHub event payload.
        github_token: Token used to post the comment.
        gemini_api_key: Key used to generate the reply.

    Returns:
        True if a reply was posted.
    """
    content = extract_content(event)
    if not mentions_bot(content):
        logger.info("No mention of %s. Skipping reply.", MENTION)
        return False

    issue_url = extract_issue_url(event)
    if not issue_url:
        logger.error("No valid issue/discussion URL found.")
        return False

    logger.info("Generating AI response for %s", extract_url(event) or issue_url)
    message = await generate_reply(build_prompt(content), api_key=gemini_api_key)
    await post_comment(issue_url, message, token=github_token)
    logger.info("Reply posted successfully.")
    return True
