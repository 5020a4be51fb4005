"""Log analysis replies."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from .api import ApiError, HttpClient
from .consts import Colors
from .issues import Issue, find_issues
from .providers import find_log
from .utils import Embed, EmbedField, Message

logger = logging.getLogger(__name__)

NO_ISSUES = (
    "The automatic check didn't reveal any issues, but it's possible that some "
    "issues went undetected. Please wait for a volunteer to assist you."
)


def analysis_embed(issues: Sequence[Issue]) -> Embed:
    """Build the embed reporting the issues found in a log."""
    embed = Embed(title="Log analysis")
    if not issues:
        embed.color = Colors.GREEN.value
        embed.description = NO_ISSUES
    else:
        embed.color = Colors.RED.value
        embed.fields.extend(
            EmbedField(issue.title, issue.description, False) for issue in issues
        )
    return embed


def failure_embed() -> Embed:
    """Build the embed sent when a log could not be downloaded."""
    return Embed(title="Analysis failed!", description="Couldn't download log")


def analyze_log(log: str, latest_version: str | None = None) -> Embed:
    """Analyse a log and build the reply embed."""
    normalized = log.replace("\r\n", "\n")
    return analysis_embed(find_issues(normalized, latest_version))


async def analyze_message(
    http: HttpClient, message: Message, latest_version: str | None = None
) -> Embed | None:
    """Find, download and analyse the log in ``message``.

    Returns None when the message holds no log, and the failure embed when
    the log could not be downloaded.
    """
    logger.debug("Checking message %s from %s for logs", message.id, message.author_id)
    try:
        found = await find_log(http, message)
    except (httpx.HTTPError, ApiError, UnicodeDecodeError):
        return failure_embed()
    if found is None:
        logger.debug("No log found in message! Skipping analysis")
        return None
    return analyze_log(found, latest_version)