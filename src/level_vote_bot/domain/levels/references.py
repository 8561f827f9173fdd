"""Parsing of forum-thread references supplied to the accept command.

Pure string handling: no Discord calls are made here.
"""

from __future__ import annotations

import logging
import re

from level_vote_bot.domain.shared.exceptions import ResolutionError
from level_vote_bot.domain.shared.messages import ErrorMessages

logger = logging.getLogger(__name__)

_NUMERIC_ID = re.compile(r"^\d{10,}$")
_CHANNEL_MENTION = re.compile(r"^<#(\d+)>$")
_LINK_PREFIX = r"(?:https?://)?(?:(?:ptb|canary)\.)?discord(?:app)?\.com/channels/"
_THREE_SEGMENT_LINK = re.compile(_LINK_PREFIX + r"(\d+)/(\d+)/(\d+)")
_TWO_SEGMENT_LINK = re.compile(_LINK_PREFIX + r"(\d+)/(\d+)")


def parse_thread_reference(raw: str, forum_channel_id: int | None = None) -> str:
    """Turn a thread id, thread mention or thread link into a thread id.

    Accepted forms:
        - a numeric id of at least ten digits
        - a channel mention ``<#id>``
        - ``discord.com/channels/<guild>/<forum>/<thread>``; the last segment
          is the thread id whether or not the middle one is the forum channel

    Raises:
        ResolutionError: For a bare channel link or anything unrecognised.
    """
    value = raw.strip()

    if _NUMERIC_ID.match(value):
        return value

    mention = _CHANNEL_MENTION.match(value)
    if mention:
        return mention.group(1)

    link = _THREE_SEGMENT_LINK.search(value)
    if link:
        _, middle, last = link.groups()
        if forum_channel_id is None or middle != str(forum_channel_id):
            logger.debug("Thread link %s does not point into forum %s", value, forum_channel_id)
        return last

    if _TWO_SEGMENT_LINK.search(value):
        raise ResolutionError(ErrorMessages.THREAD_REFERENCE_CHANNEL_LINK, raw)

    raise ResolutionError(ErrorMessages.THREAD_REFERENCE_INVALID, raw)


def thread_url(guild_id: int, forum_channel_id: int | None, level_id: str) -> str:
    """Jump URL for a forum post; falls back to the guild id when no forum is set."""
    return f"https://discord.com/channels/{guild_id}/{forum_channel_id or guild_id}/{level_id}"
