"""Confirmation reaction added to a manager's command message."""

from __future__ import annotations

import logging

import discord

from level_vote_bot.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


async def add_confirmation_reaction(
    client: discord.Client, message: discord.Message, emoji_id: int | None
) -> bool:
    """React with the configured custom emoji.

    Returns False when no emoji is configured or the reaction could not be
    added, so the caller can acknowledge some other way.
    """
    if emoji_id is None:
        return False
    emoji = client.get_emoji(emoji_id) or discord.PartialEmoji(name="vote", id=emoji_id)
    try:
        await message.add_reaction(emoji)
    except discord.HTTPException as e:
        logger.warning(LogTemplates.REACTION_FAILED, emoji_id, e)
        return False
    return True
