"""Discord implementation of the ThreadResolver port."""

from __future__ import annotations

import logging

import discord

from level_vote_bot.application.interfaces.thread_resolver import ThreadMetadata, ThreadResolver
from level_vote_bot.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


def thumbnail_from_message(message: discord.Message) -> str | None:
    """First image attachment, else the first embed's thumbnail or image."""
    for attachment in message.attachments:
        if (attachment.content_type or "").startswith("image/"):
            return attachment.url
    if message.embeds:
        embed = message.embeds[0]
        return embed.thumbnail.url or embed.image.url or None
    return None


class DiscordThreadResolver(ThreadResolver):
    """Looks forum posts up through the bot's HTTP client.

    Level ids that are not numeric (legacy tags) have no thread behind them
    and resolve to empty metadata.
    """

    def __init__(self, client: discord.Client, forum_channel_id: int | None = None) -> None:
        self._client = client
        self._forum_channel_id = forum_channel_id

    async def _fetch_thread(self, thread_id: int) -> discord.Thread | None:
        channel = self._client.get_channel(thread_id)
        if channel is None:
            channel = await self._client.fetch_channel(thread_id)
        if not isinstance(channel, discord.Thread):
            return None
        if self._forum_channel_id is not None and channel.parent_id != self._forum_channel_id:
            logger.debug(LogTemplates.METADATA_NOT_FORUM, channel.parent_id)
        return channel

    async def _starter_message(self, thread: discord.Thread) -> discord.Message | None:
        # A forum post's starter message shares the thread's id.
        try:
            return await thread.fetch_message(thread.id)
        except discord.HTTPException as e:
            logger.debug(LogTemplates.METADATA_LOOKUP_FAILED, thread.id, e)
            return None

    async def resolve(self, thread_id: str) -> ThreadMetadata:
        if not thread_id.isdigit():
            return ThreadMetadata.empty()

        thread = await self._fetch_thread(int(thread_id))
        if thread is None:
            return ThreadMetadata.empty()

        starter = await self._starter_message(thread)
        return ThreadMetadata(
            title=thread.name or None,
            owner_ref=f"<@{thread.owner_id}>" if thread.owner_id else None,
            thumbnail_url=thumbnail_from_message(starter) if starter else None,
        )
