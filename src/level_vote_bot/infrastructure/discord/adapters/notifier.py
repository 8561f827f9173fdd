"""Discord implementation of the LevelNotifier port: announcement embeds."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from level_vote_bot.application.interfaces.notifier import LevelNotifier
from level_vote_bot.domain.levels.references import thread_url
from level_vote_bot.domain.levels.services import author_mention
from level_vote_bot.domain.shared.messages import DiscordUIMessages, LogTemplates
from level_vote_bot.utils.reply import truncate

if TYPE_CHECKING:
    from level_vote_bot.config.settings import GuildSettings
    from level_vote_bot.domain.levels.entities import Level

logger = logging.getLogger(__name__)

# Discord rejects embed titles longer than 256 characters.
MAX_TITLE_LENGTH = 256


def build_accepted_embed(
    level: Level,
    *,
    guild_id: int | None,
    settings: GuildSettings,
) -> discord.Embed:
    author = author_mention(level.author_ref) or DiscordUIMessages.ANNOUNCE_UNKNOWN_AUTHOR
    embed = discord.Embed(
        title=truncate(
            DiscordUIMessages.ANNOUNCE_ACCEPTED_TITLE.format(level_name=level.display_name),
            MAX_TITLE_LENGTH,
        ),
        description=f"by {author}",
        color=discord.Color.green(),
        timestamp=discord.utils.utcnow(),
    )
    if guild_id is not None:
        embed.url = thread_url(guild_id, settings.forum_channel_id, level.id)
    thumbnail = level.thumbnail_ref or settings.placeholder_thumbnail_url
    if thumbnail:
        embed.set_thumbnail(url=thumbnail)

    footer = DiscordUIMessages.ANNOUNCE_ACCEPTED_FOOTER
    if settings.voting_notification_role:
        footer += f" <@&{settings.voting_notification_role}>"
    embed.set_footer(text=footer)
    return embed


def build_removed_embed(level: Level, reason: str, *, settings: GuildSettings) -> discord.Embed:
    embed = discord.Embed(
        title=truncate(
            DiscordUIMessages.ANNOUNCE_REMOVED_TITLE.format(level_name=level.display_name),
            MAX_TITLE_LENGTH,
        ),
        description=DiscordUIMessages.ANNOUNCE_REMOVED_DESCRIPTION,
        color=discord.Color.red(),
        timestamp=discord.utils.utcnow(),
    )
    embed.set_footer(text=DiscordUIMessages.ANNOUNCE_REMOVED_FOOTER.format(reason=reason))
    if settings.remove_thumbnail_url:
        embed.set_thumbnail(url=settings.remove_thumbnail_url)
    return embed


class DiscordLevelNotifier(LevelNotifier):
    """Posts announcements to the announce channel, else the invoking channel.

    Every failure is logged and swallowed; the level change they describe has
    already been saved.
    """

    def __init__(self, client: discord.Client, settings: GuildSettings, guild_id: int | None) -> None:
        self._client = client
        self._settings = settings
        self._guild_id = guild_id

    async def _resolve_channel(self, channel_id: int | None) -> discord.abc.Messageable | None:
        if channel_id is None:
            return None
        channel = self._client.get_channel(channel_id)
        if channel is None:
            try:
                channel = await self._client.fetch_channel(channel_id)
            except discord.HTTPException as e:
                logger.warning(LogTemplates.ANNOUNCEMENT_SEND_FAILED, e)
                return None
        if isinstance(channel, discord.abc.Messageable):
            return channel
        return None

    async def _announce_channel(
        self, fallback_channel_id: int | None
    ) -> discord.abc.Messageable | None:
        channel = await self._resolve_channel(self._settings.announce_channel_id)
        if channel is None:
            channel = await self._resolve_channel(fallback_channel_id)
        return channel

    async def _send(
        self,
        kind: str,
        level: Level,
        fallback_channel_id: int | None,
        *,
        content: str | None = None,
        embed: discord.Embed | None = None,
        channel_id: int | None = None,
    ) -> None:
        try:
            if channel_id is not None:
                channel = await self._resolve_channel(channel_id)
            else:
                channel = await self._announce_channel(fallback_channel_id)
            if channel is None:
                return
            await channel.send(content=content, embed=embed)
        except discord.HTTPException as e:
            logger.warning(LogTemplates.NOTIFY_FAILED, kind, level.id, e)

    async def level_accepted(self, level: Level, *, fallback_channel_id: int | None = None) -> None:
        embed = build_accepted_embed(level, guild_id=self._guild_id, settings=self._settings)
        await self._send("accepted", level, fallback_channel_id, embed=embed)

    async def level_removed(
        self, level: Level, reason: str, *, fallback_channel_id: int | None = None
    ) -> None:
        embed = build_removed_embed(level, reason, settings=self._settings)
        await self._send("removed", level, fallback_channel_id, embed=embed)

    async def votes_reset(self, level: Level, reset_by: int) -> None:
        content = DiscordUIMessages.REVOTE_ANNOUNCEMENT.format(
            level_name=level.display_name, level_id=level.id, user_id=reset_by
        )
        await self._send(
            "votes_reset",
            level,
            None,
            content=content,
            channel_id=self._settings.voting_channel_id or self._settings.announce_channel_id,
        )
