"""!say: post an ad-hoc announcement embed to any text channel."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord.ext import commands

from level_vote_bot.domain.shared.messages import DiscordUIMessages, ErrorMessages, LogTemplates
from level_vote_bot.infrastructure.discord.adapters.reactions import add_confirmation_reaction
from level_vote_bot.infrastructure.discord.guards.role_guards import find_role, outranks_or_equals
from level_vote_bot.utils.reply import parse_channel_id, parse_hex_color, parse_quoted_args

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)


def build_say_embed(args: list[str], icon_url: str | None = None) -> discord.Embed:
    """``args`` after the channel: content, then optional title, footer, image and color."""
    content, title, description, image_url, color = (args + [""] * 5)[:5]
    embed = discord.Embed(
        description=f"**{content}**",
        color=parse_hex_color(color or None),
        timestamp=discord.utils.utcnow(),
    )
    if title:
        embed.title = f"📢 {title}"
    if description:
        embed.set_footer(text=description, icon_url=icon_url)
    if image_url.strip():
        embed.set_thumbnail(url=image_url.strip())
    return embed


class AnnounceCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    @commands.command(name="say")
    @commands.guild_only()
    async def say(self, ctx: commands.Context, *, raw: str = "") -> None:
        assert ctx.guild is not None
        if not isinstance(ctx.author, discord.Member):
            return

        role_name = self.container.settings.guild.manager_role_name
        base_role = find_role(ctx.guild, role_name)
        if base_role is None:
            await ctx.reply(DiscordUIMessages.SAY_BASE_ROLE_MISSING.format(role_name=role_name))
            return
        if not outranks_or_equals(ctx.author, base_role):
            await ctx.reply(DiscordUIMessages.ERROR_NO_PERMISSION)
            return

        args = parse_quoted_args(raw)
        if len(args) < 2:
            await ctx.reply(DiscordUIMessages.SAY_USAGE)
            return

        channel_id = parse_channel_id(args[0])
        channel = ctx.guild.get_channel(channel_id) if channel_id else None
        if not isinstance(channel, discord.TextChannel | discord.Thread):
            await ctx.reply(DiscordUIMessages.SAY_INVALID_CHANNEL)
            return

        icon_url = self.bot.user.display_avatar.url if self.bot.user else None
        embed = build_say_embed(args[1:], icon_url)
        try:
            await channel.send(embed=embed)
        except discord.HTTPException as e:
            logger.warning(LogTemplates.ANNOUNCEMENT_SEND_FAILED, e)
            await ctx.reply(DiscordUIMessages.SAY_SEND_FAILED)
            return

        await add_confirmation_reaction(
            self.bot, ctx.message, self.container.settings.guild.reaction_emoji_id
        )


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(AnnounceCog(bot, container))
