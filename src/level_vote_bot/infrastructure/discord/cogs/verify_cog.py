"""/verifyme: climb one tier of the fun verification roles per use."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from level_vote_bot.domain.shared.messages import DiscordUIMessages, ErrorMessages, LogTemplates
from level_vote_bot.domain.verification import next_verification_stage
from level_vote_bot.infrastructure.discord.guards.role_guards import (
    get_member,
    role_names,
    send_ephemeral,
)

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)


class VerifyCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    @app_commands.command(name="verifyme", description="Get verified (fun tiered roles)")
    @app_commands.guild_only()
    async def verifyme(self, interaction: discord.Interaction) -> None:
        member = await get_member(interaction)
        if member is None:
            return
        guild = member.guild

        stage = next_verification_stage(role_names(member))
        if stage is None:
            await send_ephemeral(interaction, DiscordUIMessages.VERIFY_COMPLETE)
            return

        role = next((r for r in guild.roles if r.name.lower() == stage), None)
        if role is None:
            logger.warning(LogTemplates.VERIFY_ROLE_MISSING, stage, guild.id)
            await send_ephemeral(interaction, DiscordUIMessages.VERIFY_ROLE_MISSING.format(stage=stage))
            return

        try:
            await member.add_roles(role, reason="/verifyme")
        except discord.Forbidden:
            await send_ephemeral(interaction, DiscordUIMessages.VERIFY_ROLE_FORBIDDEN.format(stage=stage))
            return

        logger.info(LogTemplates.VERIFY_GRANTED, stage, member.id)
        await send_ephemeral(interaction, DiscordUIMessages.VERIFY_GRANTED.format(stage=stage))


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(VerifyCog(bot, container))
