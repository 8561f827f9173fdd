"""Slash commands for members: /vote and /list."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from level_vote_bot.application.queries.rank_levels import RankLevelsQuery
from level_vote_bot.application.services.vote_flow import (
    OfferLevels,
    Reject,
    VoteFlowState,
    VoteRequested,
    advance,
)
from level_vote_bot.domain.levels.services import LevelRankingService
from level_vote_bot.domain.shared.messages import DiscordUIMessages, ErrorMessages
from level_vote_bot.infrastructure.discord.guards.role_guards import (
    caller_from_interaction,
    send_ephemeral,
)
from level_vote_bot.infrastructure.discord.views.level_select_view import VoteLevelSelectView

if TYPE_CHECKING:
    from ....application.queries.rank_levels import RankingView
    from ....config.container import Container

logger = logging.getLogger(__name__)

LIST_LIMIT = 10
# Embed descriptions are capped at 4096 characters.
MAX_DESCRIPTION = 4000


def build_ranking_embed(view: RankingView) -> discord.Embed:
    lines: list[str] = []
    length = 0
    for position, ranked in enumerate(view.entries, start=1):
        entry = LevelRankingService.format_entry(position, ranked)
        if length + len(entry) + 2 > MAX_DESCRIPTION:
            break
        lines.append(entry)
        length += len(entry) + 2

    embed = discord.Embed(
        title=DiscordUIMessages.LIST_TITLE,
        description="\n\n".join(lines),
        color=discord.Color.gold(),
    )
    embed.set_footer(text=DiscordUIMessages.LIST_FOOTER.format(count=len(view.entries)))
    return embed


class VotingCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    @app_commands.command(name="vote", description="Start voting (pick a pending level)")
    @app_commands.guild_only()
    async def vote(self, interaction: discord.Interaction) -> None:
        registry = await self.container.registry_gate.read()
        event = VoteRequested(caller=caller_from_interaction(interaction), levels=tuple(registry))
        state, effects = advance(VoteFlowState(), event, self.container.access_policy)

        for effect in effects:
            match effect:
                case OfferLevels():
                    view = VoteLevelSelectView(
                        state=state,
                        policy=self.container.access_policy,
                        handler=self.container.cast_vote_handler,
                    )
                    await interaction.response.send_message(
                        DiscordUIMessages.VOTE_SELECT_PROMPT, view=view, ephemeral=True
                    )
                    view.set_message(await interaction.original_response())
                case Reject():
                    await send_ephemeral(interaction, effect.message)

    @app_commands.command(name="list", description="Show list of voted levels (by avg)")
    @app_commands.guild_only()
    async def list_levels(self, interaction: discord.Interaction) -> None:
        ranking = await self.container.rank_levels_handler.handle(RankLevelsQuery(limit=LIST_LIMIT))
        if ranking.is_empty:
            await send_ephemeral(interaction, DiscordUIMessages.LIST_EMPTY)
            return
        await interaction.response.send_message(embed=build_ranking_embed(ranking))


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(VotingCog(bot, container))
