"""Prefix commands for managers: accept, revote, remove and saveranked."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from discord.ext import commands

from level_vote_bot.application.commands.accept_level import AcceptLevelCommand
from level_vote_bot.application.commands.export_ranking import ExportRankingCommand
from level_vote_bot.application.commands.reset_votes import ResetVotesCommand
from level_vote_bot.domain.levels.value_objects import LevelOutcome
from level_vote_bot.domain.shared.messages import DiscordUIMessages, ErrorMessages, LogTemplates
from level_vote_bot.infrastructure.discord.adapters.reactions import add_confirmation_reaction
from level_vote_bot.infrastructure.discord.guards.role_guards import caller_from_context, find_role
from level_vote_bot.infrastructure.discord.views.level_select_view import RemoveLevelSelectView

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)


class ManagerRoleMissing(commands.CheckFailure):
    """The configured manager role does not exist in the guild."""


def require_manager_role_configured():
    """Fail early when the manager role is unset or absent from the guild."""

    async def predicate(ctx: commands.Context) -> bool:
        if ctx.guild is None:
            raise commands.NoPrivateMessage()
        container: Container = ctx.bot.container
        if find_role(ctx.guild, container.settings.guild.manager_role_name) is None:
            raise ManagerRoleMissing()
        return True

    return commands.check(predicate)


class LevelsCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    async def cog_command_error(self, ctx: commands.Context, error: Exception) -> None:
        if isinstance(error, ManagerRoleMissing):
            await ctx.reply(DiscordUIMessages.ERROR_MANAGER_ROLE_MISSING)
            return

        if isinstance(error, commands.NoPrivateMessage):
            await ctx.reply(DiscordUIMessages.ERROR_SERVER_ONLY)
            return

        if isinstance(error, commands.MissingRequiredArgument):
            usage = ctx.command.usage if ctx.command else None
            await ctx.reply(DiscordUIMessages.ERROR_MISSING_ARGUMENT.format(usage=usage or ""))
            return

        if isinstance(error, commands.CheckFailure):
            await ctx.reply(DiscordUIMessages.ERROR_NO_PERMISSION)
            return

        original = getattr(error, "original", error)
        logger.exception(
            LogTemplates.COMMAND_FAILED, getattr(ctx.command, "name", "?"), exc_info=original
        )
        await ctx.reply(DiscordUIMessages.ERROR_COMMAND_FAILED.format(error=original))

    @commands.command(name="accept", aliases=["ac", "a"], usage=DiscordUIMessages.ACCEPT_USAGE)
    @require_manager_role_configured()
    async def accept(self, ctx: commands.Context, *, reference: str) -> None:
        command = AcceptLevelCommand(caller=caller_from_context(ctx), reference=reference)
        result = await self.container.accept_level_handler.handle(command)

        if result.is_success and await add_confirmation_reaction(
            self.bot, ctx.message, self.container.settings.guild.reaction_emoji_id
        ):
            return
        await ctx.reply(result.message)

    @commands.command(name="revote", usage=DiscordUIMessages.REVOTE_USAGE)
    @require_manager_role_configured()
    async def revote(self, ctx: commands.Context, level_id: str) -> None:
        command = ResetVotesCommand(caller=caller_from_context(ctx), level_id=level_id)
        result = await self.container.reset_votes_handler.handle(command)
        await ctx.reply(result.message)

    @commands.command(name="remove", aliases=["rmv", "r"])
    @require_manager_role_configured()
    async def remove(self, ctx: commands.Context) -> None:
        caller = caller_from_context(ctx)
        selection = await self.container.remove_level_handler.offer(caller)
        if selection.outcome is not LevelOutcome.SUCCESS:
            await ctx.reply(selection.message)
            return

        view = RemoveLevelSelectView(
            owner_id=caller.user_id,
            choices=selection.choices,
            handler=self.container.remove_level_handler,
        )
        message = await ctx.reply(selection.message, view=view)
        view.set_message(message)

    @commands.command(name="saveranked")
    @require_manager_role_configured()
    async def saveranked(self, ctx: commands.Context) -> None:
        command = ExportRankingCommand(caller=caller_from_context(ctx))
        async with ctx.typing():
            result = await self.container.export_ranking_handler.handle(command)
        await ctx.reply(result.message)


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(LevelsCog(bot, container))
