"""Reusable guard helpers translating Discord members into access-policy callers.

These are free functions that accept explicit dependencies rather than relying
on a specific cog instance, making them usable from any cog or view.
"""

from __future__ import annotations

import discord
from discord.ext import commands

from level_vote_bot.application.services.access_policy import Caller
from level_vote_bot.domain.shared.messages import DiscordUIMessages


async def send_ephemeral(interaction: discord.Interaction, message: str) -> None:
    """Send an ephemeral message, handling both fresh and already-responded interactions."""
    if interaction.response.is_done():
        await interaction.followup.send(message, ephemeral=True)
    else:
        await interaction.response.send_message(message, ephemeral=True)


def role_names(user: discord.abc.User) -> frozenset[str]:
    """Names of the roles a member holds; plain users hold none."""
    roles = getattr(user, "roles", None) or ()
    return frozenset(role.name for role in roles)


def caller_from_user(user: discord.abc.User, channel_id: int | None) -> Caller:
    return Caller(user_id=user.id, role_names=role_names(user), channel_id=channel_id)


def caller_from_interaction(interaction: discord.Interaction) -> Caller:
    return caller_from_user(interaction.user, interaction.channel_id)


def caller_from_context(ctx: commands.Context) -> Caller:
    return caller_from_user(ctx.author, ctx.channel.id if ctx.channel else None)


async def get_member(interaction: discord.Interaction) -> discord.Member | None:
    """Validate that the interaction comes from a guild member. Returns None with error on failure."""
    if interaction.guild is None or not isinstance(interaction.user, discord.Member):
        await send_ephemeral(interaction, DiscordUIMessages.ERROR_SERVER_ONLY)
        return None
    return interaction.user


def find_role(guild: discord.Guild, name: str) -> discord.Role | None:
    if not name:
        return None
    return discord.utils.get(guild.roles, name=name)


def outranks_or_equals(member: discord.Member, role: discord.Role) -> bool:
    """True when the member's highest role sits at or above ``role`` in the hierarchy."""
    return member.top_role.position >= role.position
