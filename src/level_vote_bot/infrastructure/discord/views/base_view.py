"""Base class for level pickers owned by the member who opened them."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import discord

from level_vote_bot.application.services.choices import LevelChoice
from level_vote_bot.domain.shared.messages import DiscordUIMessages
from level_vote_bot.infrastructure.discord.guards.role_guards import send_ephemeral

logger = logging.getLogger(__name__)


def select_options(choices: Sequence[LevelChoice]) -> list[discord.SelectOption]:
    return [
        discord.SelectOption(label=c.label, value=c.level_id, description=c.description)
        for c in choices
    ]


class OwnedPickerView(discord.ui.View):
    """Tracks its message, rejects other users and disables itself on timeout."""

    def __init__(self, *, owner_id: int, timeout: float | None = 180.0) -> None:
        super().__init__(timeout=timeout)
        self.owner_id = owner_id
        self._message: discord.Message | None = None

    def set_message(self, message: discord.Message | None) -> None:
        self._message = message

    def disable_items(self) -> None:
        for item in self.children:
            if isinstance(item, discord.ui.Select | discord.ui.Button):
                item.disabled = True

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id != self.owner_id:
            await send_ephemeral(interaction, DiscordUIMessages.VOTE_NOT_YOURS)
            return False
        return True

    async def on_timeout(self) -> None:
        self.disable_items()
        if self._message is None:
            return
        try:
            await self._message.edit(view=self)
        except discord.HTTPException:
            logger.debug("Failed to disable picker on timeout")
