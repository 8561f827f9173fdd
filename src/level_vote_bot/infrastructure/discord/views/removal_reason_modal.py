"""Modal asking a manager why a level is being removed."""

from __future__ import annotations

from typing import TYPE_CHECKING

import discord

from level_vote_bot.application.commands.remove_level import RemoveLevelCommand
from level_vote_bot.domain.shared.messages import DiscordUIMessages
from level_vote_bot.infrastructure.discord.guards.role_guards import (
    caller_from_interaction,
    send_ephemeral,
)

if TYPE_CHECKING:
    from ....application.commands.remove_level import RemoveLevelHandler

REMOVE_MODAL_PREFIX = "remove_reason_modal_"


class RemovalReasonModal(discord.ui.Modal, title=DiscordUIMessages.REMOVE_MODAL_TITLE):
    reason = discord.ui.TextInput(
        label=DiscordUIMessages.REMOVE_REASON_LABEL,
        placeholder=DiscordUIMessages.REMOVE_REASON_PLACEHOLDER,
        style=discord.TextStyle.paragraph,
        max_length=1000,
    )

    def __init__(self, *, level_id: str, handler: RemoveLevelHandler) -> None:
        super().__init__(custom_id=f"{REMOVE_MODAL_PREFIX}{level_id}", timeout=300)
        self.level_id = level_id
        self._handler = handler

    async def on_submit(self, interaction: discord.Interaction) -> None:
        # The submitter is re-checked; the modal may outlive a role change.
        command = RemoveLevelCommand(
            caller=caller_from_interaction(interaction),
            level_id=self.level_id,
            reason=self.reason.value,
        )
        result = await self._handler.handle(command)
        await send_ephemeral(interaction, result.message)
