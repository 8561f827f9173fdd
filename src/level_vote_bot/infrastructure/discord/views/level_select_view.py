"""Select menus for picking a level to vote on or to remove."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import discord

from level_vote_bot.application.services.vote_flow import (
    LevelSelected,
    Reject,
    RequestScores,
    VoteFlowState,
    advance,
)
from level_vote_bot.domain.shared.messages import DiscordUIMessages
from level_vote_bot.infrastructure.discord.guards.role_guards import send_ephemeral
from level_vote_bot.infrastructure.discord.views.base_view import OwnedPickerView, select_options
from level_vote_bot.infrastructure.discord.views.removal_reason_modal import RemovalReasonModal
from level_vote_bot.infrastructure.discord.views.score_modal import ScoreModal

if TYPE_CHECKING:
    from ....application.commands.cast_vote import CastVoteHandler
    from ....application.commands.remove_level import RemoveLevelHandler
    from ....application.services.access_policy import AccessPolicy
    from ....application.services.choices import LevelChoice

logger = logging.getLogger(__name__)


class VoteLevelSelectView(OwnedPickerView):
    """Step two of /vote: pick a level, then the score modal opens."""

    def __init__(
        self,
        *,
        state: VoteFlowState,
        policy: AccessPolicy,
        handler: CastVoteHandler,
    ) -> None:
        super().__init__(owner_id=state.user_id or 0)
        self._state = state
        self._policy = policy
        self._handler = handler

        select = discord.ui.Select(
            placeholder=DiscordUIMessages.VOTE_SELECT_PLACEHOLDER,
            min_values=1,
            max_values=1,
            options=select_options(state.choices),
        )
        select.callback = self._on_select
        self.add_item(select)
        self._select = select

    @property
    def state(self) -> VoteFlowState:
        return self._state

    async def _on_select(self, interaction: discord.Interaction) -> None:
        event = LevelSelected(user_id=interaction.user.id, level_id=self._select.values[0])
        self._state, effects = advance(self._state, event, self._policy)

        for effect in effects:
            match effect:
                case RequestScores(level_id=level_id, level_name=level_name):
                    modal = ScoreModal(
                        level_id=level_id,
                        level_name=level_name,
                        policy=self._policy,
                        handler=self._handler,
                    )
                    await interaction.response.send_modal(modal)
                case Reject():
                    await send_ephemeral(interaction, effect.message)


class RemoveLevelSelectView(OwnedPickerView):
    """Step one of !remove: pick a level, then the reason modal opens."""

    def __init__(
        self,
        *,
        owner_id: int,
        choices: Sequence[LevelChoice],
        handler: RemoveLevelHandler,
    ) -> None:
        super().__init__(owner_id=owner_id)
        self._handler = handler

        select = discord.ui.Select(
            placeholder=DiscordUIMessages.REMOVE_SELECT_PLACEHOLDER,
            min_values=1,
            max_values=1,
            options=select_options(choices),
        )
        select.callback = self._on_select
        self.add_item(select)
        self._select = select

    async def _on_select(self, interaction: discord.Interaction) -> None:
        level_id = self._select.values[0]
        await interaction.response.send_modal(
            RemovalReasonModal(level_id=level_id, handler=self._handler)
        )
