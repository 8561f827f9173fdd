"""Modal collecting the three scores for one level."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord

from level_vote_bot.application.services.vote_flow import (
    CommitVote,
    Reject,
    ScoresSubmitted,
    VoteFlowState,
    advance,
    complete,
)
from level_vote_bot.domain.shared.messages import DiscordUIMessages
from level_vote_bot.infrastructure.discord.guards.role_guards import send_ephemeral
from level_vote_bot.utils.reply import truncate

if TYPE_CHECKING:
    from ....application.commands.cast_vote import CastVoteHandler
    from ....application.services.access_policy import AccessPolicy

logger = logging.getLogger(__name__)

SCORE_MODAL_PREFIX = "vote_score_modal_"
# Discord caps modal titles at 45 characters.
MAX_MODAL_TITLE = 45


class ScoreModal(discord.ui.Modal):
    """Song, design and vibe as free text; parsing happens in the vote flow."""

    song = discord.ui.TextInput(
        label=DiscordUIMessages.VOTE_SONG_LABEL,
        placeholder=DiscordUIMessages.VOTE_SCORE_PLACEHOLDER,
        max_length=3,
    )
    design = discord.ui.TextInput(
        label=DiscordUIMessages.VOTE_DESIGN_LABEL,
        placeholder=DiscordUIMessages.VOTE_SCORE_PLACEHOLDER,
        max_length=3,
    )
    vibe = discord.ui.TextInput(
        label=DiscordUIMessages.VOTE_VIBE_LABEL,
        placeholder=DiscordUIMessages.VOTE_SCORE_PLACEHOLDER,
        max_length=3,
    )

    def __init__(
        self,
        *,
        level_id: str,
        level_name: str,
        policy: AccessPolicy,
        handler: CastVoteHandler,
    ) -> None:
        super().__init__(
            title=truncate(DiscordUIMessages.VOTE_MODAL_TITLE.format(level_name=level_name), MAX_MODAL_TITLE),
            custom_id=f"{SCORE_MODAL_PREFIX}{level_id}",
            timeout=300,
        )
        self.level_id = level_id
        self._policy = policy
        self._handler = handler

    async def on_submit(self, interaction: discord.Interaction) -> None:
        state = VoteFlowState.awaiting_scores(interaction.user.id, self.level_id)
        event = ScoresSubmitted(
            user_id=interaction.user.id,
            level_id=self.level_id,
            song=self.song.value,
            design=self.design.value,
            vibe=self.vibe.value,
        )
        state, effects = advance(state, event, self._policy)

        for effect in effects:
            match effect:
                case CommitVote(command=command):
                    result = await self._handler.handle(command)
                    state = complete(state, result.outcome)
                    logger.debug(
                        "Vote flow for %s on %s finished: %s",
                        state.user_id,
                        state.level_id,
                        state.outcome,
                    )
                    await send_ephemeral(interaction, result.message)
                case Reject():
                    await send_ephemeral(interaction, effect.message)
