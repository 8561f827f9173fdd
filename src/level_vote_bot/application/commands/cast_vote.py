"""
Cast Vote Command

Command and handler for the commit stage of the voting flow.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from level_vote_bot.application.commands.results import LevelActionResult
from level_vote_bot.domain.levels.value_objects import LevelOutcome, ScoreCard
from level_vote_bot.domain.shared.exceptions import (
    DuplicateVoteError,
    LevelNotFoundError,
    PersistenceError,
)
from level_vote_bot.domain.shared.messages import DiscordUIMessages, LogTemplates

if TYPE_CHECKING:
    from ..services.registry_gate import LevelRegistryGate

logger = logging.getLogger(__name__)


class CastVoteCommand(BaseModel):
    """Command to record one user's validated scores for a level."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    level_id: str
    scores: ScoreCard


class CastVoteHandler:
    """Handler for CastVoteCommand.

    Nothing from the earlier selection stages is trusted: the level's
    existence and the user's previous votes are checked against the freshly
    loaded registry, so stale or replayed submissions are harmless.
    """

    def __init__(self, gate: LevelRegistryGate) -> None:
        self._gate = gate

    async def handle(self, command: CastVoteCommand) -> LevelActionResult:
        try:
            async with self._gate.mutate() as registry:
                level = registry.get(command.level_id)
                level.record_vote(command.user_id, command.scores)
        except LevelNotFoundError:
            logger.info(LogTemplates.VOTE_REJECTED, command.user_id, command.level_id, "not found")
            return LevelActionResult.from_outcome(LevelOutcome.NOT_FOUND)
        except DuplicateVoteError:
            logger.info(LogTemplates.VOTE_REJECTED, command.user_id, command.level_id, "duplicate")
            return LevelActionResult.from_outcome(LevelOutcome.DUPLICATE_VOTE)
        except PersistenceError as e:
            logger.error(LogTemplates.STORE_SAVE_FAILED, self._gate.store.name, e)
            return LevelActionResult.from_outcome(LevelOutcome.PERSISTENCE_ERROR)

        logger.info(LogTemplates.VOTE_RECORDED, command.user_id, command.level_id)
        return LevelActionResult.from_outcome(
            LevelOutcome.SUCCESS,
            DiscordUIMessages.VOTE_RECORDED.format(level_name=level.display_name),
            level=level,
        )
