"""
Reset Votes Command

Command and handler for the manager-only re-vote operation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from level_vote_bot.application.commands.results import LevelActionResult
from level_vote_bot.application.services.access_policy import Caller
from level_vote_bot.domain.levels.value_objects import LevelOutcome
from level_vote_bot.domain.shared.exceptions import (
    LevelNotFoundError,
    PermissionDeniedError,
    PersistenceError,
)
from level_vote_bot.domain.shared.messages import DiscordUIMessages, LogTemplates

if TYPE_CHECKING:
    from ..interfaces.notifier import LevelNotifier
    from ..services.access_policy import AccessPolicy
    from ..services.registry_gate import LevelRegistryGate

logger = logging.getLogger(__name__)


class ResetVotesCommand(BaseModel):
    """Command to clear every vote and voter of a level."""

    model_config = ConfigDict(frozen=True)

    caller: Caller
    level_id: str


class ResetVotesHandler:
    """Handler for ResetVotesCommand."""

    def __init__(
        self, gate: LevelRegistryGate, policy: AccessPolicy, notifier: LevelNotifier
    ) -> None:
        self._gate = gate
        self._policy = policy
        self._notifier = notifier

    async def handle(self, command: ResetVotesCommand) -> LevelActionResult:
        try:
            self._policy.require_manager(command.caller)
        except PermissionDeniedError:
            return LevelActionResult.from_outcome(LevelOutcome.PERMISSION_DENIED)

        level_id = command.level_id.strip()
        try:
            async with self._gate.mutate() as registry:
                level = registry.get(level_id)
                level.reset_votes()
        except LevelNotFoundError:
            return LevelActionResult.from_outcome(LevelOutcome.NOT_FOUND)
        except PersistenceError as e:
            logger.error(LogTemplates.STORE_SAVE_FAILED, self._gate.store.name, e)
            return LevelActionResult.from_outcome(LevelOutcome.PERSISTENCE_ERROR)

        logger.info(LogTemplates.LEVEL_VOTES_RESET, level.id, command.caller.user_id)
        await self._notifier.votes_reset(level, command.caller.user_id)

        return LevelActionResult.from_outcome(
            LevelOutcome.SUCCESS,
            DiscordUIMessages.REVOTE_SUCCESS.format(level_name=level.display_name),
            level=level,
        )
