"""
Remove Level Command

Two-stage removal: a manager picks a level from a selection, then supplies
a reason. Authorization is checked at both stages since the second stage
arrives as a separate interaction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from level_vote_bot.application.commands.results import LevelActionResult
from level_vote_bot.application.services.access_policy import Caller
from level_vote_bot.application.services.choices import LevelChoice, level_choices
from level_vote_bot.domain.levels.value_objects import LevelOutcome
from level_vote_bot.domain.shared.exceptions import (
    EmptyInputError,
    LevelNotFoundError,
    PermissionDeniedError,
    PersistenceError,
)
from level_vote_bot.domain.shared.messages import DiscordUIMessages, LogTemplates
from level_vote_bot.domain.shared.validators import require_text

if TYPE_CHECKING:
    from ..interfaces.notifier import LevelNotifier
    from ..services.access_policy import AccessPolicy
    from ..services.registry_gate import LevelRegistryGate

logger = logging.getLogger(__name__)


class RemoveLevelCommand(BaseModel):
    """Command to drop a pending level with a stated reason."""

    model_config = ConfigDict(frozen=True)

    caller: Caller
    level_id: str
    reason: str


class RemovalSelection(BaseModel):
    """First-stage result: which levels the manager may choose from."""

    model_config = ConfigDict(frozen=True)

    outcome: LevelOutcome
    message: str
    choices: tuple[LevelChoice, ...] = ()


class RemoveLevelHandler:
    """Handler for both removal stages."""

    def __init__(
        self, gate: LevelRegistryGate, policy: AccessPolicy, notifier: LevelNotifier
    ) -> None:
        self._gate = gate
        self._policy = policy
        self._notifier = notifier

    async def offer(self, caller: Caller) -> RemovalSelection:
        """Selection stage: list up to 25 levels for a manager."""
        try:
            self._policy.require_manager(caller)
        except PermissionDeniedError:
            outcome = LevelOutcome.PERMISSION_DENIED
            return RemovalSelection(outcome=outcome, message=outcome.get_message())

        registry = await self._gate.read()
        if registry.is_empty:
            return RemovalSelection(
                outcome=LevelOutcome.NO_LEVELS, message=DiscordUIMessages.REMOVE_NO_LEVELS
            )
        return RemovalSelection(
            outcome=LevelOutcome.SUCCESS,
            message=DiscordUIMessages.REMOVE_SELECT_PROMPT,
            choices=tuple(level_choices(registry)),
        )

    async def handle(self, command: RemoveLevelCommand) -> LevelActionResult:
        """Commit stage: remove the level, persist, then announce."""
        try:
            self._policy.require_manager(command.caller)
        except PermissionDeniedError:
            return LevelActionResult.from_outcome(LevelOutcome.PERMISSION_DENIED)

        try:
            reason = require_text(command.reason, "reason")
        except EmptyInputError:
            return LevelActionResult.from_outcome(LevelOutcome.EMPTY_INPUT)

        try:
            async with self._gate.mutate() as registry:
                removed = registry.remove(command.level_id)
                if removed is None:
                    raise LevelNotFoundError(command.level_id)
        except LevelNotFoundError:
            return LevelActionResult.from_outcome(LevelOutcome.NOT_FOUND)
        except PersistenceError as e:
            logger.error(LogTemplates.STORE_SAVE_FAILED, self._gate.store.name, e)
            return LevelActionResult.from_outcome(LevelOutcome.PERSISTENCE_ERROR)

        logger.info(LogTemplates.LEVEL_REMOVED, removed.id, command.caller.user_id, reason)
        await self._notifier.level_removed(
            removed, reason, fallback_channel_id=command.caller.channel_id
        )

        return LevelActionResult.from_outcome(
            LevelOutcome.SUCCESS,
            DiscordUIMessages.REMOVE_SUCCESS.format(level_name=removed.display_name),
            level=removed,
        )
