"""
Accept Level Command

Command and handler turning a forum post into a pending level.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from level_vote_bot.application.commands.results import LevelActionResult
from level_vote_bot.application.services.access_policy import Caller
from level_vote_bot.application.services.metadata import fetch_thread_metadata
from level_vote_bot.domain.levels.entities import Level
from level_vote_bot.domain.levels.references import parse_thread_reference
from level_vote_bot.domain.levels.value_objects import LevelOutcome
from level_vote_bot.domain.shared.exceptions import (
    AlreadyAcceptedError,
    DuplicateLevelError,
    PermissionDeniedError,
    PersistenceError,
    ResolutionError,
)
from level_vote_bot.domain.shared.messages import DiscordUIMessages, LogTemplates

if TYPE_CHECKING:
    from ..interfaces.notifier import LevelNotifier
    from ..interfaces.thread_resolver import ThreadResolver
    from ..services.access_policy import AccessPolicy
    from ..services.registry_gate import LevelRegistryGate

logger = logging.getLogger(__name__)

DEFAULT_THUMBNAIL_URL = "https://via.placeholder.com/150"


class AcceptLevelCommand(BaseModel):
    """Command to accept a forum post (id, mention or link) for voting."""

    model_config = ConfigDict(frozen=True)

    caller: Caller
    reference: str


class AcceptLevelHandler:
    """Handler for AcceptLevelCommand.

    Order matters: the level is persisted before anything is announced, so an
    announcement never advertises a level that was not recorded.
    """

    def __init__(
        self,
        gate: LevelRegistryGate,
        policy: AccessPolicy,
        resolver: ThreadResolver | None,
        notifier: LevelNotifier,
        placeholder_thumbnail_url: str = DEFAULT_THUMBNAIL_URL,
    ) -> None:
        self._gate = gate
        self._policy = policy
        self._resolver = resolver
        self._notifier = notifier
        self._placeholder_thumbnail_url = placeholder_thumbnail_url

    async def handle(self, command: AcceptLevelCommand) -> LevelActionResult:
        try:
            self._policy.require_manager(command.caller)
        except PermissionDeniedError:
            return LevelActionResult.from_outcome(LevelOutcome.PERMISSION_DENIED)

        try:
            level_id = parse_thread_reference(
                command.reference, self._policy.config.forum_channel_id
            )
        except ResolutionError as e:
            return LevelActionResult.from_outcome(LevelOutcome.RESOLUTION_ERROR, e.message)

        snapshot = await self._gate.read()
        if level_id in snapshot:
            return LevelActionResult.from_outcome(LevelOutcome.ALREADY_ACCEPTED)

        metadata = await fetch_thread_metadata(self._resolver, level_id)
        level = Level.accepted(
            level_id,
            display_name=metadata.title or level_id,
            author_ref=metadata.owner_ref or "",
            thumbnail_ref=metadata.thumbnail_url or self._placeholder_thumbnail_url,
        )

        try:
            async with self._gate.mutate() as registry:
                if level_id in registry:
                    raise AlreadyAcceptedError(level_id)
                registry.insert(level)
        except DuplicateLevelError:
            return LevelActionResult.from_outcome(LevelOutcome.ALREADY_ACCEPTED)
        except PersistenceError as e:
            logger.error(LogTemplates.STORE_SAVE_FAILED, self._gate.store.name, e)
            return LevelActionResult.from_outcome(LevelOutcome.PERSISTENCE_ERROR)

        logger.info(LogTemplates.LEVEL_ACCEPTED, level.id, level.display_name, command.caller.user_id)
        await self._notifier.level_accepted(level, fallback_channel_id=command.caller.channel_id)

        return LevelActionResult.from_outcome(
            LevelOutcome.SUCCESS,
            DiscordUIMessages.ACCEPT_SUCCESS.format(level_name=level.display_name),
            level=level,
        )
