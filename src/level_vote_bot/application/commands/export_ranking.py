"""
Export Ranking Command

Writes the ranked report of voted levels to an external document.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from level_vote_bot.application.commands.results import LevelActionResult
from level_vote_bot.application.services.access_policy import Caller
from level_vote_bot.application.services.metadata import fetch_thread_metadata
from level_vote_bot.domain.levels.services import LevelRankingService, author_mention
from level_vote_bot.domain.levels.value_objects import LevelOutcome
from level_vote_bot.domain.shared.exceptions import PermissionDeniedError, PersistenceError
from level_vote_bot.domain.shared.messages import DiscordUIMessages, LogTemplates

if TYPE_CHECKING:
    from ..interfaces.document_writer import DocumentWriter
    from ..interfaces.thread_resolver import ThreadResolver
    from ..services.access_policy import AccessPolicy
    from ..services.registry_gate import LevelRegistryGate

logger = logging.getLogger(__name__)


class ExportRankingCommand(BaseModel):
    model_config = ConfigDict(frozen=True)

    caller: Caller


class ExportRankingHandler:
    """Handler for ExportRankingCommand.

    ``writer`` is None when no ranked document is configured; the handler
    then reports ``unavailable_message`` instead of exporting.
    """

    def __init__(
        self,
        gate: LevelRegistryGate,
        policy: AccessPolicy,
        writer: DocumentWriter | None,
        resolver: ThreadResolver | None = None,
        unavailable_message: str = DiscordUIMessages.RANKED_DOC_NOT_CONFIGURED,
    ) -> None:
        self._gate = gate
        self._policy = policy
        self._writer = writer
        self._resolver = resolver
        self._unavailable_message = unavailable_message

    async def handle(self, command: ExportRankingCommand) -> LevelActionResult:
        try:
            self._policy.require_manager(command.caller)
        except PermissionDeniedError:
            return LevelActionResult.from_outcome(LevelOutcome.PERMISSION_DENIED)

        if self._writer is None:
            return LevelActionResult.from_outcome(LevelOutcome.UNAVAILABLE, self._unavailable_message)

        registry = await self._gate.read()
        ranking = LevelRankingService.rank(registry)
        if not ranking:
            return LevelActionResult.from_outcome(LevelOutcome.NO_LEVELS, DiscordUIMessages.LIST_EMPTY)

        # Prefer the live post title and owner over what was stored at accept time.
        overrides = {}
        for ranked in ranking:
            metadata = await fetch_thread_metadata(self._resolver, ranked.level_id)
            overrides[ranked.level_id] = (
                metadata.title,
                author_mention(metadata.owner_ref) if metadata.owner_ref else None,
            )

        report = LevelRankingService.format_report(ranking, overrides)
        try:
            await self._writer.replace_text(report)
        except PersistenceError as e:
            logger.error(LogTemplates.RANKING_EXPORT_FAILED, e)
            return LevelActionResult.from_outcome(
                LevelOutcome.PERSISTENCE_ERROR, DiscordUIMessages.RANKED_SAVE_FAILED
            )

        logger.info(LogTemplates.RANKING_EXPORTED, len(ranking), getattr(self._writer, "name", "-"))
        return LevelActionResult.from_outcome(LevelOutcome.SUCCESS, DiscordUIMessages.RANKED_SAVED)
