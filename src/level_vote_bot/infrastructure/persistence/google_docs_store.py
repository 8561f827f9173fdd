"""Level store backed by the body text of a Google Docs document."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from level_vote_bot.domain.levels.entities import LevelRegistry
from level_vote_bot.domain.levels.repository import LevelStore
from level_vote_bot.domain.shared.messages import LogTemplates
from level_vote_bot.infrastructure.persistence.level_codec import decode_registry, encode_registry

if TYPE_CHECKING:
    from ..google.docs_client import GoogleDocsDocument

logger = logging.getLogger(__name__)


class GoogleDocsLevelStore(LevelStore):
    """The whole document body holds the JSON blob; saves replace it entirely."""

    name = "google_docs"

    def __init__(self, document: GoogleDocsDocument) -> None:
        self._document = document

    async def load(self) -> LevelRegistry:
        text = await self._document.read_text()
        registry = decode_registry(text, self.name)
        logger.debug(LogTemplates.STORE_LOADED, len(registry), self.name)
        return registry

    async def save(self, registry: LevelRegistry) -> None:
        await self._document.replace_text(encode_registry(registry))
        logger.debug(LogTemplates.STORE_SAVED, len(registry), self.name)
