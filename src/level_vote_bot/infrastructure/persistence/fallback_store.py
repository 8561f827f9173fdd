"""Primary-with-local-fallback level store.

Loads prefer the primary backend. If it is unreachable or holds malformed
data the local file is tried, and failing that the registry starts empty.
Either way the result is marked degraded so it is never written back over
the data that could not be read.

Saves must reach the primary; when they don't, a copy is still written to
the local file and the failure is reported so the user is told.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from level_vote_bot.domain.levels.entities import LevelRegistry
from level_vote_bot.domain.levels.repository import LevelStore
from level_vote_bot.domain.shared.exceptions import PersistenceError
from level_vote_bot.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from .local_file_store import LocalFileLevelStore

logger = logging.getLogger(__name__)


class FallbackLevelStore(LevelStore):
    """Gateway store combining an optional remote backend and a local file.

    With no primary configured the local file is authoritative and its
    save failures propagate.
    """

    name = "gateway"

    def __init__(self, primary: LevelStore | None, fallback: LocalFileLevelStore) -> None:
        self._primary = primary
        self._fallback = fallback

    @property
    def primary(self) -> LevelStore | None:
        return self._primary

    @property
    def fallback(self) -> LocalFileLevelStore:
        return self._fallback

    async def load(self) -> LevelRegistry:
        if self._primary is not None:
            try:
                return await self._primary.load()
            except PersistenceError as e:
                logger.warning(LogTemplates.STORE_LOAD_FAILED, self._primary.name, e)

        try:
            registry = await self._fallback.load()
        except PersistenceError as e:
            logger.error(LogTemplates.STORE_LOAD_FAILED, self._fallback.name, e)
            return LevelRegistry(degraded=True)

        # the primary is authoritative; a local copy may be stale
        registry.degraded = self._primary is not None
        return registry

    async def save(self, registry: LevelRegistry) -> None:
        if self._primary is None:
            await self._fallback.save(registry)
            return

        try:
            await self._primary.save(registry)
        except PersistenceError as e:
            logger.error(LogTemplates.STORE_SAVE_FAILED, self._primary.name, e)
            try:
                await self._fallback.save(registry)
                logger.warning(LogTemplates.STORE_FALLBACK_WRITE, self._fallback.path)
            except PersistenceError as fallback_error:
                logger.error(LogTemplates.STORE_SAVE_FAILED, self._fallback.name, fallback_error)
            raise
