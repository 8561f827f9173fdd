"""Level store backed by a JSON file on local disk."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from level_vote_bot.domain.levels.entities import LevelRegistry
from level_vote_bot.domain.levels.repository import LevelStore
from level_vote_bot.domain.shared.exceptions import PersistenceError
from level_vote_bot.domain.shared.messages import ErrorMessages, LogTemplates
from level_vote_bot.infrastructure.persistence.level_codec import decode_registry, encode_registry

logger = logging.getLogger(__name__)


class LocalFileLevelStore(LevelStore):
    """Reads and writes ``pending.json`` (or another path) off the event loop.

    Writes go to a sibling temp file first and are renamed into place, so a
    crash mid-write never leaves a truncated blob behind.
    """

    name = "local"

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_sync(self) -> str | None:
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def _write_sync(self, text: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, self._path)

    async def load(self) -> LevelRegistry:
        try:
            text = await asyncio.to_thread(self._read_sync)
        except OSError as e:
            raise PersistenceError(f"{ErrorMessages.STORE_READ_FAILED}: {e}", self.name) from e

        if text is None:
            logger.debug(LogTemplates.STORE_MISSING, self._path)
            return LevelRegistry()

        registry = decode_registry(text, self.name)
        logger.debug(LogTemplates.STORE_LOADED, len(registry), self._path)
        return registry

    async def save(self, registry: LevelRegistry) -> None:
        text = encode_registry(registry)
        try:
            await asyncio.to_thread(self._write_sync, text)
        except OSError as e:
            raise PersistenceError(f"{ErrorMessages.STORE_WRITE_FAILED}: {e}", self.name) from e
        logger.debug(LogTemplates.STORE_SAVED, len(registry), self._path)
