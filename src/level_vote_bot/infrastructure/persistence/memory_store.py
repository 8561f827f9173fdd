"""In-memory level store, used in tests and when no storage is configured."""

from __future__ import annotations

from level_vote_bot.domain.levels.entities import LevelRegistry
from level_vote_bot.domain.levels.repository import LevelStore
from level_vote_bot.infrastructure.persistence.level_codec import decode_registry, encode_registry


class InMemoryLevelStore(LevelStore):
    """Keeps the serialized blob, so every load hands out an independent copy."""

    name = "memory"

    def __init__(self, initial: str = "") -> None:
        self._blob = initial

    @property
    def blob(self) -> str:
        return self._blob

    async def load(self) -> LevelRegistry:
        return decode_registry(self._blob, self.name)

    async def save(self, registry: LevelRegistry) -> None:
        self._blob = encode_registry(registry)
