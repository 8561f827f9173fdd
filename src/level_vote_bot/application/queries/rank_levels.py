"""
Rank Levels Query

Read-only ranking of voted levels for display.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from level_vote_bot.domain.levels.services import LevelRankingService, RankedLevel

if TYPE_CHECKING:
    from ..services.registry_gate import LevelRegistryGate


class RankLevelsQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    limit: int | None = None


class RankingView(BaseModel):
    """Ranked entries plus how many levels are pending in total."""

    model_config = ConfigDict(frozen=True)

    entries: tuple[RankedLevel, ...]
    pending_count: int

    @property
    def is_empty(self) -> bool:
        return not self.entries


class RankLevelsHandler:
    def __init__(self, gate: LevelRegistryGate) -> None:
        self._gate = gate

    async def handle(self, query: RankLevelsQuery) -> RankingView:
        registry = await self._gate.read()
        ranking = LevelRankingService.rank(registry)
        if query.limit is not None:
            ranking = ranking[: query.limit]
        return RankingView(entries=tuple(ranking), pending_count=len(registry))
