"""
Level Notifier Interface

Port interface for announcing level lifecycle events to the community.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ...domain.levels.entities import Level


class LevelNotifier(ABC):
    """Abstract notification sink.

    Implementations are fire-and-forget: failures are logged, never raised.
    ``fallback_channel_id`` is where to post when no announce channel is set.
    """

    @abstractmethod
    async def level_accepted(self, level: Level, *, fallback_channel_id: int | None = None) -> None:
        ...

    @abstractmethod
    async def level_removed(
        self, level: Level, reason: str, *, fallback_channel_id: int | None = None
    ) -> None:
        ...

    @abstractmethod
    async def votes_reset(self, level: Level, reset_by: int) -> None:
        ...
