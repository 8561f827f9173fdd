"""Result object shared by the level command handlers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from level_vote_bot.domain.levels.entities import Level
from level_vote_bot.domain.levels.value_objects import LevelOutcome


class LevelActionResult(BaseModel):
    """Outcome of a level command plus the message to show the invoking user."""

    model_config = ConfigDict(frozen=True)

    outcome: LevelOutcome
    message: str
    level: Level | None = None

    @property
    def is_success(self) -> bool:
        return self.outcome.is_success

    @classmethod
    def from_outcome(
        cls,
        outcome: LevelOutcome,
        message: str | None = None,
        *,
        level: Level | None = None,
        channel_id: int | None = None,
    ) -> LevelActionResult:
        return cls(
            outcome=outcome,
            message=message or outcome.get_message(channel_id=channel_id),
            level=level,
        )
