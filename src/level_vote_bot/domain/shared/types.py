"""Reusable Pydantic Annotated types for domain-wide validation.

Every constrained type used across bounded contexts is defined here once,
so models can simply annotate their fields::

    from level_vote_bot.domain.shared.types import LevelIdStr, ScoreValue

    class MyModel(BaseModel):
        level_id: LevelIdStr
        song: ScoreValue
"""

from __future__ import annotations

from typing import Annotated

from pydantic import Field

# ── Numeric constraints ─────────────────────────────────────────────

MIN_SCORE = 1
MAX_SCORE = 10

ScoreValue = Annotated[int, Field(ge=MIN_SCORE, le=MAX_SCORE)]
"""A single judged score: 1 … 10 inclusive."""


# ── String constraints ──────────────────────────────────────────────

LevelIdStr = Annotated[str, Field(min_length=1, max_length=100)]
"""Forum thread id or legacy tag string identifying a level."""

CommandPrefixStr = Annotated[str, Field(min_length=1, max_length=5)]
"""Bot command prefix: 1-5 characters."""
