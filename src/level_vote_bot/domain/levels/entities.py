"""Core domain entities for the level voting bounded context."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from level_vote_bot.domain.levels.value_objects import ScoreCard, ScoreDimension
from level_vote_bot.domain.shared.exceptions import (
    DuplicateLevelError,
    DuplicateVoteError,
    LevelNotFoundError,
)
from level_vote_bot.domain.shared.messages import ErrorMessages
from level_vote_bot.domain.shared.types import LevelIdStr, ScoreValue


class ScoreSheet(BaseModel):
    """Append-only score sequences, one per judged dimension."""

    song: list[ScoreValue] = Field(default_factory=list)
    design: list[ScoreValue] = Field(default_factory=list)
    vibe: list[ScoreValue] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.song)

    def is_balanced(self) -> bool:
        return len(self.song) == len(self.design) == len(self.vibe)

    def values_for(self, dimension: ScoreDimension) -> list[int]:
        return getattr(self, dimension.value)

    def append(self, card: ScoreCard) -> None:
        self.song.append(card.song)
        self.design.append(card.design)
        self.vibe.append(card.vibe)

    def clear(self) -> None:
        self.song.clear()
        self.design.clear()
        self.vibe.clear()

    def averages(self) -> tuple[float, float, float] | None:
        """Arithmetic mean per dimension, or None when nobody has voted."""
        if not self.song:
            return None
        return (
            sum(self.song) / len(self.song),
            sum(self.design) / len(self.design),
            sum(self.vibe) / len(self.vibe),
        )


class Level(BaseModel):
    """A community submission accepted for voting.

    Field aliases match the stored document layout so old data keeps loading.
    One vote always appends exactly one entry to each score sequence and one
    voter id, so the four sequences stay the same length.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: LevelIdStr = Field(alias="postIdOrTag")
    display_name: str = Field(alias="levelName")
    author_ref: str = Field(default="", alias="authorId")
    thumbnail_ref: str | None = Field(default=None, alias="thumbnailUrl")
    ranks: list[int] = Field(default_factory=list)  # legacy, never read
    scores: ScoreSheet = Field(default_factory=ScoreSheet, alias="votes")
    voter_ids: list[str] = Field(default_factory=list, alias="voters")

    @field_validator("voter_ids", mode="before")
    @classmethod
    def _stringify_voters(cls, v: object) -> object:
        if isinstance(v, list | tuple):
            return [str(item) for item in v]
        return v

    @model_validator(mode="after")
    def _check_vote_invariants(self) -> Level:
        if not self.scores.is_balanced() or self.scores.count != len(self.voter_ids):
            raise ValueError(ErrorMessages.SCORE_LENGTH_MISMATCH)
        seen: set[str] = set()
        for voter in self.voter_ids:
            if voter in seen:
                raise ValueError(ErrorMessages.DUPLICATE_VOTER.format(user_id=voter))
            seen.add(voter)
        return self

    @classmethod
    def accepted(
        cls,
        level_id: str,
        display_name: str,
        author_ref: str = "",
        thumbnail_ref: str | None = None,
    ) -> Level:
        """Create a freshly accepted level with no votes."""
        return cls(
            id=level_id,
            display_name=display_name or level_id,
            author_ref=author_ref,
            thumbnail_ref=thumbnail_ref,
        )

    @property
    def vote_count(self) -> int:
        return len(self.voter_ids)

    def has_voted(self, user_id: str | int) -> bool:
        return str(user_id) in self.voter_ids

    def record_vote(self, user_id: str | int, card: ScoreCard) -> None:
        """Append one vote atomically. Raises DuplicateVoteError on a second vote."""
        voter = str(user_id)
        if voter in self.voter_ids:
            raise DuplicateVoteError(self.id, voter)
        self.scores.append(card)
        self.voter_ids.append(voter)

    def reset_votes(self) -> None:
        """Drop every vote and voter; identity and display fields are kept."""
        self.scores.clear()
        self.voter_ids.clear()


class LevelRegistry:
    """In-memory collection of pending levels keyed by id, in insertion order.

    Rebuilt from the store for every operation and discarded after the
    matching save. No locking here; callers serialize through the registry gate.

    ``degraded`` marks a registry built after the authoritative store could
    not be read. It is fine to display but must not be saved back.
    """

    def __init__(self, levels: Iterable[Level] = (), *, degraded: bool = False) -> None:
        self._levels: dict[str, Level] = {}
        self.degraded = degraded
        for level in levels:
            self.insert(level)

    def __len__(self) -> int:
        return len(self._levels)

    def __iter__(self) -> Iterator[Level]:
        return iter(self._levels.values())

    def __contains__(self, level_id: object) -> bool:
        return level_id in self._levels

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LevelRegistry):
            return NotImplemented
        return self.list_all() == other.list_all()

    def __repr__(self) -> str:
        return f"LevelRegistry({list(self._levels)!r})"

    @property
    def is_empty(self) -> bool:
        return not self._levels

    def find_by_id(self, level_id: str) -> Level | None:
        return self._levels.get(level_id)

    def get(self, level_id: str) -> Level:
        """Like find_by_id, but raises LevelNotFoundError when absent."""
        level = self._levels.get(level_id)
        if level is None:
            raise LevelNotFoundError(level_id)
        return level

    def insert(self, level: Level) -> None:
        if level.id in self._levels:
            raise DuplicateLevelError(level.id)
        self._levels[level.id] = level

    def remove(self, level_id: str) -> Level | None:
        return self._levels.pop(level_id, None)

    def list_all(self) -> list[Level]:
        return list(self._levels.values())

    def first(self, limit: int) -> list[Level]:
        """The first ``limit`` levels in listing order (used for capped menus)."""
        return self.list_all()[:limit]
