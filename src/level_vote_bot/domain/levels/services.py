"""
Level Domain Services

Domain services containing ranking and presentation rules for levels.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping

from pydantic import BaseModel, ConfigDict

from level_vote_bot.domain.levels.entities import Level

_MENTION = re.compile(r"^<@!?(\d+)>$")


def author_mention(author_ref: str) -> str:
    """Render an author reference as a user mention.

    Stored references are either already a mention or a bare user id.
    Empty references stay empty.
    """
    if not author_ref:
        return ""
    if _MENTION.match(author_ref):
        return author_ref
    return f"<@{author_ref}>"


class RankedLevel(BaseModel):
    """A level with its per-dimension averages and overall score."""

    model_config = ConfigDict(frozen=True)

    level_id: str
    display_name: str
    author_ref: str
    vote_count: int
    song: float
    design: float
    vibe: float
    overall: float


class LevelRankingService:
    """Domain service for ranking voted levels.

    Only levels with at least one vote are ranked. The overall score is the
    unweighted mean of the three dimension averages.
    """

    @classmethod
    def score(cls, level: Level) -> RankedLevel | None:
        """Compute the averages for one level, or None if it has no votes."""
        averages = level.scores.averages()
        if averages is None:
            return None
        song, design, vibe = averages
        return RankedLevel(
            level_id=level.id,
            display_name=level.display_name,
            author_ref=level.author_ref,
            vote_count=level.vote_count,
            song=song,
            design=design,
            vibe=vibe,
            overall=(song + design + vibe) / 3,
        )

    @classmethod
    def rank(cls, levels: Iterable[Level]) -> list[RankedLevel]:
        """Rank voted levels by overall score, highest first.

        ``sorted`` is stable, so ties keep their registry order.
        """
        scored = [ranked for ranked in (cls.score(level) for level in levels) if ranked]
        return sorted(scored, key=lambda ranked: ranked.overall, reverse=True)

    @classmethod
    def format_entry(
        cls,
        position: int,
        ranked: RankedLevel,
        display_name: str | None = None,
        author: str | None = None,
    ) -> str:
        name = display_name or ranked.display_name
        by = author or author_mention(ranked.author_ref)
        return (
            f"{position}. {name} by {by} | {ranked.level_id}\n"
            f"   Song: {ranked.song:.2f}, Design: {ranked.design:.2f}, "
            f"Vibe: {ranked.vibe:.2f}, Overall: {ranked.overall:.2f}"
        )

    @classmethod
    def format_report(
        cls,
        ranking: list[RankedLevel],
        overrides: Mapping[str, tuple[str | None, str | None]] | None = None,
    ) -> str:
        """Build the plain-text ranking report.

        Args:
            ranking: Output of :meth:`rank`.
            overrides: Optional fresher ``(name, author)`` per level id.
        """
        overrides = overrides or {}
        lines = []
        for position, ranked in enumerate(ranking, start=1):
            name, author = overrides.get(ranked.level_id, (None, None))
            lines.append(cls.format_entry(position, ranked, name, author))
        return "\n\n".join(lines)
