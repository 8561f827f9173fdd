"""
Levels Bounded Context

Domain logic for pending levels: acceptance, one-vote-per-user scoring,
ranking and removal.
"""

from level_vote_bot.domain.levels.entities import Level, LevelRegistry, ScoreSheet
from level_vote_bot.domain.levels.references import parse_thread_reference
from level_vote_bot.domain.levels.repository import LevelStore
from level_vote_bot.domain.levels.services import LevelRankingService, RankedLevel
from level_vote_bot.domain.levels.value_objects import (
    LevelOutcome,
    ScoreCard,
    ScoreDimension,
    parse_score,
)

__all__ = [
    # Entities
    "Level",
    "LevelRegistry",
    "ScoreSheet",
    # Value Objects
    "LevelOutcome",
    "ScoreCard",
    "ScoreDimension",
    "parse_score",
    # Repository
    "LevelStore",
    # Services
    "LevelRankingService",
    "RankedLevel",
    "parse_thread_reference",
]
