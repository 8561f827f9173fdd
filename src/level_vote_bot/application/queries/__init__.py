"""Read-only queries over the pending-level registry."""

from level_vote_bot.application.queries.rank_levels import (
    RankingView,
    RankLevelsHandler,
    RankLevelsQuery,
)

__all__ = [
    "RankLevelsQuery",
    "RankLevelsHandler",
    "RankingView",
]
