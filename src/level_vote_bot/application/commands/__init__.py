"""
Application Commands

Command objects and their handlers for every state-changing level workflow.
"""

from level_vote_bot.application.commands.accept_level import AcceptLevelCommand, AcceptLevelHandler
from level_vote_bot.application.commands.cast_vote import CastVoteCommand, CastVoteHandler
from level_vote_bot.application.commands.export_ranking import (
    ExportRankingCommand,
    ExportRankingHandler,
)
from level_vote_bot.application.commands.remove_level import (
    RemovalSelection,
    RemoveLevelCommand,
    RemoveLevelHandler,
)
from level_vote_bot.application.commands.reset_votes import ResetVotesCommand, ResetVotesHandler
from level_vote_bot.application.commands.results import LevelActionResult

__all__ = [
    "LevelActionResult",
    "AcceptLevelCommand",
    "AcceptLevelHandler",
    "CastVoteCommand",
    "CastVoteHandler",
    "ResetVotesCommand",
    "ResetVotesHandler",
    "RemoveLevelCommand",
    "RemoveLevelHandler",
    "RemovalSelection",
    "ExportRankingCommand",
    "ExportRankingHandler",
]
