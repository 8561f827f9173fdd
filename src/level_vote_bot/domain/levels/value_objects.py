"""
Level Domain Value Objects

Immutable value objects for the level voting bounded context.
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict

from level_vote_bot.domain.shared.exceptions import ScoreValidationError
from level_vote_bot.domain.shared.messages import DiscordUIMessages, ErrorMessages
from level_vote_bot.domain.shared.types import MAX_SCORE, MIN_SCORE, ScoreValue

# int() would also take "1_0", "+5" and non-ASCII digits
_ASCII_DIGITS = re.compile(r"[0-9]+")


class ScoreDimension(Enum):
    """The three judged dimensions of a level."""

    SONG = "song"
    DESIGN = "design"
    VIBE = "vibe"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def parse_score(raw: object, dimension: ScoreDimension) -> int:
    """Parse one free-text score into an integer in the closed range [1, 10].

    Accepts ints and strings of ASCII digits (surrounding whitespace is
    ignored). Signs, underscores, floats, booleans and anything else are
    rejected.

    Raises:
        ScoreValidationError: If the value is not a whole number in range.
    """
    if isinstance(raw, bool):
        raise ScoreValidationError(
            ErrorMessages.SCORE_NOT_INTEGER.format(dimension=dimension.label), field=dimension.value
        )
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, str) and _ASCII_DIGITS.fullmatch(raw.strip()):
        value = int(raw.strip())
    else:
        raise ScoreValidationError(
            ErrorMessages.SCORE_NOT_INTEGER.format(dimension=dimension.label), field=dimension.value
        )

    if not MIN_SCORE <= value <= MAX_SCORE:
        raise ScoreValidationError(
            ErrorMessages.SCORE_OUT_OF_RANGE.format(
                dimension=dimension.label, minimum=MIN_SCORE, maximum=MAX_SCORE
            ),
            field=dimension.value,
        )
    return value


class ScoreCard(BaseModel):
    """One voter's three scores, validated as a unit."""

    model_config = ConfigDict(frozen=True, strict=True)

    song: ScoreValue
    design: ScoreValue
    vibe: ScoreValue

    @classmethod
    def parse(cls, song: object, design: object, vibe: object) -> ScoreCard:
        """Build a card from raw user input, raising ScoreValidationError on bad input."""
        return cls(
            song=parse_score(song, ScoreDimension.SONG),
            design=parse_score(design, ScoreDimension.DESIGN),
            vibe=parse_score(vibe, ScoreDimension.VIBE),
        )


class LevelOutcome(Enum):
    """Results of running a level workflow.

    Every mutating command resolves to exactly one of these and the
    invoking user is told which.
    """

    # Successful outcomes
    SUCCESS = "success"

    # Rejected before any mutation
    PERMISSION_DENIED = "permission_denied"
    WRONG_CHANNEL = "wrong_channel"
    NO_LEVELS = "no_levels"
    NOT_FOUND = "not_found"
    ALREADY_ACCEPTED = "already_accepted"
    DUPLICATE_VOTE = "duplicate_vote"
    VALIDATION_ERROR = "validation_error"
    EMPTY_INPUT = "empty_input"
    RESOLUTION_ERROR = "resolution_error"
    UNAVAILABLE = "unavailable"

    # Store failures
    PERSISTENCE_ERROR = "persistence_error"

    @property
    def is_success(self) -> bool:
        return self is LevelOutcome.SUCCESS

    def get_message(self, detail: str = "", channel_id: int | None = None) -> str:
        """Get a user-friendly message for this outcome.

        Args:
            detail: Success text, or the specific reason for a resolution error.
            channel_id: The configured voting channel, for WRONG_CHANNEL.
        """
        messages = {
            LevelOutcome.PERMISSION_DENIED: DiscordUIMessages.ERROR_NO_PERMISSION,
            LevelOutcome.WRONG_CHANNEL: DiscordUIMessages.ERROR_WRONG_CHANNEL.format(
                channel_id=channel_id
            ),
            LevelOutcome.NO_LEVELS: DiscordUIMessages.VOTE_NO_LEVELS,
            LevelOutcome.NOT_FOUND: DiscordUIMessages.LEVEL_NOT_FOUND,
            LevelOutcome.ALREADY_ACCEPTED: DiscordUIMessages.ACCEPT_ALREADY,
            LevelOutcome.DUPLICATE_VOTE: DiscordUIMessages.VOTE_ALREADY_VOTED,
            LevelOutcome.VALIDATION_ERROR: DiscordUIMessages.VOTE_INVALID_SCORES,
            LevelOutcome.EMPTY_INPUT: DiscordUIMessages.REMOVE_REASON_REQUIRED,
            LevelOutcome.RESOLUTION_ERROR: detail or ErrorMessages.THREAD_REFERENCE_INVALID,
            LevelOutcome.UNAVAILABLE: detail or DiscordUIMessages.RANKED_DOC_NOT_CONFIGURED,
            LevelOutcome.PERSISTENCE_ERROR: DiscordUIMessages.ERROR_PERSISTENCE,
        }
        if self is LevelOutcome.SUCCESS:
            return detail or DiscordUIMessages.SUCCESS_GENERIC
        return messages[self]
