"""Shared validators for Discord ids and free-text input."""

from __future__ import annotations

from level_vote_bot.domain.shared.exceptions import EmptyInputError
from level_vote_bot.domain.shared.messages import ErrorMessages


def validate_discord_snowflake(value: int) -> int:
    """Validate a Discord snowflake ID.

    Discord snowflake IDs are 64-bit unsigned integers representing unique
    identifiers for users, guilds, channels, messages, etc.

    Raises:
        ValueError: If the snowflake ID is invalid.
    """
    if value <= 0:
        raise ValueError(ErrorMessages.INVALID_SNOWFLAKE)
    if value >= 2**64:
        raise ValueError(ErrorMessages.SNOWFLAKE_TOO_LARGE)
    return value


def validate_optional_snowflake(value: int | None) -> int | None:
    if value is None:
        return None
    return validate_discord_snowflake(value)


def require_text(value: str, field: str) -> str:
    """Return ``value`` stripped of surrounding whitespace.

    Raises:
        EmptyInputError: If nothing is left after stripping.
    """
    text = value.strip()
    if not text:
        raise EmptyInputError(ErrorMessages.TEXT_REQUIRED.format(field=field), field=field)
    return text
