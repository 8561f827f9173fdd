"""
Shared Domain Kernel

Contains exceptions, constrained types and message constants shared across
all bounded contexts.
"""

from level_vote_bot.domain.shared.exceptions import (
    AlreadyAcceptedError,
    BusinessRuleViolationError,
    DomainError,
    DuplicateLevelError,
    DuplicateVoteError,
    EmptyInputError,
    EntityNotFoundError,
    InvalidOperationError,
    LevelNotFoundError,
    PermissionDeniedError,
    PersistenceError,
    ResolutionError,
    ScoreValidationError,
    ValidationError,
    WrongChannelError,
)

__all__ = [
    "DomainError",
    "ValidationError",
    "EntityNotFoundError",
    "InvalidOperationError",
    "BusinessRuleViolationError",
    "PermissionDeniedError",
    "WrongChannelError",
    "LevelNotFoundError",
    "DuplicateLevelError",
    "AlreadyAcceptedError",
    "DuplicateVoteError",
    "ScoreValidationError",
    "EmptyInputError",
    "ResolutionError",
    "PersistenceError",
]
