"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when domain validation fails."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class EntityNotFoundError(DomainError):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, identifier: str | int, message: str | None = None) -> None:
        msg = message or f"{entity_type} with id '{identifier}' not found"
        super().__init__(msg, code="ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.identifier = identifier


class BusinessRuleViolationError(DomainError):
    """Raised when a business rule is violated."""

    def __init__(self, rule: str, message: str | None = None) -> None:
        msg = message or f"Business rule violated: {rule}"
        super().__init__(msg, code="BUSINESS_RULE_VIOLATION")
        self.rule = rule


# ── Level workflow errors ───────────────────────────────────────────


class PermissionDeniedError(DomainError):
    """Raised when the caller lacks the role an operation requires."""

    def __init__(self, role_name: str, message: str | None = None) -> None:
        msg = message or f"Role '{role_name}' is required"
        super().__init__(msg, code="PERMISSION_DENIED")
        self.role_name = role_name


class WrongChannelError(DomainError):
    """Raised when a command is used outside the channel it is bound to."""

    def __init__(self, expected_channel_id: int | None, actual_channel_id: int | None) -> None:
        super().__init__(
            f"Expected channel {expected_channel_id}, got {actual_channel_id}",
            code="WRONG_CHANNEL",
        )
        self.expected_channel_id = expected_channel_id
        self.actual_channel_id = actual_channel_id


class LevelNotFoundError(EntityNotFoundError):
    """Raised when a level id is not present in the registry."""

    def __init__(self, level_id: str) -> None:
        super().__init__("Level", level_id)
        self.level_id = level_id


class DuplicateLevelError(BusinessRuleViolationError):
    """Raised when inserting a level whose id is already registered."""

    def __init__(self, level_id: str) -> None:
        super().__init__("unique_level_id", f"Level '{level_id}' is already registered")
        self.level_id = level_id


class AlreadyAcceptedError(DuplicateLevelError):
    """Raised when a forum post is accepted a second time."""


class DuplicateVoteError(BusinessRuleViolationError):
    """Raised when a user votes twice on the same level."""

    def __init__(self, level_id: str, user_id: str) -> None:
        super().__init__(
            "one_vote_per_user", f"User '{user_id}' already voted on level '{level_id}'"
        )
        self.level_id = level_id
        self.user_id = user_id


class ScoreValidationError(ValidationError):
    """Raised when a score is non-numeric or outside the allowed range."""


class EmptyInputError(ValidationError):
    """Raised when required free text, such as a removal reason, is blank."""


class ResolutionError(DomainError):
    """Raised when an external thread reference cannot be turned into an id."""

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message, code="RESOLUTION_ERROR")
        self.raw = raw


class PersistenceError(DomainError):
    """Raised when the backing store cannot be read or written."""

    def __init__(self, message: str, backend: str | None = None) -> None:
        super().__init__(message, code="PERSISTENCE_ERROR")
        self.backend = backend


class InvalidOperationError(DomainError):
    """Raised when an operation is invalid in the current state."""

    def __init__(self, operation: str, current_state: str, message: str | None = None) -> None:
        msg = message or f"Cannot perform '{operation}' in state '{current_state}'"
        super().__init__(msg, code="INVALID_OPERATION")
        self.operation = operation
        self.current_state = current_state
