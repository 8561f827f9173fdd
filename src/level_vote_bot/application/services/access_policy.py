"""Role and channel checks gating every mutating level operation.

Configuration is injected as an :class:`AccessConfig`; nothing here reads
the environment, so the checks are testable with plain values.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from level_vote_bot.domain.shared.exceptions import PermissionDeniedError, WrongChannelError


class AccessConfig(BaseModel):
    """Role names and channel ids the workflows are bound to."""

    model_config = ConfigDict(frozen=True)

    manager_role_name: str = ""
    vote_perm_role_name: str = ""
    voting_channel_id: int | None = None
    forum_channel_id: int | None = None


class Caller(BaseModel):
    """Who invoked a command, with the role names they hold and where."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    role_names: frozenset[str] = Field(default_factory=frozenset)
    channel_id: int | None = None

    def has_role(self, role_name: str) -> bool:
        return bool(role_name) and role_name in self.role_names


class AccessPolicy:
    """Authorization guard for the level workflows."""

    def __init__(self, config: AccessConfig) -> None:
        self._config = config

    @property
    def config(self) -> AccessConfig:
        return self._config

    def is_manager(self, caller: Caller) -> bool:
        return caller.has_role(self._config.manager_role_name)

    def require_manager(self, caller: Caller) -> None:
        """Raises PermissionDeniedError unless the caller holds the manager role."""
        if not self.is_manager(caller):
            raise PermissionDeniedError(self._config.manager_role_name)

    def require_voter(self, caller: Caller) -> None:
        """Check the voting role first, then the voting channel.

        Raises:
            PermissionDeniedError: Caller lacks the voting-permission role.
            WrongChannelError: Invoked outside the configured voting channel.
        """
        if not caller.has_role(self._config.vote_perm_role_name):
            raise PermissionDeniedError(self._config.vote_perm_role_name)
        expected = self._config.voting_channel_id
        if expected is not None and caller.channel_id != expected:
            raise WrongChannelError(expected, caller.channel_id)
