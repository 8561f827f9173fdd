"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization.

Nested groups are read as ``DISCORD__TOKEN``, ``GUILD__MANAGER_ROLE_NAME`` and
so on. The flat names used by earlier deployments (``TOKEN``, ``MANAGER``,
``GOOGLE_DOC_ID``, ...) are still honoured when the nested form is absent.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..application.services.access_policy import AccessConfig
from ..domain.shared.messages import ErrorMessages
from ..domain.shared.types import CommandPrefixStr
from ..domain.shared.validators import validate_optional_snowflake

DEFAULT_REACTION_EMOJI_ID = 1404415892120539216
DEFAULT_PLACEHOLDER_THUMBNAIL_URL = "https://via.placeholder.com/150"

# Flat environment names of earlier deployments -> (group, field).
LEGACY_ENV_NAMES: dict[str, tuple[str, str]] = {
    "TOKEN": ("discord", "token"),
    "DISCORD_TOKEN": ("discord", "token"),
    "CLIENT_ID": ("discord", "client_id"),
    "GUILD_ID": ("discord", "guild_id"),
    "MANAGER": ("guild", "manager_role_name"),
    "VOTE_PERM_ROLE": ("guild", "vote_perm_role_name"),
    "VOTING_CHANNEL_ID": ("guild", "voting_channel_id"),
    "FORUM_CHANNEL_ID": ("guild", "forum_channel_id"),
    "VOTE_ANNOUNCE_CHANNEL_ID": ("guild", "announce_channel_id"),
    "VOTING_NOTIFICATION": ("guild", "voting_notification_role"),
    "REACTION_EMOJI_ID": ("guild", "reaction_emoji_id"),
    "REMOVE_THUMBNAIL_URL": ("guild", "remove_thumbnail_url"),
    "GOOGLE_SERVICE_ACCOUNT": ("storage", "google_service_account"),
    "GOOGLE_DOC_ID": ("storage", "google_doc_id"),
    "GOOGLE_RANKED_DOC_ID": ("storage", "google_ranked_doc_id"),
    "PORT": ("http", "port"),
}


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


class DiscordSettings(BaseModel):
    """Discord bot configuration."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    token: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("token", "bot_token", "discord_token")
    )
    client_id: int | None = None
    guild_id: int | None = Field(default=None, validation_alias=AliasChoices("guild_id", "guild"))
    command_prefix: CommandPrefixStr = Field(
        default="!", validation_alias=AliasChoices("command_prefix", "prefix")
    )
    sync_on_startup: bool = True

    @field_validator("client_id", "guild_id", mode="before")
    @classmethod
    def _blank_ids(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("client_id", "guild_id")
    @classmethod
    def validate_snowflake_ids(cls, v: int | None) -> int | None:
        return validate_optional_snowflake(v)


class GuildSettings(BaseModel):
    """Roles, channels and presentation settings of the single served guild."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    manager_role_name: str = Field(
        default="", validation_alias=AliasChoices("manager_role_name", "manager")
    )
    vote_perm_role_name: str = Field(
        default="", validation_alias=AliasChoices("vote_perm_role_name", "vote_perm_role")
    )
    voting_channel_id: int | None = None
    forum_channel_id: int | None = None
    announce_channel_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("announce_channel_id", "vote_announce_channel_id"),
    )
    voting_notification_role: str = Field(
        default="",
        validation_alias=AliasChoices("voting_notification_role", "voting_notification"),
    )
    reaction_emoji_id: int | None = DEFAULT_REACTION_EMOJI_ID
    remove_thumbnail_url: str | None = None
    placeholder_thumbnail_url: str = DEFAULT_PLACEHOLDER_THUMBNAIL_URL

    @field_validator(
        "voting_channel_id",
        "forum_channel_id",
        "announce_channel_id",
        "reaction_emoji_id",
        "remove_thumbnail_url",
        mode="before",
    )
    @classmethod
    def _blank_values(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator(
        "voting_channel_id", "forum_channel_id", "announce_channel_id", "reaction_emoji_id"
    )
    @classmethod
    def validate_snowflake_ids(cls, v: int | None) -> int | None:
        return validate_optional_snowflake(v)

    @field_validator("manager_role_name", "vote_perm_role_name", "voting_notification_role")
    @classmethod
    def _strip_names(cls, v: str) -> str:
        return v.strip()

    def access_config(self) -> AccessConfig:
        """The subset the authorization checks need."""
        return AccessConfig(
            manager_role_name=self.manager_role_name,
            vote_perm_role_name=self.vote_perm_role_name,
            voting_channel_id=self.voting_channel_id,
            forum_channel_id=self.forum_channel_id,
        )


class StorageSettings(BaseModel):
    """Where the pending-level registry and the ranking report live."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    google_service_account: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("google_service_account", "service_account"),
    )
    google_doc_id: str = ""
    google_ranked_doc_id: str = ""
    local_path: str = "./pending.json"
    request_timeout_s: float = Field(default=15.0, gt=0, le=120)

    @property
    def has_google_credentials(self) -> bool:
        return bool(self.google_service_account.get_secret_value().strip())


class HttpSettings(BaseModel):
    """Keep-alive HTTP endpoint for hosting platforms that probe a port."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    enabled: bool = True
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)


class Settings(BaseSettings):
    """Application settings container.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - DISCORD__TOKEN, GUILD__FORUM_CHANNEL_ID, STORAGE__GOOGLE_DOC_ID, ... (nested)
    - TOKEN, GUILD_ID, MANAGER, VOTE_PERM_ROLE, PORT, ... (legacy flat names)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    guild: GuildSettings = Field(default_factory=GuildSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    http: HttpSettings = Field(default_factory=HttpSettings)

    @model_validator(mode="before")
    @classmethod
    def apply_legacy_env(cls, data: Any) -> Any:
        """Fill nested fields from the flat legacy variables when not set explicitly."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for env_name, (group, field_name) in LEGACY_ENV_NAMES.items():
            value = os.environ.get(env_name)
            if value is None:
                continue
            section = data.get(group)
            if section is not None and not isinstance(section, dict):
                continue
            section = dict(section or {})
            section.setdefault(field_name, value)
            data[group] = section
        return data

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {
            name for name in logging.getLevelNamesMapping() if name not in ("NOTSET", "WARN", "FATAL")
        }
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=sorted(valid_levels))
            )
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. Environment variables
    2. .env file (if present)
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
