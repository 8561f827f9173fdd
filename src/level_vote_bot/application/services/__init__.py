"""Application services: authorization, serialized store access and the vote flow."""

from level_vote_bot.application.services.access_policy import AccessConfig, AccessPolicy, Caller
from level_vote_bot.application.services.metadata import fetch_thread_metadata
from level_vote_bot.application.services.registry_gate import LevelRegistryGate

__all__ = [
    "AccessConfig",
    "AccessPolicy",
    "Caller",
    "LevelRegistryGate",
    "fetch_thread_metadata",
]
