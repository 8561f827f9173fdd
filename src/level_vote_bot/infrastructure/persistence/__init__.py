"""Pending-level persistence backends."""

from level_vote_bot.infrastructure.persistence.fallback_store import FallbackLevelStore
from level_vote_bot.infrastructure.persistence.google_docs_store import GoogleDocsLevelStore
from level_vote_bot.infrastructure.persistence.level_codec import decode_registry, encode_registry
from level_vote_bot.infrastructure.persistence.local_file_store import LocalFileLevelStore
from level_vote_bot.infrastructure.persistence.memory_store import InMemoryLevelStore

__all__ = [
    "FallbackLevelStore",
    "GoogleDocsLevelStore",
    "InMemoryLevelStore",
    "LocalFileLevelStore",
    "decode_registry",
    "encode_registry",
]
