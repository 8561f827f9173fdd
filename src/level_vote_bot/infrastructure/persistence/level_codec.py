"""JSON codec for the pending-level blob.

The stored form is a JSON array of objects with the keys ``postIdOrTag``,
``levelName``, ``authorId``, ``thumbnailUrl``, ``ranks``, ``votes`` and
``voters``, pretty-printed with two-space indentation.

Records written before voter ids were tracked carry votes but no (or too
few) ``voters``. Those are filled with ``legacy:<n>`` placeholders on load
so the record stays valid and its scores keep counting.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from level_vote_bot.domain.levels.entities import Level, LevelRegistry
from level_vote_bot.domain.shared.exceptions import DuplicateLevelError, PersistenceError
from level_vote_bot.domain.shared.messages import ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)

LEGACY_VOTER_PREFIX = "legacy:"


def encode_registry(registry: LevelRegistry) -> str:
    """Serialize a registry in insertion order."""
    payload = [level.model_dump(mode="json", by_alias=True) for level in registry]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def _fill_legacy_voters(record: Any) -> Any:
    """Pad a record's voter list up to its vote count. Load-only."""
    if not isinstance(record, dict):
        return record
    votes = record.get("votes")
    if not isinstance(votes, dict) or not isinstance(votes.get("song"), list):
        return record
    voters = record.get("voters")
    if voters is None:
        voters = []
    if not isinstance(voters, list):
        return record

    missing = len(votes["song"]) - len(voters)
    if missing <= 0:
        return record

    logger.warning(LogTemplates.STORE_LEGACY_VOTERS, record.get("postIdOrTag"), missing)
    placeholders = [f"{LEGACY_VOTER_PREFIX}{i}" for i in range(missing)]
    return {**record, "voters": placeholders + [str(v) for v in voters]}


def decode_registry(text: str | None, backend: str | None = None) -> LevelRegistry:
    """Parse a stored blob. Blank text is an empty registry.

    Raises:
        PersistenceError: If the blob is not valid JSON, a record does not
            match the level schema, or the same level is listed twice.
    """
    if text is None or not text.strip():
        return LevelRegistry()

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise PersistenceError(ErrorMessages.STORE_MALFORMED.format(error=e), backend) from e
    if not isinstance(payload, list):
        raise PersistenceError(
            ErrorMessages.STORE_MALFORMED.format(error="top level is not a list"), backend
        )

    levels = []
    for index, record in enumerate(payload):
        try:
            levels.append(Level.model_validate(_fill_legacy_voters(record)))
        except PydanticValidationError as e:
            raise PersistenceError(
                ErrorMessages.STORE_RECORD_MALFORMED.format(index=index, error=e), backend
            ) from e

    try:
        return LevelRegistry(levels)
    except DuplicateLevelError as e:
        raise PersistenceError(
            ErrorMessages.DUPLICATE_LEVEL_IN_BLOB.format(level_id=e.level_id), backend
        ) from e
