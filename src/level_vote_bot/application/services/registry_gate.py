"""Serialized load → mutate → save access to the pending-level store.

The backing store has no compare-and-swap, so two handlers that each load,
mutate and save the whole registry would overwrite each other's changes.
Every mutation therefore runs under one in-process lock.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from ...domain.shared.exceptions import PersistenceError
from ...domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from ...domain.levels.entities import LevelRegistry
    from ...domain.levels.repository import LevelStore

logger = logging.getLogger(__name__)


class LevelRegistryGate:
    """Single-writer gateway in front of a :class:`LevelStore`."""

    def __init__(self, store: LevelStore) -> None:
        self._store = store
        self._lock = asyncio.Lock()

    @property
    def store(self) -> LevelStore:
        return self._store

    async def read(self) -> LevelRegistry:
        """Load a snapshot for display. Not locked; sees the last committed write."""
        return await self._store.load()

    @asynccontextmanager
    async def mutate(self) -> AsyncIterator[LevelRegistry]:
        """Yield a freshly loaded registry and save it when the block completes.

        If the block raises, nothing is saved and the exception propagates.
        A failed save propagates as PersistenceError. The block must not
        await anything between mutating and returning.

        Raises:
            PersistenceError: Before yielding, if the store could not be read
                and handed back a degraded registry.
        """
        async with self._lock:
            registry = await self._store.load()
            if registry.degraded:
                logger.error(LogTemplates.STORE_MUTATION_REFUSED, self._store.name)
                raise PersistenceError(ErrorMessages.STORE_DEGRADED, self._store.name)
            yield registry
            await self._store.save(registry)
