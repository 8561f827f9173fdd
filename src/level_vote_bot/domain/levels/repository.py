"""
Level Domain Repository Interfaces

Abstract base class defining the contract for pending-level persistence.
"""

from abc import ABC, abstractmethod

from level_vote_bot.domain.levels.entities import LevelRegistry


class LevelStore(ABC):
    """Abstract whole-collection store for pending levels.

    There are no partial updates: every operation reads the full registry,
    mutates it in memory and writes the full registry back.
    """

    name: str = "store"

    @abstractmethod
    async def load(self) -> LevelRegistry:
        """Read every pending level.

        Returns:
            The registry; empty if nothing has been stored yet.

        Raises:
            PersistenceError: If the backend is unreachable or its content is
                malformed. The gateway store turns this into an empty registry.
        """
        ...

    @abstractmethod
    async def save(self, registry: LevelRegistry) -> None:
        """Replace the stored collection with ``registry``.

        Raises:
            PersistenceError: If the write did not reach the authoritative backend.
        """
        ...
