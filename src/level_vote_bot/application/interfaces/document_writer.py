"""
Document Writer Interface

Port interface for replacing the text of an external report document.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class DocumentWriter(ABC):
    """Abstract destination for exported reports."""

    @abstractmethod
    async def replace_text(self, text: str) -> None:
        """Replace the whole document body with ``text``.

        Raises:
            PersistenceError: If the document could not be written.
        """
        ...
