"""
Thread Resolver Interface

Port interface for looking up forum-post metadata.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict


class ThreadMetadata(BaseModel):
    """Best-effort metadata for a forum post. Any field may be missing."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    owner_ref: str | None = None
    thumbnail_url: str | None = None

    @classmethod
    def empty(cls) -> ThreadMetadata:
        return cls()


class ThreadResolver(ABC):
    """Abstract interface for resolving a forum thread id to display metadata."""

    @abstractmethod
    async def resolve(self, thread_id: str) -> ThreadMetadata:
        """Look up a forum post.

        Implementations may raise on transport failures; callers go through
        :func:`fetch_thread_metadata`, which never does.
        """
        ...
