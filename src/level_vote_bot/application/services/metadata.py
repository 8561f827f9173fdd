"""Best-effort forum-post metadata lookup with silent fallback."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from level_vote_bot.application.interfaces.thread_resolver import ThreadMetadata
from level_vote_bot.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ..interfaces.thread_resolver import ThreadResolver

logger = logging.getLogger(__name__)


async def fetch_thread_metadata(resolver: ThreadResolver | None, thread_id: str) -> ThreadMetadata:
    """Resolve metadata for ``thread_id``, returning empty metadata on any failure."""
    if resolver is None:
        return ThreadMetadata.empty()
    try:
        return await resolver.resolve(thread_id)
    except Exception as e:
        logger.warning(LogTemplates.METADATA_LOOKUP_FAILED, thread_id, e)
        return ThreadMetadata.empty()
