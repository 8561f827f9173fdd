#!/usr/bin/env python3
"""Main entry point for the Level Vote Bot."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from level_vote_bot.domain.shared.messages import ErrorMessages, LogTemplates
from level_vote_bot.utils.logging import setup_logging

if TYPE_CHECKING:
    from level_vote_bot.config.container import Container

logger = logging.getLogger(__name__)


def log_storage_summary(container: Container) -> None:
    """Say which backend holds the pending levels and whether export works."""
    storage = container.settings.storage
    store = container.store

    if store.primary is not None:
        logger.info(LogTemplates.STORAGE_PRIMARY, storage.google_doc_id, store.fallback.path)
    else:
        if storage.google_doc_id:
            logger.warning(LogTemplates.STORAGE_DOC_NO_CREDENTIALS, storage.google_doc_id)
        logger.info(LogTemplates.STORAGE_LOCAL_ONLY, store.fallback.path)

    if not storage.google_ranked_doc_id:
        logger.info(LogTemplates.STORAGE_RANKED_DOC_UNSET)
    elif container.ranked_document_writer is None:
        logger.warning(LogTemplates.STORAGE_RANKED_NO_CREDENTIALS, storage.google_ranked_doc_id)


def main() -> int:
    from level_vote_bot.config.settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level)

    token_value = settings.discord.token.get_secret_value()
    if not token_value:
        logger.error(ErrorMessages.DISCORD_TOKEN_REQUIRED)
        return 1

    logger.info(LogTemplates.BOT_STARTING.format(environment=settings.environment))

    from level_vote_bot.config.container import create_container
    from level_vote_bot.infrastructure.discord.bot import create_bot

    container = create_container(settings)
    log_storage_summary(container)
    bot = create_bot(container, settings)

    try:
        logger.info(LogTemplates.BOT_STARTING_RUN)
        bot.run_with_graceful_shutdown(token_value)
    except KeyboardInterrupt:
        logger.info(LogTemplates.BOT_KEYBOARD_INTERRUPT)
    except Exception as e:
        logger.exception(LogTemplates.BOT_FATAL_ERROR, e)
        return 1
    else:
        logger.info(LogTemplates.BOT_STOPPED)
    return 0


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
