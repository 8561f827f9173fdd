"""
Application Interfaces (Ports)

Abstract interfaces that define contracts between the application
layer and infrastructure adapters. These are the "ports" in
hexagonal architecture.
"""

from level_vote_bot.application.interfaces.document_writer import DocumentWriter
from level_vote_bot.application.interfaces.notifier import LevelNotifier
from level_vote_bot.application.interfaces.thread_resolver import ThreadMetadata, ThreadResolver

__all__ = [
    "DocumentWriter",
    "LevelNotifier",
    "ThreadMetadata",
    "ThreadResolver",
]
