"""Google Docs integration used for level storage and ranking export."""

from level_vote_bot.infrastructure.google.docs_client import (
    GoogleDocsClient,
    GoogleDocsDocument,
    load_service_account_credentials,
)

__all__ = [
    "GoogleDocsClient",
    "GoogleDocsDocument",
    "load_service_account_credentials",
]
