"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for stores, adapters and handlers.
Components are created on-demand and cached for reuse throughout the application.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import DiscordUIMessages, ErrorMessages, LogTemplates

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.commands.accept_level import AcceptLevelHandler
    from ..application.commands.cast_vote import CastVoteHandler
    from ..application.commands.export_ranking import ExportRankingHandler
    from ..application.commands.remove_level import RemoveLevelHandler
    from ..application.commands.reset_votes import ResetVotesHandler
    from ..application.interfaces.document_writer import DocumentWriter
    from ..application.interfaces.notifier import LevelNotifier
    from ..application.interfaces.thread_resolver import ThreadResolver
    from ..application.queries.rank_levels import RankLevelsHandler
    from ..application.services.access_policy import AccessPolicy
    from ..application.services.registry_gate import LevelRegistryGate
    from ..domain.levels.repository import LevelStore
    from ..infrastructure.google.docs_client import GoogleDocsClient
    from ..infrastructure.web.uptime_server import UptimeServer
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    This container manages all application dependencies and their lifecycle.
    Components are lazily initialized when first accessed.
    """

    settings: Settings
    _bot: Bot | None = None

    # Persistence
    _store: LevelStore | None = None
    _registry_gate: LevelRegistryGate | None = None

    # Infrastructure adapters
    _google_client: GoogleDocsClient | None = None
    _google_client_resolved: bool = False
    _thread_resolver: ThreadResolver | None = None
    _notifier: LevelNotifier | None = None
    _uptime_server: UptimeServer | None = None

    # Application services
    _access_policy: AccessPolicy | None = None

    # Command handlers
    _accept_level_handler: AcceptLevelHandler | None = None
    _cast_vote_handler: CastVoteHandler | None = None
    _reset_votes_handler: ResetVotesHandler | None = None
    _remove_level_handler: RemoveLevelHandler | None = None
    _export_ranking_handler: ExportRankingHandler | None = None

    # Query handlers
    _rank_levels_handler: RankLevelsHandler | None = None

    def set_bot(self, bot: Bot) -> None:
        """Set the Discord bot instance."""
        self._bot = bot

    @property
    def bot(self) -> Bot:
        """Get the Discord bot instance."""
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === Google ===

    @property
    def google_client(self) -> GoogleDocsClient | None:
        """Shared Docs client, or None when credentials are absent or unusable."""
        if not self._google_client_resolved:
            self._google_client_resolved = True
            storage = self.settings.storage
            if storage.has_google_credentials:
                from ..infrastructure.google.docs_client import (
                    GoogleDocsClient,
                    load_service_account_credentials,
                )

                try:
                    credentials = load_service_account_credentials(
                        storage.google_service_account.get_secret_value()
                    )
                except ValueError as e:
                    logger.error(LogTemplates.GOOGLE_CLIENT_INIT_FAILED, e)
                else:
                    self._google_client = GoogleDocsClient(
                        credentials, timeout=storage.request_timeout_s
                    )
        return self._google_client

    @property
    def ranked_document_writer(self) -> DocumentWriter | None:
        """Target document of ``!saveranked``; None when it cannot be written."""
        doc_id = self.settings.storage.google_ranked_doc_id
        if not doc_id or self.google_client is None:
            return None

        from ..infrastructure.google.docs_client import GoogleDocsDocument

        return GoogleDocsDocument(self.google_client, doc_id)

    @property
    def ranked_unavailable_message(self) -> str:
        if not self.settings.storage.google_ranked_doc_id:
            return DiscordUIMessages.RANKED_DOC_NOT_CONFIGURED
        return DiscordUIMessages.RANKED_AUTH_REQUIRED

    # === Persistence ===

    @property
    def store(self) -> LevelStore:
        """Google Docs blob backed by a local file copy."""
        if self._store is None:
            from ..infrastructure.persistence import (
                FallbackLevelStore,
                GoogleDocsLevelStore,
                LocalFileLevelStore,
            )

            primary = None
            doc_id = self.settings.storage.google_doc_id
            if doc_id and self.google_client is not None:
                from ..infrastructure.google.docs_client import GoogleDocsDocument

                primary = GoogleDocsLevelStore(GoogleDocsDocument(self.google_client, doc_id))

            self._store = FallbackLevelStore(
                primary, LocalFileLevelStore(self.settings.storage.local_path)
            )
        return self._store

    @property
    def registry_gate(self) -> LevelRegistryGate:
        if self._registry_gate is None:
            from ..application.services.registry_gate import LevelRegistryGate

            self._registry_gate = LevelRegistryGate(self.store)
        return self._registry_gate

    # === Discord adapters ===

    @property
    def access_policy(self) -> AccessPolicy:
        if self._access_policy is None:
            from ..application.services.access_policy import AccessPolicy

            self._access_policy = AccessPolicy(self.settings.guild.access_config())
        return self._access_policy

    @property
    def thread_resolver(self) -> ThreadResolver:
        if self._thread_resolver is None:
            from ..infrastructure.discord.adapters.thread_resolver import DiscordThreadResolver

            self._thread_resolver = DiscordThreadResolver(
                self.bot, self.settings.guild.forum_channel_id
            )
        return self._thread_resolver

    @property
    def notifier(self) -> LevelNotifier:
        if self._notifier is None:
            from ..infrastructure.discord.adapters.notifier import DiscordLevelNotifier

            self._notifier = DiscordLevelNotifier(
                self.bot, self.settings.guild, self.settings.discord.guild_id
            )
        return self._notifier

    @property
    def uptime_server(self) -> UptimeServer:
        if self._uptime_server is None:
            from ..infrastructure.web.uptime_server import UptimeServer

            self._uptime_server = UptimeServer(self.settings.http.host, self.settings.http.port)
        return self._uptime_server

    # === Command Handlers ===

    @property
    def accept_level_handler(self) -> AcceptLevelHandler:
        if self._accept_level_handler is None:
            from ..application.commands.accept_level import AcceptLevelHandler

            self._accept_level_handler = AcceptLevelHandler(
                gate=self.registry_gate,
                policy=self.access_policy,
                resolver=self.thread_resolver,
                notifier=self.notifier,
                placeholder_thumbnail_url=self.settings.guild.placeholder_thumbnail_url,
            )
        return self._accept_level_handler

    @property
    def cast_vote_handler(self) -> CastVoteHandler:
        if self._cast_vote_handler is None:
            from ..application.commands.cast_vote import CastVoteHandler

            self._cast_vote_handler = CastVoteHandler(self.registry_gate)
        return self._cast_vote_handler

    @property
    def reset_votes_handler(self) -> ResetVotesHandler:
        if self._reset_votes_handler is None:
            from ..application.commands.reset_votes import ResetVotesHandler

            self._reset_votes_handler = ResetVotesHandler(
                self.registry_gate, self.access_policy, self.notifier
            )
        return self._reset_votes_handler

    @property
    def remove_level_handler(self) -> RemoveLevelHandler:
        if self._remove_level_handler is None:
            from ..application.commands.remove_level import RemoveLevelHandler

            self._remove_level_handler = RemoveLevelHandler(
                self.registry_gate, self.access_policy, self.notifier
            )
        return self._remove_level_handler

    @property
    def export_ranking_handler(self) -> ExportRankingHandler:
        if self._export_ranking_handler is None:
            from ..application.commands.export_ranking import ExportRankingHandler

            self._export_ranking_handler = ExportRankingHandler(
                gate=self.registry_gate,
                policy=self.access_policy,
                writer=self.ranked_document_writer,
                resolver=self.thread_resolver,
                unavailable_message=self.ranked_unavailable_message,
            )
        return self._export_ranking_handler

    # === Query Handlers ===

    @property
    def rank_levels_handler(self) -> RankLevelsHandler:
        if self._rank_levels_handler is None:
            from ..application.queries.rank_levels import RankLevelsHandler

            self._rank_levels_handler = RankLevelsHandler(self.registry_gate)
        return self._rank_levels_handler

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Initialize all async resources."""
        if self.settings.http.enabled:
            await self.uptime_server.start()

    async def shutdown(self) -> None:
        """Shutdown and cleanup all resources."""
        if self._uptime_server is not None:
            await self._uptime_server.stop()

        if self._google_client is not None:
            await self._google_client.aclose()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
