"""
Unit Tests for Dependency Injection Container

Tests for:
- Bot instance management (set_bot, bot property, error when not set)
- Lazy initialization and caching of stores, adapters and handlers
- Google client resolution from credentials (absent, invalid, valid)
- Ranked document availability
- Lifecycle methods (initialize, shutdown)
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from level_vote_bot.application.commands import (
    AcceptLevelHandler,
    CastVoteHandler,
    ExportRankingHandler,
    RemoveLevelHandler,
    ResetVotesHandler,
)
from level_vote_bot.application.queries import RankLevelsHandler
from level_vote_bot.config.container import Container, create_container
from level_vote_bot.config.settings import (
    GuildSettings,
    HttpSettings,
    Settings,
    StorageSettings,
)
from level_vote_bot.domain.shared.messages import DiscordUIMessages
from level_vote_bot.infrastructure.persistence import FallbackLevelStore, GoogleDocsLevelStore

FAKE_SERVICE_ACCOUNT = '{"type": "service_account", "client_email": "bot@example.iam"}'


def make_settings(tmp_path, **storage) -> Settings:
    return Settings(
        _env_file=None,
        guild=GuildSettings(manager_role_name="Mods", forum_channel_id=22),
        storage=StorageSettings(local_path=str(tmp_path / "pending.json"), **storage),
        http=HttpSettings(enabled=False),
    )


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def container(settings):
    return Container(settings=settings)


@pytest.fixture
def mock_bot():
    bot = MagicMock()
    bot.user.id = 123456789
    return bot


# =============================================================================
# Bot management
# =============================================================================


class TestBotManagement:
    def test_bot_property_requires_set_bot(self, container):
        with pytest.raises(RuntimeError, match="Bot not initialized"):
            _ = container.bot

    def test_set_bot(self, container, mock_bot):
        container.set_bot(mock_bot)
        assert container.bot is mock_bot

    def test_discord_adapters_need_the_bot(self, container):
        with pytest.raises(RuntimeError):
            _ = container.notifier


# =============================================================================
# Persistence
# =============================================================================


class TestStoreWiring:
    def test_without_google_the_local_file_is_authoritative(self, container, tmp_path):
        store = container.store

        assert isinstance(store, FallbackLevelStore)
        assert store.primary is None
        assert str(store.fallback.path) == str(tmp_path / "pending.json")

    def test_store_and_gate_are_cached(self, container):
        assert container.store is container.store
        assert container.registry_gate is container.registry_gate
        assert container.registry_gate.store is container.store

    def test_google_doc_becomes_primary(self, tmp_path):
        settings = make_settings(tmp_path, google_service_account=FAKE_SERVICE_ACCOUNT, google_doc_id="doc-1")
        container = Container(settings=settings)

        with patch(
            "level_vote_bot.infrastructure.google.docs_client.load_service_account_credentials",
            return_value=MagicMock(),
        ):
            store = container.store

        assert isinstance(store.primary, GoogleDocsLevelStore)

    def test_doc_id_without_credentials_stays_local(self, tmp_path):
        container = Container(settings=make_settings(tmp_path, google_doc_id="doc-1"))

        assert container.store.primary is None


# =============================================================================
# Google client and ranked document
# =============================================================================


class TestGoogleClient:
    def test_absent_credentials(self, container):
        assert container.google_client is None

    def test_invalid_credentials_are_logged_once(self, tmp_path, caplog):
        container = Container(settings=make_settings(tmp_path, google_service_account="{broken"))

        assert container.google_client is None
        assert container.google_client is None
        assert caplog.text.count("Failed to init Google service account") == 1

    def test_valid_credentials_build_one_client(self, tmp_path):
        container = Container(settings=make_settings(tmp_path, google_service_account=FAKE_SERVICE_ACCOUNT))

        with patch(
            "level_vote_bot.infrastructure.google.docs_client.load_service_account_credentials",
            return_value=MagicMock(),
        ) as mock_load:
            client = container.google_client
            assert container.google_client is client

        assert client is not None
        mock_load.assert_called_once_with(FAKE_SERVICE_ACCOUNT)

    def test_ranked_doc_not_configured(self, container):
        assert container.ranked_document_writer is None
        assert container.ranked_unavailable_message == DiscordUIMessages.RANKED_DOC_NOT_CONFIGURED

    def test_ranked_doc_without_credentials(self, tmp_path):
        container = Container(settings=make_settings(tmp_path, google_ranked_doc_id="ranked"))

        assert container.ranked_document_writer is None
        assert container.ranked_unavailable_message == DiscordUIMessages.RANKED_AUTH_REQUIRED

    def test_ranked_doc_writer(self, tmp_path):
        container = Container(
            settings=make_settings(
                tmp_path, google_service_account=FAKE_SERVICE_ACCOUNT, google_ranked_doc_id="ranked"
            )
        )

        with patch(
            "level_vote_bot.infrastructure.google.docs_client.load_service_account_credentials",
            return_value=MagicMock(),
        ):
            writer = container.ranked_document_writer

        assert writer.name == "ranked"


# =============================================================================
# Handlers
# =============================================================================


class TestHandlers:
    @pytest.mark.parametrize(
        ("attribute", "handler_type"),
        [
            ("accept_level_handler", AcceptLevelHandler),
            ("cast_vote_handler", CastVoteHandler),
            ("reset_votes_handler", ResetVotesHandler),
            ("remove_level_handler", RemoveLevelHandler),
            ("export_ranking_handler", ExportRankingHandler),
            ("rank_levels_handler", RankLevelsHandler),
        ],
    )
    def test_handlers_are_lazy_and_cached(self, container, mock_bot, attribute, handler_type):
        container.set_bot(mock_bot)

        handler = getattr(container, attribute)

        assert isinstance(handler, handler_type)
        assert getattr(container, attribute) is handler

    def test_access_policy_uses_guild_settings(self, container):
        assert container.access_policy.config.manager_role_name == "Mods"
        assert container.access_policy.config.forum_channel_id == 22


# =============================================================================
# Lifecycle
# =============================================================================


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_initialize_skips_disabled_http(self, container):
        await container.initialize()

        assert container._uptime_server is None

    @pytest.mark.asyncio
    async def test_initialize_starts_uptime_server(self, tmp_path):
        settings = make_settings(tmp_path).model_copy(update={"http": HttpSettings(enabled=True)})
        container = Container(settings=settings)
        server = MagicMock()
        server.start = AsyncMock()
        container._uptime_server = server

        await container.initialize()

        server.start.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_shutdown_stops_server_and_client(self, container):
        server = MagicMock()
        server.stop = AsyncMock()
        client = MagicMock()
        client.aclose = AsyncMock()
        container._uptime_server = server
        container._google_client = client

        await container.shutdown()

        server.stop.assert_awaited_once()
        client.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_shutdown_with_nothing_started(self, container):
        # Should not raise
        await container.shutdown()


class TestCreateContainer:
    def test_create_container(self, settings):
        container = create_container(settings)

        assert isinstance(container, Container)
        assert container.settings is settings
