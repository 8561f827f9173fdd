"""
Tests for main.py - Main Entry Point

Tests for the main entry point including:
- Logging configuration from logging_config.json, with basicConfig fallback
- Start-up summary of where pending levels are stored
- Token validation
- Container and bot creation
- Exit codes for normal stop, interrupt and crash
"""

import json
import logging
from unittest.mock import MagicMock, mock_open, patch

import pytest
from pydantic import SecretStr

from level_vote_bot.main import cli, log_storage_summary, main
from level_vote_bot.utils.logging import LOGGING_CONFIG_PATH, setup_logging


class TestLoggingSetup:
    """Tests for logging configuration."""

    def _make_valid_config(self) -> dict:
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "handlers": {},
            "loggers": {
                "discord": {"level": "WARNING"},
                "httpx": {"level": "WARNING"},
            },
            "root": {"level": "INFO", "handlers": []},
        }

    def test_dictconfig_called_when_json_exists(self):
        config = self._make_valid_config()
        with (
            patch("builtins.open", mock_open(read_data=json.dumps(config))),
            patch("logging.config.dictConfig") as mock_dc,
        ):
            setup_logging()

            mock_dc.assert_called_once_with(config)

    def test_fallback_to_basicconfig_when_json_missing(self):
        with (
            patch("builtins.open", side_effect=FileNotFoundError),
            patch("logging.basicConfig") as mock_bc,
        ):
            setup_logging()

            mock_bc.assert_called_once()
            assert mock_bc.call_args[1]["level"] == logging.INFO

    def test_fallback_to_basicconfig_when_json_malformed(self):
        with (
            patch("builtins.open", mock_open(read_data="{invalid json")),
            patch("logging.basicConfig") as mock_bc,
        ):
            setup_logging()

            mock_bc.assert_called_once()

    def test_fallback_when_dictconfig_rejects_config(self):
        with (
            patch("builtins.open", mock_open(read_data="{}")),
            patch("logging.config.dictConfig", side_effect=ValueError("bad")),
            patch("logging.basicConfig") as mock_bc,
        ):
            setup_logging("WARNING")

            assert mock_bc.call_args[1]["level"] == logging.WARNING

    def test_root_logger_level_overridden_by_settings(self):
        config = self._make_valid_config()
        with (
            patch("builtins.open", mock_open(read_data=json.dumps(config))),
            patch("logging.config.dictConfig"),
            patch("logging.getLogger") as mock_get_logger,
        ):
            mock_root = MagicMock()
            mock_get_logger.return_value = mock_root

            setup_logging("DEBUG")

            mock_root.setLevel.assert_called_once_with(logging.DEBUG)

    def test_default_config_is_the_repository_file(self):
        assert LOGGING_CONFIG_PATH.name == "logging_config.json"
        assert "level_vote_bot" not in LOGGING_CONFIG_PATH.parts


def make_container(*, primary=True, doc_id="doc-1", ranked_doc_id="", writer=True) -> MagicMock:
    container = MagicMock()
    container.settings.storage.google_doc_id = doc_id
    container.settings.storage.google_ranked_doc_id = ranked_doc_id
    container.store.primary = MagicMock() if primary else None
    container.store.fallback.path = "pending.json"
    container.ranked_document_writer = MagicMock() if writer else None
    return container


class TestStorageSummary:
    def test_google_doc_is_reported_as_primary(self, caplog):
        caplog.set_level(logging.INFO, logger="level_vote_bot.main")

        log_storage_summary(make_container())

        assert "Pending levels live in Google Doc doc-1 (fallback copy at pending.json)" in caplog.text
        assert "!saveranked is disabled" in caplog.text

    def test_local_file_only(self, caplog):
        caplog.set_level(logging.INFO, logger="level_vote_bot.main")

        log_storage_summary(make_container(primary=False, doc_id=""))

        assert "Pending levels live in local file pending.json" in caplog.text
        assert "without Google credentials" not in caplog.text

    def test_doc_id_without_credentials_is_warned(self, caplog):
        log_storage_summary(make_container(primary=False))

        assert "GOOGLE_DOC_ID doc-1 set without Google credentials" in caplog.text

    def test_ranked_doc_without_credentials_is_warned(self, caplog):
        log_storage_summary(make_container(ranked_doc_id="ranked-1", writer=False))

        assert "Ranked doc ranked-1 configured without Google credentials" in caplog.text


@pytest.fixture
def settings():
    mock_settings = MagicMock()
    mock_settings.discord.token = SecretStr("test_token_123")
    mock_settings.log_level = "INFO"
    mock_settings.environment = "test"
    return mock_settings


@pytest.fixture
def bot():
    return MagicMock()


@pytest.fixture
def patched(settings, bot):
    """Patch everything main() reaches for; yields the container factory mock."""
    with (
        patch("level_vote_bot.config.settings.get_settings", return_value=settings),
        patch("level_vote_bot.main.setup_logging"),
        patch("level_vote_bot.config.container.create_container") as create_container,
        patch("level_vote_bot.infrastructure.discord.bot.create_bot", return_value=bot) as create_bot,
    ):
        yield create_container, create_bot


class TestMainFunction:
    """Tests for main entry point function."""

    def test_main_returns_error_without_token(self, settings, patched):
        settings.discord.token = SecretStr("")
        create_container, _ = patched

        assert main() == 1
        create_container.assert_not_called()

    def test_main_successful_run(self, bot, patched):
        assert main() == 0
        bot.run_with_graceful_shutdown.assert_called_once_with("test_token_123")

    def test_main_handles_keyboard_interrupt(self, bot, patched):
        bot.run_with_graceful_shutdown.side_effect = KeyboardInterrupt()

        assert main() == 0

    def test_main_handles_exception(self, bot, patched):
        bot.run_with_graceful_shutdown.side_effect = RuntimeError("Bot crashed!")

        assert main() == 1

    def test_main_wires_container_and_bot(self, settings, patched):
        create_container, create_bot = patched

        main()

        create_container.assert_called_once_with(settings)
        create_bot.assert_called_once_with(create_container.return_value, settings)

    def test_main_logs_storage_summary(self, patched):
        create_container, _ = patched

        with patch("level_vote_bot.main.log_storage_summary") as summary:
            main()

        summary.assert_called_once_with(create_container.return_value)

    def test_main_applies_configured_log_level(self, settings, patched):
        settings.log_level = "DEBUG"

        with patch("level_vote_bot.main.setup_logging") as mock_setup:
            main()

        mock_setup.assert_called_once_with("DEBUG")


class TestCli:
    def test_cli_exits_with_main_status(self):
        with patch("level_vote_bot.main.main", return_value=3):
            with pytest.raises(SystemExit) as exc_info:
                cli()

        assert exc_info.value.code == 3
