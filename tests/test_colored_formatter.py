"""Tests for ColoredFormatter and the packaged logging configuration."""

import json
import logging
from io import StringIO
from pathlib import Path
from unittest.mock import patch

import pytest

from level_vote_bot.utils.logging import ColoredFormatter

RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}
LOGGING_CONFIG = Path(__file__).resolve().parents[1] / "logging_config.json"


def _make_record(level: int, message: str = "test") -> logging.LogRecord:
    return logging.LogRecord(
        name="test.logger",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


def _tty() -> StringIO:
    stream = StringIO()
    stream.isatty = lambda: True  # type: ignore[method-assign]
    return stream


class TestColoredFormatter:
    """Tests for ANSI color formatting."""

    @pytest.mark.parametrize(
        "level",
        [logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL],
    )
    def test_color_applied_per_level(self, level: int):
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=_tty())

        output = fmt.format(_make_record(level))

        assert LEVEL_COLORS[level] in output
        assert RESET in output

    def test_no_color_when_no_color_env_set(self):
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=_tty())

        with patch.dict("os.environ", {"NO_COLOR": "1"}):
            output = fmt.format(_make_record(logging.INFO))

        assert "\033[" not in output

    def test_no_color_when_stream_not_tty(self):
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=StringIO())

        assert "\033[" not in fmt.format(_make_record(logging.ERROR))

    def test_always_mode_ignores_tty(self):
        fmt = ColoredFormatter("%(levelname)s", color="always", stream=StringIO())

        assert fmt.format(_make_record(logging.INFO)) == f"{LEVEL_COLORS[logging.INFO]}INFO{RESET}"

    def test_never_mode_on_tty(self):
        fmt = ColoredFormatter("%(levelname)s", color="never", stream=_tty())

        assert fmt.use_color() is False
        assert fmt.format(_make_record(logging.INFO)) == "INFO"

    def test_original_record_not_mutated(self):
        fmt = ColoredFormatter("%(levelname)s | %(message)s", stream=_tty())
        record = _make_record(logging.WARNING)

        fmt.format(record)

        assert record.levelname == "WARNING"

    def test_message_args_are_interpolated(self):
        fmt = ColoredFormatter("%(message)s", color="always")
        record = logging.LogRecord("x", logging.INFO, "x.py", 1, "Loaded %d level(s)", (3,), None)

        assert fmt.format(record) == "Loaded 3 level(s)"


class TestLoggingConfigFile:
    def test_console_formatter_points_at_colored_formatter(self):
        config = json.loads(LOGGING_CONFIG.read_text(encoding="utf-8"))

        console = config["formatters"]["console"]
        assert console["()"] == "level_vote_bot.utils.logging.ColoredFormatter"
        assert config["root"]["handlers"] == ["console"]

    def test_noisy_libraries_are_quieted(self):
        config = json.loads(LOGGING_CONFIG.read_text(encoding="utf-8"))

        for name in ("discord", "httpx", "aiohttp.access"):
            assert config["loggers"][name]["level"] == "WARNING"
