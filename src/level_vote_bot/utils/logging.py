"""Logging setup and a console formatter that colors the level name."""

from __future__ import annotations

import json
import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Literal, TextIO

LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[3] / "logging_config.json"
FALLBACK_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

ColorMode = Literal["auto", "always", "never"]

_LEVEL_COLORS: dict[int, str] = {
    logging.DEBUG: "\033[36m",
    logging.INFO: "\033[32m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}
_RESET = "\033[0m"


class ColoredFormatter(logging.Formatter):
    """Formatter adding ANSI colors to ``levelname``.

    In ``auto`` mode colors are used only when ``stream`` is a TTY and the
    ``NO_COLOR`` environment variable is unset. ``dictConfig`` passes the
    extra keyword arguments through when they are listed in the formatter
    config.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: Literal["%", "{", "$"] = "%",
        *,
        color: ColorMode = "auto",
        stream: TextIO | None = None,
    ) -> None:
        super().__init__(fmt, datefmt, style)
        self._color = color
        self._stream = stream

    def use_color(self) -> bool:
        if self._color != "auto":
            return self._color == "always"
        if "NO_COLOR" in os.environ:
            return False
        stream = self._stream or sys.stderr
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color():
            return super().format(record)
        # Color a copy so other handlers still see the plain level name.
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{_LEVEL_COLORS.get(record.levelno, '')}{record.levelname}{_RESET}"
        return super().format(colored)


def setup_logging(log_level: str = "INFO", config_path: Path = LOGGING_CONFIG_PATH) -> None:
    """Apply ``config_path`` with dictConfig, or basicConfig if it is unusable.

    The root level always follows ``log_level`` so the environment can turn
    on debug output without editing the JSON file.
    """
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    try:
        with open(config_path) as f:
            logging.config.dictConfig(json.load(f))
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        logging.basicConfig(level=resolved_level, format=FALLBACK_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
        logging.warning("Could not load %s, falling back to basic config", config_path)

    logging.getLogger().setLevel(resolved_level)
