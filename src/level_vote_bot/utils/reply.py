"""Helpers for parsing prefix-command text and shaping replies."""

from __future__ import annotations

import re
from functools import cache

_QUOTED_ARG = re.compile(r'"([^"]+)"|(\S+)')
_HEX_COLOR = re.compile(r"^#([0-9A-F]{6}|[0-9A-F]{3})$", re.IGNORECASE)
_CHANNEL_MENTION = re.compile(r"^<#(\d+)>$")

DEFAULT_EMBED_COLOR = 0x5865F2


@cache
def truncate(text: str, max_length: int = 90) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + "…"


def parse_quoted_args(text: str) -> list[str]:
    """Split on whitespace, keeping ``"double quoted"`` runs together.

    Quotes around a non-empty run are stripped.
    """
    return [quoted or bare for quoted, bare in _QUOTED_ARG.findall(text)]


def parse_hex_color(value: str | None, default: int = DEFAULT_EMBED_COLOR) -> int:
    """Parse ``#RGB`` or ``#RRGGBB``; anything else gives ``default``."""
    if not value or not _HEX_COLOR.match(value):
        return default
    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits, 16)


def parse_channel_id(value: str) -> int | None:
    """Accept a ``<#id>`` mention or a bare numeric id."""
    value = value.strip()
    match = _CHANNEL_MENTION.match(value)
    if match:
        return int(match.group(1))
    if value.isdigit():
        return int(value)
    return None
