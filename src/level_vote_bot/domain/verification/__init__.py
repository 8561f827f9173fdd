"""
Verification Bounded Context

Tiered self-verification: each use of the command grants the next stage.
"""

from __future__ import annotations

from collections.abc import Collection

VERIFY_STAGES: tuple[str, ...] = (
    "verified",
    "double verified",
    "triple verified",
    "ultimately verified",
)


def next_verification_stage(held_role_names: Collection[str]) -> str | None:
    """Return the first stage role the member does not hold, or None when done.

    Role names are compared case-insensitively.
    """
    held = {name.casefold() for name in held_role_names}
    for stage in VERIFY_STAGES:
        if stage.casefold() not in held:
            return stage
    return None


__all__ = ["VERIFY_STAGES", "next_verification_stage"]
