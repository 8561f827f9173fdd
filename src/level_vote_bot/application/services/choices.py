"""Select-menu options for picking a pending level."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from level_vote_bot.domain.levels.entities import Level
from level_vote_bot.utils.reply import truncate

# Discord caps select menus at 25 options and labels at 100 characters.
MAX_CHOICES = 25
MAX_LABEL_LENGTH = 100


class LevelChoice(BaseModel):
    """One selectable option in a level picker."""

    model_config = ConfigDict(frozen=True)

    level_id: str
    label: str
    description: str | None = None


def level_choices(levels: Iterable[Level], limit: int = MAX_CHOICES) -> list[LevelChoice]:
    """Build picker options for the first ``limit`` levels in registry order."""
    choices = []
    for level in levels:
        if len(choices) >= limit:
            break
        choices.append(
            LevelChoice(
                level_id=level.id,
                label=truncate(level.display_name or level.id, MAX_LABEL_LENGTH),
                description=truncate(f"ID: {level.id} · {level.vote_count} vote(s)", MAX_LABEL_LENGTH),
            )
        )
    return choices
