"""Level Vote Bot: community Discord bot for accepting, scoring and ranking levels."""

__version__ = "1.0.0"
