"""
Domain Layer

Contains pure business logic organized by bounded contexts:
- shared/: Cross-cutting exceptions, constrained types and messages
- levels/: Pending levels, voting rules and ranking
- verification/: Tiered self-verification stages
"""

from level_vote_bot.domain.shared.exceptions import DomainError

__all__ = [
    "DomainError",
]
