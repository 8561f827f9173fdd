from unittest.mock import AsyncMock, MagicMock

import pytest

from level_vote_bot.application.services.access_policy import AccessConfig, AccessPolicy, Caller
from level_vote_bot.application.services.registry_gate import LevelRegistryGate
from level_vote_bot.domain.levels.entities import Level, LevelRegistry
from level_vote_bot.domain.levels.value_objects import ScoreCard
from level_vote_bot.infrastructure.persistence.level_codec import encode_registry
from level_vote_bot.infrastructure.persistence.memory_store import InMemoryLevelStore

MANAGER_ROLE = "Level Manager"
VOTER_ROLE = "Voter"
VOTING_CHANNEL_ID = 1111111111111111
FORUM_CHANNEL_ID = 2222222222222222
GUILD_ID = 3333333333333333
THREAD_ID = "1400000000000000001"


# ============================================================================
# Access Fixtures
# ============================================================================


@pytest.fixture
def access_config():
    return AccessConfig(
        manager_role_name=MANAGER_ROLE,
        vote_perm_role_name=VOTER_ROLE,
        voting_channel_id=VOTING_CHANNEL_ID,
        forum_channel_id=FORUM_CHANNEL_ID,
    )


@pytest.fixture
def policy(access_config):
    return AccessPolicy(access_config)


@pytest.fixture
def manager():
    """A manager invoking from some channel other than the voting one."""
    return Caller(user_id=100, role_names=frozenset({MANAGER_ROLE}), channel_id=555)


@pytest.fixture
def member():
    """A member without any special role."""
    return Caller(user_id=200, role_names=frozenset(), channel_id=VOTING_CHANNEL_ID)


@pytest.fixture
def voter():
    return Caller(user_id=300, role_names=frozenset({VOTER_ROLE}), channel_id=VOTING_CHANNEL_ID)


# ============================================================================
# Level Fixtures
# ============================================================================


def make_level(level_id: str = THREAD_ID, name: str = "Cool Level", votes=()) -> Level:
    """Build a level with ``votes`` given as ``(user_id, song, design, vibe)`` tuples."""
    level = Level.accepted(level_id, display_name=name, author_ref="<@42>")
    for user_id, song, design, vibe in votes:
        level.record_vote(user_id, ScoreCard(song=song, design=design, vibe=vibe))
    return level


@pytest.fixture
def level_factory():
    return make_level


@pytest.fixture
def level():
    return make_level()


@pytest.fixture
def store():
    return InMemoryLevelStore()


@pytest.fixture
def seeded_store(level):
    return InMemoryLevelStore(encode_registry(LevelRegistry([level])))


@pytest.fixture
def gate(store):
    return LevelRegistryGate(store)


@pytest.fixture
def seeded_gate(seeded_store):
    return LevelRegistryGate(seeded_store)


# ============================================================================
# Port Fakes
# ============================================================================


@pytest.fixture
def notifier():
    fake = MagicMock()
    fake.level_accepted = AsyncMock()
    fake.level_removed = AsyncMock()
    fake.votes_reset = AsyncMock()
    return fake


@pytest.fixture
def resolver():
    from level_vote_bot.application.interfaces.thread_resolver import ThreadMetadata

    fake = MagicMock()
    fake.resolve = AsyncMock(
        return_value=ThreadMetadata(
            title="Forum Title", owner_ref="<@77>", thumbnail_url="https://cdn.example/t.png"
        )
    )
    return fake
