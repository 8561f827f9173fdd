"""Tests for serialized load/mutate/save access through LevelRegistryGate."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from level_vote_bot.application.services.registry_gate import LevelRegistryGate
from level_vote_bot.domain.levels.value_objects import ScoreCard
from level_vote_bot.domain.shared.exceptions import DuplicateVoteError, PersistenceError
from level_vote_bot.infrastructure.persistence.memory_store import InMemoryLevelStore


class SlowStore(InMemoryLevelStore):
    """Yields to the loop on every load so interleavings would show up."""

    async def load(self):
        await asyncio.sleep(0)
        return await super().load()


class TestLevelRegistryGate:
    @pytest.mark.asyncio
    async def test_mutation_is_saved(self, gate, level):
        async with gate.mutate() as registry:
            registry.insert(level)

        assert level.id in await gate.read()

    @pytest.mark.asyncio
    async def test_failed_block_saves_nothing(self, seeded_gate, level):
        with pytest.raises(DuplicateVoteError):
            async with seeded_gate.mutate() as registry:
                target = registry.get(level.id)
                target.record_vote(1, ScoreCard(song=5, design=5, vibe=5))
                target.record_vote(1, ScoreCard(song=5, design=5, vibe=5))

        assert (await seeded_gate.read()).get(level.id).vote_count == 0

    @pytest.mark.asyncio
    async def test_save_failure_propagates(self, level):
        store = InMemoryLevelStore()
        store.save = AsyncMock(side_effect=PersistenceError("down", "memory"))
        gate = LevelRegistryGate(store)

        with pytest.raises(PersistenceError):
            async with gate.mutate() as registry:
                registry.insert(level)

    @pytest.mark.asyncio
    async def test_concurrent_votes_are_not_lost(self, level_factory):
        from level_vote_bot.domain.levels.entities import LevelRegistry
        from level_vote_bot.infrastructure.persistence.level_codec import encode_registry

        store = SlowStore(encode_registry(LevelRegistry([level_factory("a")])))
        gate = LevelRegistryGate(store)

        async def vote(user_id: int) -> None:
            async with gate.mutate() as registry:
                registry.get("a").record_vote(user_id, ScoreCard(song=5, design=5, vibe=5))

        await asyncio.gather(*(vote(user_id) for user_id in range(1, 11)))

        assert (await gate.read()).get("a").vote_count == 10

    def test_exposes_store(self, gate, store):
        assert gate.store is store

    @pytest.mark.asyncio
    async def test_degraded_load_is_never_saved(self, level):
        from level_vote_bot.domain.levels.entities import LevelRegistry

        store = InMemoryLevelStore()
        store.load = AsyncMock(return_value=LevelRegistry(degraded=True))
        store.save = AsyncMock()
        gate = LevelRegistryGate(store)

        with pytest.raises(PersistenceError, match="refusing to overwrite"):
            async with gate.mutate() as registry:
                registry.insert(level)

        store.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_degraded_load_is_still_readable(self, level):
        from level_vote_bot.domain.levels.entities import LevelRegistry

        store = InMemoryLevelStore()
        store.load = AsyncMock(return_value=LevelRegistry([level], degraded=True))

        assert level.id in await LevelRegistryGate(store).read()
