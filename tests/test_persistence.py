"""
Unit Tests for Level Persistence

Tests for:
- The JSON blob codec (stored key names, blank and malformed input, records
  saved before voter ids were tracked)
- InMemoryLevelStore and LocalFileLevelStore
- FallbackLevelStore load/save degradation rules and the degraded flag
- GoogleDocsLevelStore over a fake document
"""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from level_vote_bot.domain.levels.entities import LevelRegistry
from level_vote_bot.domain.shared.exceptions import PersistenceError
from level_vote_bot.infrastructure.persistence import (
    FallbackLevelStore,
    GoogleDocsLevelStore,
    InMemoryLevelStore,
    LocalFileLevelStore,
    decode_registry,
    encode_registry,
)

LEGACY_BLOB = json.dumps(
    [
        {
            "postIdOrTag": "1400000000000000001",
            "levelName": "Legacy Level",
            "authorId": "<@42>",
            "thumbnailUrl": "https://via.placeholder.com/150",
            "ranks": [],
            "votes": {"song": [8, 6], "design": [7, 5], "vibe": [9, 4]},
            "voters": ["11", "12"],
        }
    ]
)


def failing_store(name: str = "primary", *, load=True, save=True) -> MagicMock:
    store = MagicMock()
    store.name = name
    error = PersistenceError("boom", name)
    store.load = AsyncMock(side_effect=error if load else None, return_value=LevelRegistry())
    store.save = AsyncMock(side_effect=error if save else None)
    return store


# =============================================================================
# Codec
# =============================================================================


class TestLevelCodec:
    def test_decodes_stored_layout(self):
        registry = decode_registry(LEGACY_BLOB)

        level = registry.get("1400000000000000001")
        assert level.display_name == "Legacy Level"
        assert level.scores.song == [8, 6]
        assert level.voter_ids == ["11", "12"]

    def test_encodes_with_stored_key_names(self, level_factory):
        registry = LevelRegistry([level_factory("a", votes=[(1, 5, 6, 7)])])

        payload = json.loads(encode_registry(registry))

        assert payload == [
            {
                "postIdOrTag": "a",
                "levelName": "Cool Level",
                "authorId": "<@42>",
                "thumbnailUrl": None,
                "ranks": [],
                "votes": {"song": [5], "design": [6], "vibe": [7]},
                "voters": ["1"],
            }
        ]

    def test_encoding_is_pretty_printed(self, level_factory):
        text = encode_registry(LevelRegistry([level_factory("a")]))
        assert text.startswith('[\n  {\n    "postIdOrTag"')

    def test_decode_of_encode_preserves_order_and_votes(self, level_factory):
        registry = LevelRegistry(
            [level_factory("b", votes=[(1, 1, 2, 3)]), level_factory("a")]
        )

        assert decode_registry(encode_registry(registry)) == registry

    def test_round_trip_keeps_unvoted_and_busiest_levels(self, level_factory):
        busiest = level_factory(
            "1400000000000000003",
            votes=[(user_id, user_id % 10 + 1, 10 - user_id % 10, 5) for user_id in range(1, 201)],
        )
        registry = LevelRegistry(
            [
                level_factory("1400000000000000001"),
                level_factory("1400000000000000002", votes=[(7, 4, 4, 4)]),
                busiest,
            ]
        )

        restored = decode_registry(encode_registry(registry))

        assert restored == registry
        assert [level.vote_count for level in restored] == [0, 1, 200]
        assert restored.get("1400000000000000003").voter_ids == busiest.voter_ids

    @pytest.mark.parametrize("text", [None, "", "   \n"])
    def test_blank_input_is_empty(self, text):
        assert decode_registry(text).is_empty

    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            '{"postIdOrTag": "a"}',
            '[{"levelName": "missing id"}]',
            '[{"postIdOrTag": "a", "levelName": "x", "votes": {"song": [11], "design": [1], "vibe": [1]}, "voters": ["1"]}]',
        ],
    )
    def test_malformed_input_raises(self, text):
        with pytest.raises(PersistenceError) as exc_info:
            decode_registry(text, "local")
        assert exc_info.value.backend == "local"

    def test_duplicate_ids_in_blob_raise(self):
        entry = {"postIdOrTag": "a", "levelName": "x"}
        with pytest.raises(PersistenceError, match="appears more than once"):
            decode_registry(json.dumps([entry, entry]))

    def test_record_without_voters_gets_placeholders(self):
        blob = json.dumps(
            [
                {"postIdOrTag": "1400000000000000001", "levelName": "Kept"},
                {
                    "postIdOrTag": "1400000000000000002",
                    "levelName": "Before voter ids",
                    "votes": {"song": [8, 6], "design": [7, 5], "vibe": [9, 4]},
                },
            ]
        )

        registry = decode_registry(blob)

        assert [level.id for level in registry] == ["1400000000000000001", "1400000000000000002"]
        old = registry.get("1400000000000000002")
        assert old.voter_ids == ["legacy:0", "legacy:1"]
        assert old.scores.song == [8, 6]
        assert not old.has_voted("11")

    def test_short_voter_list_is_padded_in_front(self):
        blob = json.dumps(
            [
                {
                    "postIdOrTag": "a",
                    "levelName": "x",
                    "votes": {"song": [1, 2, 3], "design": [1, 2, 3], "vibe": [1, 2, 3]},
                    "voters": [42],
                }
            ]
        )

        assert decode_registry(blob).get("a").voter_ids == ["legacy:0", "legacy:1", "42"]

    def test_placeholder_voters_survive_a_save(self):
        blob = json.dumps(
            [{"postIdOrTag": "a", "levelName": "x", "votes": {"song": [4], "design": [5], "vibe": [6]}}]
        )

        payload = json.loads(encode_registry(decode_registry(blob)))

        assert payload[0]["voters"] == ["legacy:0"]
        assert payload[0]["votes"] == {"song": [4], "design": [5], "vibe": [6]}

    def test_unbalanced_scores_still_raise(self):
        blob = json.dumps(
            [{"postIdOrTag": "a", "levelName": "x", "votes": {"song": [4, 5], "design": [5], "vibe": [6]}}]
        )

        with pytest.raises(PersistenceError, match="#0"):
            decode_registry(blob, "memory")


# =============================================================================
# In-memory and local file stores
# =============================================================================


class TestInMemoryLevelStore:
    @pytest.mark.asyncio
    async def test_loads_are_independent_copies(self, level_factory):
        store = InMemoryLevelStore()
        await store.save(LevelRegistry([level_factory("a")]))

        first = await store.load()
        first.remove("a")

        assert "a" in await store.load()


class TestLocalFileLevelStore:
    @pytest.mark.asyncio
    async def test_missing_file_is_empty(self, tmp_path):
        store = LocalFileLevelStore(tmp_path / "pending.json")
        assert (await store.load()).is_empty

    @pytest.mark.asyncio
    async def test_save_then_load(self, tmp_path, level_factory):
        path = tmp_path / "nested" / "pending.json"
        store = LocalFileLevelStore(path)

        await store.save(LevelRegistry([level_factory("a", votes=[(1, 5, 5, 5)])]))

        assert path.exists()
        assert not path.with_name("pending.json.tmp").exists()
        loaded = await store.load()
        assert loaded.get("a").voter_ids == ["1"]

    @pytest.mark.asyncio
    async def test_reads_legacy_file(self, tmp_path):
        path = tmp_path / "pending.json"
        path.write_text(LEGACY_BLOB, encoding="utf-8")

        registry = await LocalFileLevelStore(path).load()

        assert len(registry) == 1

    @pytest.mark.asyncio
    async def test_corrupt_file_raises(self, tmp_path):
        path = tmp_path / "pending.json"
        path.write_text("{oops", encoding="utf-8")

        with pytest.raises(PersistenceError):
            await LocalFileLevelStore(path).load()

    @pytest.mark.asyncio
    async def test_unwritable_target_raises(self, tmp_path):
        # A directory in place of the file makes the rename fail.
        path = tmp_path / "pending.json"
        path.mkdir()

        with pytest.raises(PersistenceError):
            await LocalFileLevelStore(path).save(LevelRegistry())


# =============================================================================
# Fallback store
# =============================================================================


class TestFallbackLevelStore:
    @pytest.mark.asyncio
    async def test_load_prefers_primary(self, tmp_path, level_factory):
        primary = InMemoryLevelStore(encode_registry(LevelRegistry([level_factory("remote")])))
        local = LocalFileLevelStore(tmp_path / "pending.json")
        await local.save(LevelRegistry([level_factory("local")]))

        registry = await FallbackLevelStore(primary, local).load()

        assert [level.id for level in registry] == ["remote"]
        assert not registry.degraded

    @pytest.mark.asyncio
    async def test_load_falls_back_to_local_file(self, tmp_path, level_factory):
        local = LocalFileLevelStore(tmp_path / "pending.json")
        await local.save(LevelRegistry([level_factory("local")]))

        registry = await FallbackLevelStore(failing_store(), local).load()

        assert [level.id for level in registry] == ["local"]
        assert registry.degraded

    @pytest.mark.asyncio
    async def test_load_never_raises(self, tmp_path):
        path = tmp_path / "pending.json"
        path.write_text("garbage", encoding="utf-8")

        registry = await FallbackLevelStore(failing_store(), LocalFileLevelStore(path)).load()

        assert registry.is_empty
        assert registry.degraded

    @pytest.mark.asyncio
    async def test_missing_local_file_after_primary_failure_is_degraded(self, tmp_path):
        local = LocalFileLevelStore(tmp_path / "pending.json")

        registry = await FallbackLevelStore(failing_store(), local).load()

        assert registry.is_empty
        assert registry.degraded

    @pytest.mark.asyncio
    async def test_local_only_load_is_not_degraded(self, tmp_path, level_factory):
        local = LocalFileLevelStore(tmp_path / "pending.json")
        await local.save(LevelRegistry([level_factory("a")]))

        registry = await FallbackLevelStore(None, local).load()

        assert not registry.degraded

    @pytest.mark.asyncio
    async def test_save_without_primary_writes_local(self, tmp_path, level_factory):
        local = LocalFileLevelStore(tmp_path / "pending.json")
        store = FallbackLevelStore(None, local)

        await store.save(LevelRegistry([level_factory("a")]))

        assert "a" in await local.load()
        assert store.primary is None
        assert store.fallback is local

    @pytest.mark.asyncio
    async def test_save_reaching_primary_leaves_local_alone(self, tmp_path, level_factory):
        primary = InMemoryLevelStore()
        local = LocalFileLevelStore(tmp_path / "pending.json")

        await FallbackLevelStore(primary, local).save(LevelRegistry([level_factory("a")]))

        assert "a" in await primary.load()
        assert not local.path.exists()

    @pytest.mark.asyncio
    async def test_failed_primary_save_writes_local_and_reraises(self, tmp_path, level_factory):
        local = LocalFileLevelStore(tmp_path / "pending.json")
        store = FallbackLevelStore(failing_store(load=False), local)

        with pytest.raises(PersistenceError):
            await store.save(LevelRegistry([level_factory("a")]))

        assert "a" in await local.load()


# =============================================================================
# Google Docs store
# =============================================================================


class TestGoogleDocsLevelStore:
    @pytest.mark.asyncio
    async def test_load_decodes_document_text(self):
        document = MagicMock()
        document.read_text = AsyncMock(return_value=LEGACY_BLOB)

        registry = await GoogleDocsLevelStore(document).load()

        assert "1400000000000000001" in registry

    @pytest.mark.asyncio
    async def test_empty_document_is_empty_registry(self):
        document = MagicMock()
        document.read_text = AsyncMock(return_value="\n")

        assert (await GoogleDocsLevelStore(document).load()).is_empty

    @pytest.mark.asyncio
    async def test_save_replaces_text_with_blob(self, level_factory):
        document = MagicMock()
        document.replace_text = AsyncMock()
        registry = LevelRegistry([level_factory("a")])

        await GoogleDocsLevelStore(document).save(registry)

        document.replace_text.assert_awaited_once_with(encode_registry(registry))
