"""Tests for moodfeed.mood_signal.MoodSignalStore."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from moodfeed.models import MoodSignal
from moodfeed.mood_signal import MoodSignalStore, signal_from_json, signal_to_json
from moodfeed.storage import InMemoryStorage, ReadStatus

KEY = "nuera:last_moods:v1"


def _make_store(raw: str | None = None) -> tuple[MoodSignalStore, InMemoryStorage]:
    storage = InMemoryStorage({KEY: raw} if raw is not None else None)
    return MoodSignalStore(storage, KEY), storage


class TestSetGet:
    def test_absent_when_never_set(self) -> None:
        store, _ = _make_store()
        assert store.get() is None
        assert store.get_result().status is ReadStatus.MISSING

    def test_round_trip(self) -> None:
        store, _ = _make_store()
        signal = MoodSignal(moods=frozenset({"anxious", "tired"}), text="can't sleep")
        store.set(signal)
        assert store.get() == signal

    def test_last_write_wins(self) -> None:
        store, _ = _make_store()
        store.set(MoodSignal(moods=frozenset({"sad"})))
        store.set(MoodSignal(moods=frozenset({"happy"}), text="sunny"))
        assert store.get() == MoodSignal(moods=frozenset({"happy"}), text="sunny")

    def test_persisted_shape(self) -> None:
        store, storage = _make_store()
        store.set(MoodSignal(moods=frozenset({"tired", "anxious"}), text="hi"))
        assert json.loads(storage.get_item(KEY)) == {
            "moods": ["anxious", "tired"],
            "text": "hi",
        }

    def test_absent_text_is_omitted(self) -> None:
        store, storage = _make_store()
        store.set(MoodSignal(moods=frozenset({"okay"})))
        assert json.loads(storage.get_item(KEY)) == {"moods": ["okay"]}

    def test_stored_null_is_absent(self) -> None:
        store, _ = _make_store("null")
        assert store.get() is None
        assert store.get_result().status is ReadStatus.MISSING


class TestCorruptData:
    @pytest.mark.parametrize(
        "raw",
        [
            "{oops",
            "[]",
            "42",
            '{"moods": "anxious"}',
            '{"moods": [1, 2]}',
            '{"moods": [], "text": 5}',
            "[" * 200000,
        ],
    )
    def test_corrupt_reads_as_absent(self, raw) -> None:
        store, _ = _make_store(raw)
        assert store.get() is None
        assert store.get_result().status is ReadStatus.CORRUPT

    def test_storage_read_error_reads_as_absent(self) -> None:
        storage = MagicMock()
        storage.get_item.side_effect = OSError("gone")
        assert MoodSignalStore(storage, KEY).get() is None

    def test_failed_write_does_not_raise(self) -> None:
        storage = MagicMock()
        storage.set_item.side_effect = OSError("read-only")
        MoodSignalStore(storage, KEY).set(MoodSignal(moods=frozenset({"sad"})))


class TestJsonCodec:
    def test_missing_moods_defaults_to_empty(self) -> None:
        assert signal_from_json({"text": "tired"}) == MoodSignal(text="tired")

    def test_duplicate_moods_collapse(self) -> None:
        signal = signal_from_json({"moods": ["sad", "sad"]})
        assert signal is not None
        assert signal.moods == frozenset({"sad"})

    def test_encode_empty_signal(self) -> None:
        assert signal_to_json(MoodSignal()) == {"moods": []}
