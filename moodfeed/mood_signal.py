"""Mood signal store: holds the single most recent check-in."""

from __future__ import annotations

import logging
from typing import Any

from moodfeed.models import MoodSignal
from moodfeed.storage import KeyValueStorage, ReadResult, ReadStatus, read_json, write_json

logger = logging.getLogger(__name__)


class MoodSignalStore:
    """Last-write-wins slot for the latest :class:`~moodfeed.models.MoodSignal`.

    Persisted as ``{"moods": [...], "text": "..."}`` with ``text`` omitted
    when absent.  A stored JSON ``null`` reads back as no signal.

    Args:
        storage: Backend holding the signal.
        key: Storage key for the signal.
    """

    def __init__(self, storage: KeyValueStorage, key: str) -> None:
        self._storage = storage
        self._key = key

    def set(self, signal: MoodSignal) -> None:
        """Replace the stored signal with *signal*."""
        if write_json(self._storage, self._key, signal_to_json(signal)):
            logger.debug("Stored mood signal with %d mood(s).", len(signal.moods))

    def get(self) -> MoodSignal | None:
        """Return the stored signal, or ``None`` if absent or unreadable."""
        result = self.get_result()
        return result.value if result.ok else None

    def get_result(self) -> ReadResult:
        """Read the stored signal, distinguishing "absent" from "corrupt"."""
        result = read_json(self._storage, self._key)
        if not result.ok:
            return result
        if result.value is None:
            return ReadResult(ReadStatus.MISSING)
        signal = signal_from_json(result.value)
        if signal is None:
            logger.warning("Discarding malformed mood signal under %r.", self._key)
            return ReadResult(ReadStatus.CORRUPT)
        return ReadResult(ReadStatus.OK, signal)


def signal_to_json(signal: MoodSignal) -> dict[str, Any]:
    """Encode *signal* in its persisted shape.  Moods are written sorted."""
    payload: dict[str, Any] = {"moods": sorted(signal.moods)}
    if signal.text is not None:
        payload["text"] = signal.text
    return payload


def signal_from_json(value: Any) -> MoodSignal | None:
    """Decode a persisted signal, or return ``None`` if *value* is malformed."""
    if not isinstance(value, dict):
        return None
    moods = value.get("moods", [])
    text = value.get("text")
    if not isinstance(moods, list) or not all(isinstance(m, str) for m in moods):
        return None
    if text is not None and not isinstance(text, str):
        return None
    return MoodSignal(moods=frozenset(moods), text=text)
