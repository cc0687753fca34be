"""Preference store: per content-type affinity built from swipe feedback."""

from __future__ import annotations

import logging
import math
from typing import Any

from moodfeed.models import Card
from moodfeed.storage import KeyValueStorage, ReadResult, ReadStatus, read_json, write_json

logger = logging.getLogger(__name__)

# Score deltas applied per swipe.  Positives count double vs. negatives so a
# single dismissal does not erase several likes.
_WEIGHT_POSITIVE = 1.0
_WEIGHT_NEGATIVE = -0.5


class PreferenceStore:
    """Persists the Preference Record under a single storage key.

    The record maps a card type value (e.g. ``"meditation"``) to an unbounded
    float score.  Every mutator is a read-modify-write of the whole record;
    the store assumes a single writer.

    Args:
        storage: Backend holding the record.
        key: Storage key for the record.
    """

    def __init__(self, storage: KeyValueStorage, key: str) -> None:
        self._storage = storage
        self._key = key

    def load(self) -> dict[str, float]:
        """Return the current record, or ``{}`` if none is stored or it is corrupt."""
        result = self.load_result()
        return result.value if result.ok else {}

    def load_result(self) -> ReadResult:
        """Read the record, distinguishing "never written" from "corrupt".

        A stored value that is valid JSON but not an object of
        ``type -> number`` is reported as ``CORRUPT``.
        """
        result = read_json(self._storage, self._key)
        if not result.ok:
            return result
        record = _validate_record(result.value)
        if record is None:
            logger.warning("Discarding malformed preference record under %r.", self._key)
            return ReadResult(ReadStatus.CORRUPT)
        return ReadResult(ReadStatus.OK, record)

    def record_positive(self, card: Card) -> None:
        """Add ``+1.0`` to the score for *card*'s type."""
        self._apply_delta(card, _WEIGHT_POSITIVE)

    def record_negative(self, card: Card) -> None:
        """Add ``-0.5`` to the score for *card*'s type."""
        self._apply_delta(card, _WEIGHT_NEGATIVE)

    def _apply_delta(self, card: Card, delta: float) -> None:
        record = self.load()
        type_key = card.card_type.value
        record[type_key] = record.get(type_key, 0.0) + delta
        if write_json(self._storage, self._key, record):
            logger.debug(
                "Preference for %r is now %s (delta %+g).", type_key, record[type_key], delta
            )


def _validate_record(value: Any) -> dict[str, float] | None:
    """Return *value* as a preference record, or ``None`` if it is not one."""
    if not isinstance(value, dict):
        return None
    record: dict[str, float] = {}
    for type_key, score in value.items():
        # bool is an int subclass but never a valid score
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            return None
        try:
            score = float(score)
        except OverflowError:
            return None
        # NaN / Infinity decode fine but would poison the type's score
        if not math.isfinite(score):
            return None
        record[type_key] = score
    return record
