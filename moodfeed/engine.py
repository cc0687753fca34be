"""Recommendation engine: the explicit context wiring stores, ranking and feedback."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from moodfeed.actions import SwipeHandler
from moodfeed.models import Card, MoodSignal, ScoredCard, SwipeDirection
from moodfeed.mood_signal import MoodSignalStore
from moodfeed.preferences import PreferenceStore
from moodfeed.ranking import CardRanker
from moodfeed.storage import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "nuera"


def preferences_key(prefix: str) -> str:
    return f"{prefix}:prefs:v1"


def last_mood_key(prefix: str) -> str:
    return f"{prefix}:last_moods:v1"


class RecommendationEngine:
    """One user's recommendation state on one device.

    Owns a :class:`~moodfeed.preferences.PreferenceStore` and a
    :class:`~moodfeed.mood_signal.MoodSignalStore` on the same storage
    backend and exposes the operations the app calls:

    ==========================  ==========================================
    Operation                   Effect
    ==========================  ==========================================
    ``set_last_mood_signal``    Replace the stored check-in
    ``get_last_mood_signal``    Read the stored check-in (or ``None``)
    ``rank_cards``              Order a catalogue for a signal
    ``load_deck``               Order a catalogue for the stored signal
    ``record_positive``         ``+1.0`` to the card type's preference
    ``record_negative``         ``-0.5`` to the card type's preference
    ``swipe``                   Record feedback and resolve the route
    ==========================  ==========================================

    Args:
        storage: Backend for both stores.
        key_prefix: Namespace prepended to both storage keys.
    """

    def __init__(self, storage: KeyValueStorage, key_prefix: str = DEFAULT_KEY_PREFIX) -> None:
        self._preference_store = PreferenceStore(storage, preferences_key(key_prefix))
        self._mood_signal_store = MoodSignalStore(storage, last_mood_key(key_prefix))
        self._ranker = CardRanker(self._preference_store)
        self._swipe_handler = SwipeHandler(self._preference_store)

    @property
    def preference_store(self) -> PreferenceStore:
        return self._preference_store

    @property
    def mood_signal_store(self) -> MoodSignalStore:
        return self._mood_signal_store

    # ------------------------------------------------------------------
    # Ranking
    # ------------------------------------------------------------------

    def rank_cards(self, catalog: Sequence[Card], signal: MoodSignal | None) -> list[Card]:
        """Return *catalog* reordered for *signal* and the current preferences."""
        return self._ranker.rank_cards(catalog, signal)

    def score_cards(
        self, catalog: Sequence[Card], signal: MoodSignal | None
    ) -> list[ScoredCard]:
        """Like :meth:`rank_cards` but keeps each card's score breakdown."""
        return self._ranker.score_cards(catalog, signal)

    def load_deck(self, catalog: Sequence[Card]) -> list[Card]:
        """Rank *catalog* against the most recently stored mood signal."""
        return self.rank_cards(catalog, self.get_last_mood_signal())

    # ------------------------------------------------------------------
    # Feedback
    # ------------------------------------------------------------------

    def record_positive(self, card: Card) -> None:
        self._preference_store.record_positive(card)

    def record_negative(self, card: Card) -> None:
        self._preference_store.record_negative(card)

    def swipe(self, card: Card, direction: SwipeDirection) -> str | None:
        """Record a swipe on *card* and return the route to open, if any."""
        return self._swipe_handler.handle(card, direction)

    def get_preferences(self) -> dict[str, float]:
        return self._preference_store.load()

    # ------------------------------------------------------------------
    # Mood signal
    # ------------------------------------------------------------------

    def set_last_mood_signal(self, signal: MoodSignal) -> None:
        self._mood_signal_store.set(signal)

    def get_last_mood_signal(self) -> MoodSignal | None:
        return self._mood_signal_store.get()
