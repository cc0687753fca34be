"""Card ranking: scores the deck against tag weights and type preferences."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

import numpy as np

from moodfeed.models import Card, MoodSignal, ScoredCard
from moodfeed.preferences import PreferenceStore
from moodfeed.tagging import infer_tag_weights

logger = logging.getLogger(__name__)

# score = _TAG_MATCH_FACTOR * sum(W[tag]) + _PREFERENCE_FACTOR * P[type]
_TAG_MATCH_FACTOR = 2.0
_PREFERENCE_FACTOR = 1.0


def score_card(
    card: Card,
    tag_weights: Mapping[str, float],
    preferences: Mapping[str, float],
) -> float:
    """Return the ranking score for a single card.

    Args:
        card: The card to score.
        tag_weights: Tag Weight Map for the current mood signal.
        preferences: Preference Record keyed by card type value.

    Returns:
        ``2 × Σ W[tag] + 1 × P[type]``, with missing entries counted as 0.
    """
    tag_total = sum(tag_weights.get(tag, 0) for tag in card.tags)
    return (
        _TAG_MATCH_FACTOR * tag_total
        + _PREFERENCE_FACTOR * preferences.get(card.card_type.value, 0.0)
    )


def score_catalog(
    cards: Sequence[Card],
    tag_weights: Mapping[str, float],
    preferences: Mapping[str, float],
) -> list[ScoredCard]:
    """Score and order *cards*, best first, keeping catalogue order on ties.

    Builds a binary card-by-tag indicator matrix over the tags present in the
    catalogue and multiplies it by the tag weight vector, then sorts with a
    stable argsort on the negated totals.

    Args:
        cards: The catalogue, in its original order.
        tag_weights: Tag Weight Map for the current mood signal.
        preferences: Preference Record keyed by card type value.

    Returns:
        One :class:`~moodfeed.models.ScoredCard` per input card.
    """
    if not cards:
        return []

    vocabulary = sorted({tag for card in cards for tag in card.tags})
    tag_index = {tag: i for i, tag in enumerate(vocabulary)}

    indicator = np.zeros((len(cards), len(vocabulary)), dtype=np.float64)
    for row, card in enumerate(cards):
        for tag in card.tags:
            indicator[row, tag_index[tag]] = 1.0

    weight_vec = np.array(
        [float(tag_weights.get(tag, 0)) for tag in vocabulary], dtype=np.float64
    )
    tag_scores = _TAG_MATCH_FACTOR * (indicator @ weight_vec)
    pref_scores = _PREFERENCE_FACTOR * np.array(
        [float(preferences.get(card.card_type.value, 0.0)) for card in cards],
        dtype=np.float64,
    )

    order = np.argsort(-(tag_scores + pref_scores), kind="stable")
    return [
        ScoredCard(
            card=cards[i],
            tag_score=float(tag_scores[i]),
            preference_score=float(pref_scores[i]),
        )
        for i in order
    ]


class CardRanker:
    """Ranks a catalogue for the current user state.

    Holds no state of its own: the Preference Record is re-read from
    *preference_store* on every call so feedback recorded between calls is
    reflected immediately.

    Args:
        preference_store: Source of the Preference Record.
    """

    def __init__(self, preference_store: PreferenceStore) -> None:
        self._preference_store = preference_store

    def rank_cards(self, cards: Sequence[Card], signal: MoodSignal | None) -> list[Card]:
        """Return a new list with the same cards in descending score order.

        Args:
            cards: The catalogue.  May be empty.
            signal: The current mood signal, or ``None``.

        Returns:
            A permutation of *cards*.
        """
        return [scored.card for scored in self.score_cards(cards, signal)]

    def score_cards(
        self, cards: Sequence[Card], signal: MoodSignal | None
    ) -> list[ScoredCard]:
        """Like :meth:`rank_cards` but keeps each card's score breakdown."""
        tag_weights = infer_tag_weights(signal)
        preferences = self._preference_store.load()
        scored = score_catalog(cards, tag_weights, preferences)
        logger.debug(
            "Ranked %d card(s) with tag weights %s and preferences %s.",
            len(scored),
            tag_weights,
            preferences,
        )
        return scored
