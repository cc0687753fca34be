"""Shared pytest fixtures for all moodfeed tests."""

from __future__ import annotations

import pytest

from moodfeed.engine import RecommendationEngine
from moodfeed.models import Card, CardType, MoodSignal, NoAction, OpenBreath, OpenMeditation
from moodfeed.storage import InMemoryStorage


# ---------------------------------------------------------------------------
# Card fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def card_meditation() -> Card:
    return Card(
        "c_med",
        CardType.MEDITATION,
        "5-Minute Mindfulness",
        tags=frozenset({"mindfulness", "calm"}),
        action=OpenMeditation("mindful5"),
    )


@pytest.fixture
def card_breathing() -> Card:
    return Card(
        "c_breath",
        CardType.BREATHING,
        "Box Breathing",
        tags=frozenset({"breath", "calm"}),
        action=OpenBreath("box44"),
    )


@pytest.fixture
def card_companion() -> Card:
    return Card("c_comp", CardType.COMPANION, "Companion", tags=frozenset({"companion", "support"}))


@pytest.fixture
def card_sleep() -> Card:
    return Card("c_sleep", CardType.SLEEP, "Wind Down", tags=frozenset({"sleep", "calm"}))


@pytest.fixture
def card_untagged() -> Card:
    return Card("c_plain", CardType.PERSPECTIVE, "Perspective", action=NoAction())


@pytest.fixture
def sample_cards(
    card_meditation, card_breathing, card_companion, card_sleep, card_untagged
) -> list[Card]:
    """Five-card catalogue spanning several types and tags."""
    return [card_meditation, card_breathing, card_companion, card_sleep, card_untagged]


# ---------------------------------------------------------------------------
# Signal fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def anxious_signal() -> MoodSignal:
    return MoodSignal(moods=frozenset({"anxious"}), text="")


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def engine(storage) -> RecommendationEngine:
    return RecommendationEngine(storage)
