"""Tests for moodfeed.engine.RecommendationEngine."""

from __future__ import annotations

import json

import pytest

from moodfeed.catalogue import SEED_CARDS
from moodfeed.engine import RecommendationEngine, last_mood_key, preferences_key
from moodfeed.models import CardType, MoodSignal, SwipeDirection
from moodfeed.storage import InMemoryStorage, JsonFileStorage


class TestKeys:
    def test_default_keys(self) -> None:
        assert preferences_key("nuera") == "nuera:prefs:v1"
        assert last_mood_key("nuera") == "nuera:last_moods:v1"

    def test_engine_uses_prefix(self, card_sleep) -> None:
        storage = InMemoryStorage()
        engine = RecommendationEngine(storage, key_prefix="test")
        engine.record_positive(card_sleep)
        engine.set_last_mood_signal(MoodSignal(moods=frozenset({"tired"})))
        assert json.loads(storage.get_item("test:prefs:v1")) == {"sleep": 1.0}
        assert json.loads(storage.get_item("test:last_moods:v1")) == {"moods": ["tired"]}
        assert storage.get_item("nuera:prefs:v1") is None


class TestMoodSignal:
    def test_absent_initially(self, engine) -> None:
        assert engine.get_last_mood_signal() is None

    def test_set_get(self, engine) -> None:
        signal = MoodSignal(moods=frozenset({"sad"}), text="rough day")
        engine.set_last_mood_signal(signal)
        assert engine.get_last_mood_signal() == signal

    def test_corrupt_signal_is_absent(self, storage, engine) -> None:
        storage.set_item(last_mood_key("nuera"), "{corrupt")
        assert engine.get_last_mood_signal() is None

    def test_corrupt_storage_does_not_break_ranking(self, storage, engine, sample_cards) -> None:
        storage.set_item(preferences_key("nuera"), "[" * 200000)
        storage.set_item(last_mood_key("nuera"), "[" * 200000)
        assert engine.load_deck(sample_cards) == sample_cards


class TestFeedback:
    def test_record_positive_and_negative(self, engine, card_meditation, card_sleep) -> None:
        engine.record_positive(card_meditation)
        engine.record_negative(card_sleep)
        assert engine.get_preferences() == {"meditation": 1.0, "sleep": -0.5}

    def test_swipe_right(self, engine, card_breathing) -> None:
        assert engine.swipe(card_breathing, SwipeDirection.POSITIVE) == "/breathing/box44"
        assert engine.get_preferences() == {"breathing": 1.0}

    def test_swipe_left(self, engine, card_breathing) -> None:
        assert engine.swipe(card_breathing, SwipeDirection.NEGATIVE) is None
        assert engine.get_preferences() == {"breathing": -0.5}


class TestRanking:
    def test_rank_cards(self, engine, sample_cards) -> None:
        result = engine.rank_cards(sample_cards, MoodSignal(moods=frozenset({"tired"})))
        # sleep card matches sleep + calm; meditation and breathing only calm
        assert result[0].card_id == "c_sleep"
        assert [c.card_id for c in result[1:3]] == ["c_med", "c_breath"]

    def test_score_cards_breakdown(self, engine, card_companion) -> None:
        engine.record_positive(card_companion)
        [scored] = engine.score_cards([card_companion], MoodSignal(moods=frozenset({"lonely"})))
        assert scored.tag_score == pytest.approx(2.0)
        assert scored.preference_score == pytest.approx(1.0)

    def test_load_deck_uses_stored_signal(self, engine, sample_cards) -> None:
        engine.set_last_mood_signal(MoodSignal(moods=frozenset({"lonely"})))
        assert engine.load_deck(sample_cards)[0].card_id == "c_comp"

    def test_load_deck_without_signal(self, engine, sample_cards) -> None:
        assert engine.load_deck(sample_cards) == sample_cards

    def test_feedback_loop(self, engine, sample_cards) -> None:
        """Swipes recorded after ranking change the next ranking."""
        signal = MoodSignal(moods=frozenset({"anxious"}))
        first = engine.rank_cards(sample_cards, signal)
        assert [c.card_id for c in first[:2]] == ["c_med", "c_breath"]
        engine.swipe(first[0], SwipeDirection.NEGATIVE)
        second = engine.rank_cards(sample_cards, signal)
        assert [c.card_id for c in second[:2]] == ["c_breath", "c_med"]


class TestSeedDeck:
    def test_anxious_check_in(self, engine) -> None:
        engine.set_last_mood_signal(MoodSignal(moods=frozenset({"anxious"})))
        deck = engine.load_deck(list(SEED_CARDS))
        # box breathing carries breath + calm; the meditations carry calm + mindfulness
        assert [c.card_id for c in deck] == [
            "card_mindful5",
            "card_calm2",
            "card_breathing",
            "card_gratitude",
            "card_companion",
        ]

    def test_lonely_text_promotes_companion(self, engine) -> None:
        engine.set_last_mood_signal(MoodSignal(text="I feel lonely and sad"))
        deck = engine.load_deck(list(SEED_CARDS))
        assert deck[0].card_type is CardType.COMPANION


class TestPersistence:
    def test_state_survives_new_engine(self, tmp_path, card_meditation) -> None:
        first = RecommendationEngine(JsonFileStorage(tmp_path))
        first.record_positive(card_meditation)
        first.set_last_mood_signal(MoodSignal(moods=frozenset({"happy"}), text="sunny"))

        second = RecommendationEngine(JsonFileStorage(tmp_path))
        assert second.get_preferences() == {"meditation": 1.0}
        assert second.get_last_mood_signal() == MoodSignal(
            moods=frozenset({"happy"}), text="sunny"
        )
