"""Card catalogue: the fixed deck the ranking engine orders."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from moodfeed.models import (
    Card,
    CardAction,
    CardType,
    NoAction,
    OpenBreath,
    OpenCbt,
    OpenCompanion,
    OpenGratitude,
    OpenMeditation,
    OpenSleep,
)

logger = logging.getLogger(__name__)


class CatalogueError(ValueError):
    """Raised when a catalogue file cannot be turned into cards."""


class CardCatalogue:
    """An ordered, read-only deck of cards.

    The order cards are given in is the catalogue order the ranking engine
    falls back to on ties.

    Args:
        cards: The deck, in display order.

    Raises:
        ValueError: If two cards share an id.
    """

    def __init__(self, cards: Iterable[Card]) -> None:
        self._cards: tuple[Card, ...] = tuple(cards)
        self._by_id: dict[str, Card] = {}
        for card in self._cards:
            if card.card_id in self._by_id:
                raise ValueError(f"Duplicate card id {card.card_id!r} in catalogue")
            self._by_id[card.card_id] = card

    def __len__(self) -> int:
        return len(self._cards)

    @classmethod
    def from_json_file(cls, path: str | Path) -> CardCatalogue:
        """Load a deck from a JSON list of card objects.

        Card objects use the content registry's camelCase keys (``id``,
        ``type``, ``tags``, ``imageUrl``, ``durationSec``, ``action`` with a
        ``kind`` discriminator).

        Args:
            path: Location of the JSON file.

        Returns:
            A new :class:`CardCatalogue`.

        Raises:
            CatalogueError: If the file is unreadable or a card is malformed.
        """
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise CatalogueError(f"Cannot read catalogue {str(path)!r}: {exc}") from exc
        if not isinstance(raw, list):
            raise CatalogueError(f"Catalogue {str(path)!r} must be a JSON list of cards")
        try:
            catalogue = cls(card_from_dict(item) for item in raw)
        except CatalogueError:
            raise
        except ValueError as exc:
            raise CatalogueError(f"Invalid catalogue {str(path)!r}: {exc}") from exc
        logger.info("Catalogue loaded from %s: %d cards.", path, len(catalogue))
        return catalogue

    def get_all_cards(self) -> list[Card]:
        """Return the deck as a new list, in catalogue order."""
        return list(self._cards)

    def get_card(self, card_id: str) -> Card | None:
        """Return a single card by id, or ``None`` if not found."""
        return self._by_id.get(card_id)

    def get_all_tags(self) -> list[str]:
        """Return a sorted list of all unique tags across the deck."""
        tags: set[str] = set()
        for card in self._cards:
            tags.update(card.tags)
        return sorted(tags)


# ---------------------------------------------------------------------------
# JSON decoding
# ---------------------------------------------------------------------------


def card_from_dict(data: Any) -> Card:
    """Build a :class:`~moodfeed.models.Card` from a registry card object.

    Raises:
        CatalogueError: If required fields are missing or have the wrong type.
    """
    if not isinstance(data, dict):
        raise CatalogueError(f"Card entry must be an object, got {type(data).__name__}")
    card_id = data.get("id")
    if not isinstance(card_id, str) or not card_id:
        raise CatalogueError(f"Card entry has no valid 'id': {data!r}")
    try:
        card_type = CardType(data.get("type"))
    except ValueError as exc:
        raise CatalogueError(f"Card {card_id!r} has unknown type {data.get('type')!r}") from exc
    tags = data.get("tags") or []
    if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
        raise CatalogueError(f"Card {card_id!r} has invalid 'tags'")
    return Card(
        card_id=card_id,
        card_type=card_type,
        title=str(data.get("title", "")),
        tags=frozenset(tags),
        action=action_from_dict(data.get("action"), card_id),
        subtitle=data.get("subtitle"),
        content=data.get("content"),
        image_url=data.get("imageUrl"),
        duration_sec=data.get("durationSec"),
    )


def action_from_dict(data: Any, card_id: str = "") -> CardAction:
    """Decode a ``{"kind": ...}`` action object.  ``None`` means no action."""
    if data is None:
        return NoAction()
    if not isinstance(data, dict):
        raise CatalogueError(f"Card {card_id!r} has invalid 'action'")
    kind = data.get("kind")
    try:
        if kind == "open_meditation":
            return OpenMeditation(meditation_id=data["meditationId"])
        if kind == "open_breath":
            return OpenBreath(pattern_id=data["patternId"])
        if kind == "open_cbt":
            return OpenCbt(tip_id=data["tipId"])
        if kind == "open_companion":
            return OpenCompanion()
        if kind == "open_sleep":
            return OpenSleep(routine_id=data["routineId"])
        if kind == "open_gratitude":
            return OpenGratitude()
        if kind == "none":
            return NoAction()
    except KeyError as exc:
        raise CatalogueError(f"Card {card_id!r} action {kind!r} is missing {exc}") from exc
    raise CatalogueError(f"Card {card_id!r} has unknown action kind {kind!r}")


# ---------------------------------------------------------------------------
# Built-in deck
# ---------------------------------------------------------------------------

SEED_CARDS: tuple[Card, ...] = (
    Card(
        card_id="card_mindful5",
        card_type=CardType.MEDITATION,
        title="5-Minute Mindfulness",
        subtitle="Center yourself and breathe",
        content=(
            "Take a moment to center yourself with this gentle meditation. "
            "Focus on your breath and let your thoughts flow freely."
        ),
        duration_sec=300,
        tags=frozenset({"mindfulness", "calm"}),
        action=OpenMeditation(meditation_id="mindful5"),
    ),
    Card(
        card_id="card_calm2",
        card_type=CardType.MEDITATION,
        title="2-Minute Calm",
        subtitle="Quick reset for busy moments",
        content=(
            "A short but powerful meditation to reset your mind and find "
            "instant calm wherever you are."
        ),
        duration_sec=120,
        tags=frozenset({"calm", "mindfulness"}),
        action=OpenMeditation(meditation_id="calm2"),
    ),
    Card(
        card_id="card_breathing",
        card_type=CardType.BREATHING,
        title="Box Breathing",
        content=(
            "Try this simple technique: Inhale 4, hold 4, exhale 4, hold 4. "
            "Repeat to find your calm."
        ),
        duration_sec=180,
        tags=frozenset({"breath", "calm", "focus"}),
        action=OpenBreath(pattern_id="box44"),
    ),
    Card(
        card_id="card_gratitude",
        card_type=CardType.PERSPECTIVE,
        title="Gratitude Reflection",
        content=(
            "What are three things you're grateful for today? Write them down "
            "and reflect on why they matter to you."
        ),
        duration_sec=180,
        tags=frozenset({"gratitude", "mindfulness"}),
        action=OpenGratitude(),
    ),
    Card(
        card_id="card_companion",
        card_type=CardType.COMPANION,
        title="AI Companion Chat",
        subtitle="Here to listen, anytime",
        content=(
            "I'm here to listen and support you. What's on your mind today? "
            "Share your thoughts and feelings in a safe space."
        ),
        tags=frozenset({"companion", "support", "chat", "mindfulness"}),
        action=OpenCompanion(),
    ),
)
