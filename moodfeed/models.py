"""Core domain dataclasses shared across all moodfeed modules."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class CardType(str, Enum):
    """Closed set of content categories a card can belong to."""

    MEDITATION = "meditation"
    BREATHING = "breathing"
    CBT = "cbt"
    COMPANION = "companion"
    SLEEP = "sleep"
    PERSPECTIVE = "perspective"
    GRATITUDE = "gratitude"


class SwipeDirection(str, Enum):
    """Binary swipe feedback from the deck."""

    POSITIVE = "positive"  # swipe right
    NEGATIVE = "negative"  # swipe left


# ---------------------------------------------------------------------------
# Card actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OpenMeditation:
    meditation_id: str


@dataclass(frozen=True)
class OpenBreath:
    pattern_id: str


@dataclass(frozen=True)
class OpenCbt:
    tip_id: str


@dataclass(frozen=True)
class OpenCompanion:
    pass


@dataclass(frozen=True)
class OpenSleep:
    routine_id: str


@dataclass(frozen=True)
class OpenGratitude:
    pass


@dataclass(frozen=True)
class NoAction:
    pass


CardAction = Union[
    OpenMeditation,
    OpenBreath,
    OpenCbt,
    OpenCompanion,
    OpenSleep,
    OpenGratitude,
    NoAction,
]


def _label_set(labels: Iterable[str], name: str) -> frozenset[str]:
    """Return *labels* as a frozenset, refusing a bare string."""
    if isinstance(labels, str):
        raise TypeError(f"{name} must be a collection of strings, not a str: {labels!r}")
    return frozenset(labels)


@dataclass(frozen=True)
class Card:
    """A single unit of content in the deck.

    Only :attr:`card_type` and :attr:`tags` take part in ranking.  The
    display fields are carried through untouched.

    Attributes:
        card_id: Unique identifier for the card.
        card_type: The content category, used as the preference key.
        title: Human-readable card title.
        tags: Matching labels (e.g. ``"calm"``, ``"breath"``).  Stored as a
            frozenset, so order and repetition are irrelevant.
        action: What a right swipe opens.
        subtitle: Optional secondary line.
        content: Optional body copy.
        image_url: Optional artwork location.
        duration_sec: Optional session length in seconds.
    """

    card_id: str
    card_type: CardType
    title: str
    tags: frozenset[str] = frozenset()
    action: CardAction = field(default_factory=NoAction)
    subtitle: str | None = None
    content: str | None = None
    image_url: str | None = None
    duration_sec: int | None = None

    def __post_init__(self) -> None:
        if not self.card_id:
            raise ValueError("card_id must be non-empty")
        # Accept any iterable of tags / a plain type string from callers.
        object.__setattr__(self, "tags", _label_set(self.tags, "tags"))
        object.__setattr__(self, "card_type", CardType(self.card_type))


@dataclass(frozen=True)
class MoodSignal:
    """The user's self-reported state captured at mood check-in.

    Attributes:
        moods: Selected mood identifiers (e.g. ``"anxious"``).  A set, so
            selecting the same mood twice counts once.
        text: Optional typed or transcribed free text.
    """

    moods: frozenset[str] = frozenset()
    text: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "moods", _label_set(self.moods, "moods"))

    def is_empty(self) -> bool:
        """Return ``True`` if the signal carries no moods and no text."""
        return not self.moods and not (self.text and self.text.strip())


@dataclass(frozen=True)
class ScoredCard:
    """A card with the breakdown of its ranking score.

    Attributes:
        card: The scored card.
        tag_score: Contribution from mood-inferred tag weights.
        preference_score: Contribution from the stored type preference.
    """

    card: Card
    tag_score: float
    preference_score: float

    @property
    def score(self) -> float:
        return self.tag_score + self.preference_score
