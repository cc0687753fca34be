"""Tag inference: mood signal -> weighted content tags."""

from __future__ import annotations

import re

from moodfeed.models import MoodSignal

# Mood bubble identifiers -> intent tags
MOOD_TO_TAGS: dict[str, tuple[str, ...]] = {
    "anxious": ("calm", "breath", "mindfulness"),
    "stressed": ("calm", "breath", "mindfulness"),
    "sad": ("mindfulness", "companion"),
    "angry": ("calm", "breath"),
    "overwhelmed": ("calm", "mindfulness", "gratitude"),
    "tired": ("sleep", "calm"),
    "wired": ("breath", "calm"),
    "unfocused": ("focus", "mindfulness", "breath"),
    "grateful": ("gratitude", "mindfulness"),
    "okay": ("mindfulness",),
    "happy": ("mindfulness", "gratitude", "energize"),
    "lonely": ("companion", "gratitude"),
}


def _keyword_rule(words: str, tags: tuple[str, ...]) -> tuple[re.Pattern[str], tuple[str, ...]]:
    """Compile a whitespace-separated word list into one case-insensitive rule.

    Each word must match as a whole word.
    """
    alternatives = [re.escape(word) for word in words.split()]
    return re.compile(r"\b(?:" + "|".join(alternatives) + r")\b", re.IGNORECASE), tags


# Free-text rules, evaluated in order; every matching rule fires once.
TEXT_KEYWORD_RULES: tuple[tuple[re.Pattern[str], tuple[str, ...]], ...] = (
    _keyword_rule("anxious anxiety panic worried", ("calm", "breath", "mindfulness")),
    _keyword_rule("stress stressed overwhelm pressure", ("calm", "mindfulness", "breath")),
    _keyword_rule("sad down depressed blue", ("companion", "mindfulness")),
    _keyword_rule("angry rage frustrat", ("calm", "breath")),
    _keyword_rule("tired sleep insomnia awake", ("sleep", "calm")),
    _keyword_rule("focus distract procrast", ("focus", "mindfulness", "breath")),
    _keyword_rule("grateful thanks appreciat", ("gratitude", "mindfulness")),
    _keyword_rule("lonely alone", ("companion", "gratitude")),
)


def infer_tag_weights(signal: MoodSignal | None) -> dict[str, int]:
    """Return the Tag Weight Map for *signal*.

    Each distinct selected mood adds 1 to every tag in its table entry; mood
    identifiers are compared case-insensitively and unknown ones are ignored.
    Each free-text rule whose pattern matches anywhere in the text adds 1 to
    every tag it lists.

    Args:
        signal: The current mood signal, or ``None`` for no signal.

    Returns:
        Mapping of tag to positive weight.  Tags with no weight are absent.
    """
    weights: dict[str, int] = {}
    if signal is None:
        return weights

    for mood in {m.lower() for m in signal.moods if isinstance(m, str)}:
        for tag in MOOD_TO_TAGS.get(mood, ()):
            weights[tag] = weights.get(tag, 0) + 1

    if signal.text:
        for pattern, tags in TEXT_KEYWORD_RULES:
            if pattern.search(signal.text):
                for tag in tags:
                    weights[tag] = weights.get(tag, 0) + 1

    return weights
