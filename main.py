"""Entry point: wires the recommendation engine and runs the command line."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

import config
from moodfeed.catalogue import SEED_CARDS, CardCatalogue, CatalogueError
from moodfeed.engine import RecommendationEngine
from moodfeed.models import MoodSignal, SwipeDirection
from moodfeed.storage import JsonFileStorage

logger = logging.getLogger(__name__)

_SWIPE_ALIASES = {
    "right": SwipeDirection.POSITIVE,
    "left": SwipeDirection.NEGATIVE,
    "positive": SwipeDirection.POSITIVE,
    "negative": SwipeDirection.NEGATIVE,
}


def build_engine(storage_dir: str, key_prefix: str) -> RecommendationEngine:
    """Construct an engine persisting to *storage_dir*."""
    return RecommendationEngine(JsonFileStorage(storage_dir), key_prefix=key_prefix)


def load_catalogue(path: str) -> CardCatalogue:
    """Return the deck at *path*, or the built-in seed deck if *path* is empty."""
    if path:
        return CardCatalogue.from_json_file(path)
    return CardCatalogue(SEED_CARDS)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moodfeed", description="Mood-aware ordering of the wellness card deck."
    )
    parser.add_argument("--storage-dir", default=config.STORAGE_DIR)
    parser.add_argument("--key-prefix", default=config.KEY_PREFIX)
    parser.add_argument("--catalogue", default=config.CATALOGUE_PATH)
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    sub = parser.add_subparsers(dest="command", required=True)

    checkin = sub.add_parser("checkin", help="store a new mood signal")
    checkin.add_argument(
        "-m", "--mood", action="append", default=[], help="selected mood (repeatable)"
    )
    checkin.add_argument("-t", "--text", default=None, help="free-text description")

    deck = sub.add_parser("deck", help="print the ranked deck")
    deck.add_argument("--explain", action="store_true", help="show score breakdowns")

    swipe = sub.add_parser("swipe", help="record swipe feedback for a card")
    swipe.add_argument("card_id")
    swipe.add_argument("direction", choices=sorted(_SWIPE_ALIASES))

    sub.add_parser("prefs", help="print the stored preference record")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse *argv*, run one command, and return the exit status."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    engine = build_engine(args.storage_dir, args.key_prefix)
    try:
        catalogue = load_catalogue(args.catalogue)
    except CatalogueError as exc:
        logger.error("%s", exc)
        return 2

    if args.command == "checkin":
        signal = MoodSignal(moods=frozenset(args.mood), text=args.text)
        engine.set_last_mood_signal(signal)
        print(f"Stored mood signal: moods={sorted(signal.moods)} text={signal.text!r}")
        return 0

    if args.command == "deck":
        signal = engine.get_last_mood_signal()
        scored = engine.score_cards(catalogue.get_all_cards(), signal)
        for position, item in enumerate(scored, start=1):
            line = f"{position:>2}. {item.card.card_id:<20} {item.card.title}"
            if args.explain:
                line += (
                    f"  [score {item.score:g} = tags {item.tag_score:g}"
                    f" + {item.card.card_type.value} {item.preference_score:g}]"
                )
            print(line)
        return 0

    if args.command == "swipe":
        card = catalogue.get_card(args.card_id)
        if card is None:
            logger.error("Unknown card id %r", args.card_id)
            return 1
        route = engine.swipe(card, _SWIPE_ALIASES[args.direction])
        print(route or "-")
        return 0

    if args.command == "prefs":
        for type_key, score in sorted(engine.get_preferences().items()):
            print(f"{type_key:<12} {score:g}")
        return 0

    return 2


if __name__ == "__main__":
    sys.exit(main())
