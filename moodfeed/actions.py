"""Swipe feedback: preference updates and card action routing."""

from __future__ import annotations

import logging

from moodfeed.models import (
    Card,
    CardAction,
    NoAction,
    OpenBreath,
    OpenCbt,
    OpenCompanion,
    OpenGratitude,
    OpenMeditation,
    OpenSleep,
    SwipeDirection,
)
from moodfeed.preferences import PreferenceStore

logger = logging.getLogger(__name__)


def route_for_action(action: CardAction) -> str | None:
    """Return the screen route a card action opens, or ``None`` for no screen.

    Raises:
        TypeError: If *action* is not one of the known action variants.
    """
    if isinstance(action, OpenMeditation):
        return f"/meditation/{action.meditation_id}"
    if isinstance(action, OpenBreath):
        return f"/breathing/{action.pattern_id}"
    if isinstance(action, OpenCbt):
        return f"/cbt/{action.tip_id}"
    if isinstance(action, OpenCompanion):
        return "/companion"
    if isinstance(action, OpenSleep):
        return f"/sleep/{action.routine_id}"
    if isinstance(action, OpenGratitude):
        return "/gratitude/new"
    if isinstance(action, NoAction):
        return None
    raise TypeError(f"Unknown card action {action!r}")


class SwipeHandler:
    """Feeds deck swipes back into the preference store.

    Args:
        preference_store: Store updated on every swipe.
    """

    def __init__(self, preference_store: PreferenceStore) -> None:
        self._preference_store = preference_store

    def handle(self, card: Card, direction: SwipeDirection) -> str | None:
        """Dispatch a swipe in *direction* on *card*.

        Returns:
            The route to open, or ``None`` if nothing should open.
        """
        direction = SwipeDirection(direction)
        if direction is SwipeDirection.POSITIVE:
            return self.on_swipe_right(card)
        return self.on_swipe_left(card)

    def on_swipe_right(self, card: Card) -> str | None:
        """Record a positive preference and return the card's route."""
        self._preference_store.record_positive(card)
        route = route_for_action(card.action)
        logger.debug("Swipe right on %r -> %s", card.card_id, route)
        return route

    def on_swipe_left(self, card: Card) -> None:
        """Record a negative preference.  Nothing opens."""
        self._preference_store.record_negative(card)
        logger.debug("Swipe left on %r", card.card_id)
        return None
