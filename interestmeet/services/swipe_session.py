"""
Swipe session — wires the deck, the gesture classifier and the store.

Event flow for one card:
    press -> move* -> release -> (reducer applies) -> deck advances

The state update is applied as soon as a gesture resolves. The settle delay
only tells the presentation layer how long to animate the card out before
showing the next one.
"""

import logging
from dataclasses import dataclass

from interestmeet.config import SETTLE_DELAY_MS, SWIPE_THRESHOLD
from interestmeet.models.card import Card
from interestmeet.models.failure import NoCardError
from interestmeet.services.app_store import AppStore
from interestmeet.services.deck_manager import DeckManager
from interestmeet.services.gesture import (
    Direction,
    GestureClassifier,
    Offset,
    Resolved,
)
from interestmeet.services.outcome_reducer import SwipeOutcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SwipeResult:
    """What the presentation layer needs after a resolved swipe."""

    outcome: SwipeOutcome
    card: Card
    next_card: Card | None
    settle_delay_ms: int = SETTLE_DELAY_MS


class SwipeSession:
    """One user's swipe screen."""

    def __init__(
        self,
        store: AppStore,
        decks: DeckManager,
        classifier: GestureClassifier | None = None,
    ) -> None:
        self.store = store
        self.decks = decks
        self.classifier = classifier or GestureClassifier(SWIPE_THRESHOLD)

    def select_theme(self, theme: str) -> bool:
        """
        Switch the swipe deck to `theme`, listing it if it is new.

        Returns True if the deck changed.
        """
        changed = self.decks.activate(self.store.add_theme(theme))
        if changed:
            self.classifier.reset()
        return changed

    def add_theme(self, theme: str) -> bool:
        """Offer a custom theme and switch to it."""
        return self.select_theme(theme)

    # -------------------------------------------------------------------------
    # Pointer events
    # -------------------------------------------------------------------------

    def press(self, x: float, y: float) -> bool:
        """
        Start dragging the current card.

        Raises:
            NoCardError: If the deck has no current card
        """
        card = self.decks.current
        if card is None:
            raise NoCardError(self.decks.theme)
        return self.classifier.press(card, x, y)

    def move(self, x: float, y: float) -> Offset:
        return self.classifier.move(x, y)

    def release(self) -> SwipeResult | None:
        """
        Finish the gesture.

        Returns:
            SwipeResult for a resolved swipe; None when cancelled or idle
        """
        result = self.classifier.release()
        if not isinstance(result, Resolved):
            return None

        if result.card is not self.decks.current:
            # The deck moved on under the gesture (e.g., a theme switch)
            logger.debug("gesture on %s no longer current; dropped", result.card.id)
            return None
        return self._resolve(result.card, result.direction)

    def swipe(self, direction: Direction) -> SwipeResult:
        """
        Swipe the current card without a gesture (button controls).

        Raises:
            NoCardError: If the deck has no current card
        """
        card = self.decks.current
        if card is None:
            raise NoCardError(self.decks.theme)
        self.classifier.reset()
        return self._resolve(card, direction)

    def _resolve(self, card: Card, direction: Direction) -> SwipeResult:
        outcome = self.store.apply_swipe(direction, card)
        self.decks.advance()
        return SwipeResult(outcome=outcome, card=card, next_card=self.decks.current)
