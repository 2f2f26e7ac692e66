"""
Gesture classification for the active swipe card.

Turns a pointer/touch stream into at most one discrete outcome per gesture.

States:
    Idle -> Dragging -> (Resolved | Cancelled) -> Idle

Resolved and Cancelled are transient: release() returns one of them and the
classifier is back in Idle, with a zero offset, before the call returns.

INVARIANTS:
- Only displacement at release matters; there is no velocity term
- Horizontal thresholds win over the vertical one
- A Dragging state never times out
"""

import logging
from dataclasses import dataclass
from enum import Enum

from interestmeet.config import SWIPE_THRESHOLD
from interestmeet.models.card import Card

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"


@dataclass(frozen=True, slots=True)
class Offset:
    """Displacement of the pointer from the gesture anchor."""

    dx: float = 0.0
    dy: float = 0.0


ZERO_OFFSET = Offset()


@dataclass(frozen=True, slots=True)
class Idle:
    offset: Offset = ZERO_OFFSET


@dataclass(frozen=True, slots=True)
class Dragging:
    card: Card
    anchor_x: float
    anchor_y: float
    offset: Offset = ZERO_OFFSET


@dataclass(frozen=True, slots=True)
class Resolved:
    card: Card
    direction: Direction
    offset: Offset


@dataclass(frozen=True, slots=True)
class Cancelled:
    card: Card
    offset: Offset = ZERO_OFFSET


GestureState = Idle | Dragging | Resolved | Cancelled


def classify_offset(offset: Offset, threshold: float = SWIPE_THRESHOLD) -> Direction | None:
    """
    Classify a release offset.

    Priority: right, then left, then up. Returns None when no threshold
    is exceeded (the gesture is cancelled).
    """
    if offset.dx > threshold:
        return Direction.RIGHT
    if offset.dx < -threshold:
        return Direction.LEFT
    if offset.dy < -threshold:
        return Direction.UP
    return None


class GestureClassifier:
    """
    Tracks one pointer gesture at a time against the card it started on.

    Usage:
        classifier.press(card, x, y)
        classifier.move(x, y)          # any number of times
        result = classifier.release()  # Resolved, Cancelled, or None
    """

    def __init__(self, threshold: float = SWIPE_THRESHOLD) -> None:
        self.threshold = threshold
        self._state: GestureState = Idle()

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def offset(self) -> Offset:
        """Current drag offset; zero whenever no gesture is in progress."""
        return self._state.offset

    @property
    def is_dragging(self) -> bool:
        return isinstance(self._state, Dragging)

    def press(self, card: Card, x: float, y: float) -> bool:
        """
        Begin a gesture on `card` anchored at (x, y).

        Returns False (and changes nothing) if a gesture is already in progress.
        """
        if not isinstance(self._state, Idle):
            return False
        self._state = Dragging(card=card, anchor_x=x, anchor_y=y)
        return True

    def move(self, x: float, y: float) -> Offset:
        """Update the running offset. Ignored unless dragging."""
        state = self._state
        if isinstance(state, Dragging):
            self._state = Dragging(
                card=state.card,
                anchor_x=state.anchor_x,
                anchor_y=state.anchor_y,
                offset=Offset(dx=x - state.anchor_x, dy=y - state.anchor_y),
            )
        return self._state.offset

    def release(self) -> Resolved | Cancelled | None:
        """
        End the gesture and classify it.

        Returns None when no gesture was in progress. Either way the
        classifier is Idle with a zero offset afterwards.
        """
        state = self._state
        if not isinstance(state, Dragging):
            return None

        direction = classify_offset(state.offset, self.threshold)
        self._state = Idle()

        if direction is None:
            logger.debug("gesture_cancelled dx=%s dy=%s", state.offset.dx, state.offset.dy)
            return Cancelled(card=state.card)

        logger.debug("gesture_resolved card=%s direction=%s", state.card.id, direction.value)
        return Resolved(card=state.card, direction=direction, offset=state.offset)

    def reset(self) -> None:
        """Abandon any gesture in progress (e.g., when the deck changes theme)."""
        self._state = Idle()
