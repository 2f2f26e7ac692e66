"""Tests for the gesture classifier."""

import pytest

from conftest import make_card
from interestmeet.services.gesture import (
    Cancelled,
    Direction,
    Dragging,
    GestureClassifier,
    Idle,
    Offset,
    Resolved,
    classify_offset,
)


class TestClassifyOffset:
    @pytest.mark.parametrize(
        ("dx", "dy", "expected"),
        [
            (101, 0, Direction.RIGHT),
            (-101, 0, Direction.LEFT),
            (0, -101, Direction.UP),
            (100, 0, None),
            (-100, 0, None),
            (0, -100, None),
            (0, 300, None),
            (50, -50, None),
        ],
    )
    def test_thresholds(self, dx: float, dy: float, expected: Direction | None) -> None:
        assert classify_offset(Offset(dx, dy)) == expected

    def test_horizontal_wins_over_vertical(self) -> None:
        """Fast diagonal swipes resolve as left/right, not up."""
        assert classify_offset(Offset(150, -200)) is Direction.RIGHT
        assert classify_offset(Offset(-150, -200)) is Direction.LEFT

    def test_custom_threshold(self) -> None:
        assert classify_offset(Offset(60, 0), threshold=50) is Direction.RIGHT


class TestGestureClassifier:
    def test_starts_idle_with_zero_offset(self) -> None:
        classifier = GestureClassifier()
        assert isinstance(classifier.state, Idle)
        assert classifier.offset == Offset(0, 0)

    def test_press_enters_dragging(self) -> None:
        classifier = GestureClassifier()
        assert classifier.press(make_card("c1"), 10, 20) is True
        assert isinstance(classifier.state, Dragging)
        assert classifier.is_dragging

    def test_move_tracks_offset_from_anchor(self) -> None:
        classifier = GestureClassifier()
        classifier.press(make_card("c1"), 10, 20)

        offset = classifier.move(60, -10)

        assert offset == Offset(50, -30)
        assert classifier.offset == Offset(50, -30)

    def test_move_while_idle_ignored(self) -> None:
        classifier = GestureClassifier()
        assert classifier.move(500, 500) == Offset(0, 0)
        assert isinstance(classifier.state, Idle)

    def test_second_press_ignored_while_dragging(self) -> None:
        classifier = GestureClassifier()
        first = make_card("c1")
        classifier.press(first, 0, 0)

        assert classifier.press(make_card("c2"), 5, 5) is False
        assert classifier.state.card is first  # type: ignore[union-attr]

    def test_release_right(self) -> None:
        classifier = GestureClassifier()
        card = make_card("c1")
        classifier.press(card, 0, 0)
        classifier.move(150, 10)

        result = classifier.release()

        assert isinstance(result, Resolved)
        assert result.card is card
        assert result.direction is Direction.RIGHT
        assert isinstance(classifier.state, Idle)
        assert classifier.offset == Offset(0, 0)

    def test_release_up(self) -> None:
        classifier = GestureClassifier()
        classifier.press(make_card("c1"), 100, 400)
        classifier.move(120, 250)

        result = classifier.release()

        assert isinstance(result, Resolved)
        assert result.direction is Direction.UP

    def test_short_drag_cancels_and_snaps_back(self) -> None:
        classifier = GestureClassifier()
        classifier.press(make_card("c1"), 0, 0)
        classifier.move(80, -90)

        result = classifier.release()

        assert isinstance(result, Cancelled)
        assert isinstance(classifier.state, Idle)
        assert classifier.offset == Offset(0, 0)

    def test_release_without_press_yields_nothing(self) -> None:
        assert GestureClassifier().release() is None

    def test_only_one_outcome_per_gesture(self) -> None:
        classifier = GestureClassifier()
        classifier.press(make_card("c1"), 0, 0)
        classifier.move(-200, 0)

        assert classifier.release() is not None
        assert classifier.release() is None

    def test_no_velocity_only_final_displacement(self) -> None:
        """A drag past the threshold that comes back before release is cancelled."""
        classifier = GestureClassifier()
        classifier.press(make_card("c1"), 0, 0)
        classifier.move(300, 0)
        classifier.move(20, 0)

        assert isinstance(classifier.release(), Cancelled)

    def test_accepts_next_gesture_after_cancel(self) -> None:
        classifier = GestureClassifier()
        classifier.press(make_card("c1"), 0, 0)
        classifier.release()

        assert classifier.press(make_card("c1"), 0, 0) is True

    def test_reset_abandons_gesture(self) -> None:
        classifier = GestureClassifier()
        classifier.press(make_card("c1"), 0, 0)
        classifier.move(300, 0)

        classifier.reset()

        assert isinstance(classifier.state, Idle)
        assert classifier.release() is None
