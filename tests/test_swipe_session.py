"""
End-to-end tests for the swipe pipeline: deck -> gesture -> reducer -> store.
"""

import pytest

from conftest import FakeContentSource, make_card, make_profile, settle
from interestmeet.config import SETTLE_DELAY_MS
from interestmeet.models.card import CardType, Rarity
from interestmeet.models.failure import NoCardError
from interestmeet.services.gesture import Direction, Offset
from interestmeet.services.swipe_session import SwipeSession

CARD_A = make_card("a", card_type=CardType.PERSON.value, content="Ada, codes at dawn")
CARD_B = make_card("b", card_type=CardType.QUOTE.value, rarity=Rarity.RARE)


async def load_deck(
    session: SwipeSession, source: FakeContentSource, cards: list, theme: str = "Tech"
) -> None:
    session.select_theme(theme)
    await settle()
    source.resolve(len(source.pending) - 1, cards)
    await settle()


class TestEndToEnd:
    async def test_right_swipe_on_person(
        self, session: SwipeSession, manual_source: FakeContentSource
    ) -> None:
        session.store.profile = make_profile(30)
        await load_deck(session, manual_source, [CARD_A, CARD_B])

        assert session.press(200, 300) is True
        session.move(350, 310)
        result = session.release()

        assert result is not None
        assert result.card is CARD_A
        assert result.settle_delay_ms == SETTLE_DELAY_MS
        assert session.decks.deck is not None
        assert session.decks.deck.cursor == 1
        assert session.decks.current is CARD_B
        assert session.store.profile is not None
        assert session.store.profile.karma == 32
        assert len(session.store.conversations) == 1
        assert session.store.conversations[0].name == "Ada"
        bucket = session.store.collections[0]
        assert (bucket.theme, bucket.count, bucket.level) == ("Tech", 1, 1)

    async def test_up_swipe_on_quote(
        self, session: SwipeSession, manual_source: FakeContentSource
    ) -> None:
        session.store.profile = make_profile(30)
        await load_deck(session, manual_source, [CARD_B, CARD_A])

        session.press(200, 400)
        session.move(210, 250)
        result = session.release()

        assert result is not None
        assert result.outcome.collected_card is not None
        assert result.outcome.collected_card.rarity is Rarity.LEGENDARY
        assert CARD_B.rarity is Rarity.RARE
        assert session.store.profile is not None
        assert session.store.profile.karma == 40
        assert session.store.conversations == []

    async def test_left_swipe_only_advances(
        self, session: SwipeSession, manual_source: FakeContentSource
    ) -> None:
        session.store.profile = make_profile(30)
        await load_deck(session, manual_source, [CARD_A, CARD_B])

        session.press(200, 300)
        session.move(50, 300)
        result = session.release()

        assert result is not None
        assert result.outcome.direction is Direction.LEFT
        assert session.decks.current is CARD_B
        assert session.store.profile is not None
        assert session.store.profile.karma == 30
        assert session.store.collections == []
        assert session.store.conversations == []

    async def test_cancelled_gesture_keeps_card(
        self, session: SwipeSession, manual_source: FakeContentSource
    ) -> None:
        await load_deck(session, manual_source, [CARD_A, CARD_B])

        session.press(200, 300)
        session.move(260, 260)

        assert session.release() is None
        assert session.decks.current is CARD_A
        assert session.classifier.offset == Offset(0, 0)
        assert session.store.collections == []

    async def test_button_swipe(
        self, session: SwipeSession, manual_source: FakeContentSource
    ) -> None:
        await load_deck(session, manual_source, [CARD_A, CARD_B])

        result = session.swipe(Direction.RIGHT)

        assert result.card is CARD_A
        assert result.next_card is CARD_B
        assert len(session.store.conversations) == 1

    async def test_press_on_empty_deck_refused(
        self, session: SwipeSession, manual_source: FakeContentSource
    ) -> None:
        session.select_theme("Tech")
        await settle()

        with pytest.raises(NoCardError):
            session.press(0, 0)
        with pytest.raises(NoCardError):
            session.swipe(Direction.RIGHT)

    async def test_theme_switch_mid_drag_drops_gesture(
        self, session: SwipeSession, manual_source: FakeContentSource
    ) -> None:
        await load_deck(session, manual_source, [CARD_A, CARD_B])
        session.press(0, 0)
        session.move(300, 0)

        session.select_theme("Music")

        assert session.release() is None
        assert session.store.collections == []
        assert session.store.current_theme == "Music"

    async def test_add_theme_switches_deck(
        self, session: SwipeSession, manual_source: FakeContentSource
    ) -> None:
        assert session.add_theme("Chess") is True
        await settle()

        assert session.store.themes[0] == "Chess"
        assert session.decks.theme == "Chess"
        assert manual_source.deck_calls == ["Chess"]

    async def test_selecting_unlisted_theme_lists_it(
        self, session: SwipeSession, manual_source: FakeContentSource
    ) -> None:
        assert "Chess" not in session.store.themes

        session.select_theme("Chess")
        await settle()

        assert session.store.themes[0] == "Chess"
        assert session.store.current_theme == "Chess"
        assert manual_source.deck_calls == ["Chess"]

    async def test_selecting_listed_theme_keeps_order(self, session: SwipeSession) -> None:
        themes = list(session.store.themes)

        session.select_theme(themes[-1])

        assert session.store.themes == themes
        assert session.store.current_theme == themes[-1]

    async def test_release_without_press_is_ignored(
        self, session: SwipeSession, manual_source: FakeContentSource
    ) -> None:
        await load_deck(session, manual_source, [CARD_A, CARD_B])

        assert session.release() is None
        assert session.decks.current is CARD_A
