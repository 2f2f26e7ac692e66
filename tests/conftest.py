import asyncio

import pytest

from interestmeet.models.card import Card, CardType, Rarity
from interestmeet.models.conversation import LiveMatch
from interestmeet.models.profile import Connection, Profile, ProfileBundle
from interestmeet.services.app_store import AppStore
from interestmeet.services.deck_manager import DeckManager
from interestmeet.services.swipe_session import SwipeSession


def make_card(
    card_id: str,
    card_type: str = CardType.QUOTE.value,
    theme: str = "Tech",
    rarity: Rarity = Rarity.COMMON,
    content: str | None = None,
) -> Card:
    """Build a card with sensible defaults for tests."""
    if content is None:
        content = f"Ada, loves {theme}" if card_type == "person" else f"Card {card_id}"
    return Card(id=card_id, type=card_type, content=content, theme=theme, rarity=rarity)


def make_batch(theme: str, size: int = 6, prefix: str | None = None) -> list[Card]:
    prefix = prefix or theme.lower()
    return [make_card(f"{prefix}-{i}", theme=theme) for i in range(size)]


def make_profile(karma: int = 30) -> Profile:
    return Profile(
        name="PixelPilgrim",
        summary="Collects weird facts and good coffee.",
        looking_for="Hiking buddies",
        offering="Great travel tips",
        karma=karma,
        interests=("Tech", "Travel"),
    )


async def settle() -> None:
    """Let pending tasks run until they block again."""
    for _ in range(10):
        await asyncio.sleep(0)


class FakeContentSource:
    """
    In-memory Content Source.

    In manual mode every generate_deck() call parks on a future that the
    test resolves (or fails) explicitly, in any order. Otherwise decks are
    answered immediately with a fresh batch.
    """

    def __init__(self, manual: bool = False, batch_size: int = 6) -> None:
        self.manual = manual
        self.batch_size = batch_size
        self.deck_calls: list[str] = []
        self.pending: list[tuple[str, asyncio.Future[list[Card]]]] = []
        self.profile_calls: list[tuple[str, str | None]] = []
        self.live_calls: list[tuple[str, int]] = []
        self.profile_error: Exception | None = None

    async def generate_deck(self, theme: str) -> list[Card]:
        self.deck_calls.append(theme)
        call_number = len(self.deck_calls)
        if not self.manual:
            return make_batch(theme, self.batch_size, prefix=f"{theme.lower()}-{call_number}")

        future: asyncio.Future[list[Card]] = asyncio.get_running_loop().create_future()
        self.pending.append((theme, future))
        return await future

    def resolve(self, index: int, cards: list[Card]) -> None:
        self.pending[index][1].set_result(cards)

    def fail(self, index: int, error: Exception) -> None:
        self.pending[index][1].set_exception(error)

    async def generate_profile(
        self, interests: str, edit_context: str | None = None
    ) -> ProfileBundle:
        self.profile_calls.append((interests, edit_context))
        if self.profile_error is not None:
            raise self.profile_error
        name = "EditedPilgrim" if edit_context else "PixelPilgrim"
        profile = Profile(
            name=name,
            summary="Collects weird facts and good coffee.",
            looking_for="Hiking buddies",
            offering="Great travel tips",
            karma=30,
            interests=tuple(i.strip() for i in interests.split(",")),
        )
        return ProfileBundle(
            profile=profile,
            connections=[Connection(name="Rin", bio="Climber", shared_interests=("Travel",))],
        )

    async def generate_live_match(self, theme: str, karma: int) -> LiveMatch:
        self.live_calls.append((theme, karma))
        return LiveMatch(name="Nova", message=f"Anyone else into {theme}?")


@pytest.fixture
def source() -> FakeContentSource:
    return FakeContentSource()


@pytest.fixture
def manual_source() -> FakeContentSource:
    return FakeContentSource(manual=True)


@pytest.fixture
def store(source: FakeContentSource) -> AppStore:
    return AppStore(source, themes=["Humor", "Tech"])


@pytest.fixture
def session(manual_source: FakeContentSource) -> SwipeSession:
    store = AppStore(manual_source, themes=["Humor", "Tech"])
    return SwipeSession(store, DeckManager(manual_source))
