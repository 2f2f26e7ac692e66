"""
Deck Manager — keeps a themed queue of cards supplied and advances it.

One Deck exists at a time, for the active theme. Fetches run as background
tasks on the event loop and never block gesture handling.

INVARIANTS:
- cursor <= len(cards); cards before the cursor are never re-presented
- At most one fetch is pending for the active deck
- Every fetch is tagged with the deck epoch it was issued for; a result
  whose epoch is no longer active is discarded, never appended
- A failed fetch leaves the deck unchanged and clears the pending state
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum

from interestmeet.config import MAX_CONSUMED_CARDS, REFILL_THRESHOLD
from interestmeet.models.card import Card
from interestmeet.models.failure import FetchFailure, InvalidInputError, ParseFailure
from interestmeet.services.content_source import ContentSource

logger = logging.getLogger(__name__)


class FetchStatus(str, Enum):
    """Supply state of a deck."""

    IDLE = "idle"  # nothing pending; nothing fetched yet or last fetch failed
    FETCHING = "fetching"
    READY = "ready"  # last fetch succeeded, nothing pending


@dataclass
class Deck:
    """Cards for one theme plus the read cursor."""

    theme: str
    epoch: int
    cards: list[Card] = field(default_factory=list)
    cursor: int = 0
    status: FetchStatus = FetchStatus.IDLE
    # Consumed cards already dropped from the head of `cards`
    pruned: int = 0

    @property
    def remaining(self) -> int:
        """Unconsumed cards, including the current one."""
        return len(self.cards) - self.cursor

    @property
    def consumed(self) -> int:
        """Total cards swiped past since the deck was created."""
        return self.pruned + self.cursor

    def card_at(self, offset: int) -> Card | None:
        index = self.cursor + offset
        if index < len(self.cards):
            return self.cards[index]
        return None


class DeckManager:
    """
    Supplies a stable current card for the active theme.

    Usage:
        manager.activate("Tech")
        await manager.wait_idle()
        card = manager.current
        ...
        manager.advance()
    """

    def __init__(
        self,
        source: ContentSource,
        refill_threshold: int = REFILL_THRESHOLD,
        max_consumed: int = MAX_CONSUMED_CARDS,
    ) -> None:
        self.source = source
        self.refill_threshold = refill_threshold
        self.max_consumed = max_consumed
        self._deck: Deck | None = None
        self._epoch = 0
        self._task: asyncio.Task[None] | None = None
        # Strong references so in-flight fetches are not garbage collected
        self._tasks: set[asyncio.Task[None]] = set()

    # -------------------------------------------------------------------------
    # Read side
    # -------------------------------------------------------------------------

    @property
    def deck(self) -> Deck | None:
        return self._deck

    @property
    def theme(self) -> str | None:
        return self._deck.theme if self._deck else None

    @property
    def current(self) -> Card | None:
        """Card currently presented, or None when the deck is empty."""
        return self._deck.card_at(0) if self._deck else None

    @property
    def next_card(self) -> Card | None:
        """Card after the current one, for preview."""
        return self._deck.card_at(1) if self._deck else None

    @property
    def is_empty(self) -> bool:
        return self.current is None

    @property
    def is_fetching(self) -> bool:
        return self._deck is not None and self._deck.status == FetchStatus.FETCHING

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def activate(self, theme: str) -> bool:
        """
        Make `theme` the active theme.

        Discards the previous deck and issues the initial fetch. Calling it
        again with the already active theme is a no-op.

        Returns:
            True if a new deck was created
        """
        theme = theme.strip()
        if not theme:
            raise InvalidInputError("Theme cannot be empty")

        if self._deck is not None and self._deck.theme == theme:
            return False

        previous = self.theme
        self._epoch += 1
        self._deck = Deck(theme=theme, epoch=self._epoch)
        self._task = None
        logger.info(
            "deck_activated",
            extra={"theme": theme, "previous_theme": previous, "epoch": self._epoch},
        )
        self._start_fetch(self._deck)
        return True

    def advance(self) -> Card | None:
        """
        Move past the current card.

        Returns:
            The new current card, or None if the deck is now empty
            (until a pending or new fetch resolves)
        """
        deck = self._deck
        if deck is None or deck.cursor >= len(deck.cards):
            return None

        deck.cursor += 1
        self._prune(deck)
        self.ensure_supply()
        return self.current

    def ensure_supply(self) -> bool:
        """
        Issue a refill fetch if the active deck is running low.

        Returns:
            True if a fetch was issued
        """
        deck = self._deck
        if deck is None or deck.status == FetchStatus.FETCHING:
            return False
        if deck.remaining >= self.refill_threshold:
            return False
        self._start_fetch(deck)
        return True

    async def wait_idle(self) -> None:
        """Wait until the active deck has no fetch in flight."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})

    # -------------------------------------------------------------------------
    # Fetching
    # -------------------------------------------------------------------------

    def _start_fetch(self, deck: Deck) -> None:
        deck.status = FetchStatus.FETCHING
        task = asyncio.create_task(self._fetch(deck.theme, deck.epoch))
        self._task = task
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        logger.debug("deck_fetch_started theme=%s epoch=%d", deck.theme, deck.epoch)

    def _active_deck(self, epoch: int) -> Deck | None:
        """The current deck if it is the one `epoch` was issued for."""
        deck = self._deck
        if deck is not None and deck.epoch == epoch:
            return deck
        return None

    async def _fetch(self, theme: str, epoch: int) -> None:
        try:
            cards = await self.source.generate_deck(theme)
        except (FetchFailure, ParseFailure) as e:
            logger.warning(
                "deck_fetch_failed",
                extra={"theme": theme, "epoch": epoch, "kind": e.kind.value, "error": e.message},
            )
            self._fail(epoch)
            return
        except Exception:
            logger.exception("Unexpected error fetching deck for %s", theme)
            self._fail(epoch)
            return

        deck = self._active_deck(epoch)
        if deck is None:
            logger.info(
                "stale_deck_fetch_discarded",
                extra={"theme": theme, "epoch": epoch, "cards": len(cards)},
            )
            return

        added = self._append(deck, cards)
        deck.status = FetchStatus.READY
        logger.info(
            "deck_fetch_completed",
            extra={"theme": theme, "epoch": epoch, "added": added, "remaining": deck.remaining},
        )

        # An empty batch would refill forever; wait for the next advance instead
        if added:
            self.ensure_supply()

    def _fail(self, epoch: int) -> None:
        deck = self._active_deck(epoch)
        if deck is not None:
            deck.status = FetchStatus.IDLE

    def _append(self, deck: Deck, cards: list[Card]) -> int:
        seen = {card.id for card in deck.cards}
        added = 0
        for card in cards:
            if card.theme != deck.theme:
                card = replace(card, theme=deck.theme)
            if card.id in seen:
                card = replace(card, id=f"{card.id}-{uuid.uuid4().hex[:8]}")
            seen.add(card.id)
            deck.cards.append(card)
            added += 1
        return added

    def _prune(self, deck: Deck) -> None:
        if deck.cursor <= self.max_consumed:
            return
        del deck.cards[: deck.cursor]
        deck.pruned += deck.cursor
        deck.cursor = 0
