"""
Request and response models shared by the API routers.

Domain objects are plain dataclasses; these pydantic models are the wire
shape, built with the from_* helpers below.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from interestmeet.models.card import Card, Rarity
from interestmeet.models.collection import CollectionBucket
from interestmeet.models.conversation import Conversation, Message
from interestmeet.models.profile import Profile
from interestmeet.services.deck_manager import DeckManager, FetchStatus
from interestmeet.services.gesture import Direction, Offset
from interestmeet.services.swipe_session import SwipeResult


class CardResponse(BaseModel):
    id: str
    type: str
    content: str
    sub_content: str | None = None
    theme: str
    rarity: Rarity


class ProfileResponse(BaseModel):
    name: str
    summary: str
    about_me: str | None = None
    looking_for: str
    offering: str
    karma: int
    interests: list[str] = Field(default_factory=list)
    badges: list[str] = Field(default_factory=list)
    contributions: list[CardResponse] = Field(default_factory=list)


class MessageResponse(BaseModel):
    id: str
    sender: Literal["me", "them"]
    text: str
    timestamp: datetime


class ConversationResponse(BaseModel):
    id: str
    name: str
    avatar_char: str
    last_message: str
    unread_count: int
    messages: list[MessageResponse] = Field(default_factory=list)
    is_live: bool = False
    theme_context: str | None = None


class CollectionResponse(BaseModel):
    theme: str
    count: int
    level: int
    cards: list[CardResponse] = Field(default_factory=list)


class DeckResponse(BaseModel):
    """Snapshot of the active deck."""

    theme: str | None
    status: FetchStatus | None = None
    current: CardResponse | None = None
    next_card: CardResponse | None = None
    remaining: int = 0
    consumed: int = 0
    is_empty: bool = Field(
        default=True,
        description="True while there is no card to show (fetching more)",
    )


class OffsetResponse(BaseModel):
    dx: float
    dy: float
    dragging: bool


class SwipeResponse(BaseModel):
    card_id: str
    direction: Direction
    collected_card: CardResponse | None = None
    match: ConversationResponse | None = None
    karma: int | None = None
    karma_awarded: int = 0
    next_card: CardResponse | None = None
    settle_delay_ms: int


class ReleaseResponse(BaseModel):
    resolved: bool
    swipe: SwipeResponse | None = None


class PointerRequest(BaseModel):
    x: float
    y: float


def from_card(card: Card) -> CardResponse:
    return CardResponse(
        id=card.id,
        type=card.type,
        content=card.content,
        sub_content=card.sub_content,
        theme=card.theme,
        rarity=card.rarity,
    )


def from_profile(profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        name=profile.name,
        summary=profile.summary,
        about_me=profile.about_me,
        looking_for=profile.looking_for,
        offering=profile.offering,
        karma=profile.karma,
        interests=list(profile.interests),
        badges=list(profile.badges),
        contributions=[from_card(c) for c in profile.contributions],
    )


def from_message(message: Message) -> MessageResponse:
    return MessageResponse(
        id=message.id,
        sender=message.sender.value,
        text=message.text,
        timestamp=message.timestamp,
    )


def from_conversation(conversation: Conversation) -> ConversationResponse:
    return ConversationResponse(
        id=conversation.id,
        name=conversation.name,
        avatar_char=conversation.avatar_char,
        last_message=conversation.last_message,
        unread_count=conversation.unread_count,
        messages=[from_message(m) for m in conversation.messages],
        is_live=conversation.is_live,
        theme_context=conversation.theme_context,
    )


def from_bucket(bucket: CollectionBucket) -> CollectionResponse:
    return CollectionResponse(
        theme=bucket.theme,
        count=bucket.count,
        level=bucket.level,
        cards=[from_card(c) for c in bucket.cards],
    )


def from_deck(decks: DeckManager) -> DeckResponse:
    deck = decks.deck
    if deck is None:
        return DeckResponse(theme=None)
    current = decks.current
    next_card = decks.next_card
    return DeckResponse(
        theme=deck.theme,
        status=deck.status,
        current=from_card(current) if current else None,
        next_card=from_card(next_card) if next_card else None,
        remaining=deck.remaining,
        consumed=deck.consumed,
        is_empty=current is None,
    )


def from_offset(offset: Offset, dragging: bool) -> OffsetResponse:
    return OffsetResponse(dx=offset.dx, dy=offset.dy, dragging=dragging)


def from_swipe(result: SwipeResult) -> SwipeResponse:
    outcome = result.outcome
    return SwipeResponse(
        card_id=result.card.id,
        direction=outcome.direction,
        collected_card=from_card(outcome.collected_card) if outcome.collected_card else None,
        match=from_conversation(outcome.match) if outcome.match else None,
        karma=outcome.profile.karma if outcome.profile else None,
        karma_awarded=outcome.karma_awarded,
        next_card=from_card(result.next_card) if result.next_card else None,
        settle_delay_ms=result.settle_delay_ms,
    )
