"""
Outcome Reducer — folds a resolved swipe into collections, karma and matches.

reduce_swipe() is pure: it reads one snapshot of the application state and
returns the next one. The three projections (collection, conversation,
karma) are computed independently from the same input; none observes
another's result, and the inputs are never mutated.

Rules:
- right: collect the card as-is
- up:    collect the card with rarity overridden to legendary
- left:  reject; nothing changes
- right on a person card (and only that) creates a match conversation
- collecting awards 10 karma for a legendary card, 2 otherwise
"""

import time
import uuid
from dataclasses import dataclass

from interestmeet.config import KARMA_COLLECT, KARMA_LEGENDARY_COLLECT
from interestmeet.models.card import Card, Rarity, with_rarity
from interestmeet.models.collection import CollectionBucket, add_to_collections
from interestmeet.models.conversation import Conversation
from interestmeet.models.profile import Profile
from interestmeet.services.gesture import Direction

MATCH_GREETING = "You matched! Say hello."


@dataclass(frozen=True)
class SwipeOutcome:
    """Next application state after one swipe."""

    direction: Direction
    profile: Profile | None
    collections: list[CollectionBucket]
    conversations: list[Conversation]
    collected_card: Card | None = None
    match: Conversation | None = None
    karma_awarded: int = 0


def effective_card(direction: Direction, card: Card) -> Card | None:
    """Card as it will be collected, or None for a rejected card."""
    if direction is Direction.LEFT:
        return None
    if direction is Direction.UP:
        return with_rarity(card, Rarity.LEGENDARY)
    return card


def karma_for(card: Card) -> int:
    """Karma awarded for collecting `card`."""
    return KARMA_LEGENDARY_COLLECT if card.rarity is Rarity.LEGENDARY else KARMA_COLLECT


def match_name(content: str) -> str:
    """Person name: the text before the first comma."""
    return content.split(",", 1)[0].strip()


def create_match(card: Card, token: str | None = None) -> Conversation:
    """Build the conversation opened by liking a person card."""
    token = token or f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"
    return Conversation(
        id=f"{card.id}-{token}",
        name=match_name(card.content),
        avatar_char=card.content[:1],
        last_message=MATCH_GREETING,
        unread_count=1,
        messages=(),
    )


def reduce_swipe(
    direction: Direction,
    card: Card,
    profile: Profile | None,
    collections: list[CollectionBucket],
    conversations: list[Conversation],
) -> SwipeOutcome:
    """
    Apply one resolved swipe.

    Args:
        direction: Resolved swipe direction
        card: Card the gesture was made on
        profile: Current profile (karma is only awarded when present)
        collections: Current collection buckets
        conversations: Current conversations, most recent first

    Returns:
        SwipeOutcome holding the next profile, collections and conversations
    """
    collected = effective_card(direction, card)
    if collected is None:
        return SwipeOutcome(
            direction=direction,
            profile=profile,
            collections=collections,
            conversations=conversations,
        )

    new_collections = add_to_collections(collections, collected)

    match = None
    new_conversations = conversations
    if direction is Direction.RIGHT and card.is_person:
        match = create_match(card)
        new_conversations = [match, *conversations]

    awarded = 0
    new_profile = profile
    if profile is not None:
        awarded = karma_for(collected)
        new_profile = profile.with_karma(awarded)

    return SwipeOutcome(
        direction=direction,
        profile=new_profile,
        collections=new_collections,
        conversations=new_conversations,
        collected_card=collected,
        match=match,
        karma_awarded=awarded,
    )
