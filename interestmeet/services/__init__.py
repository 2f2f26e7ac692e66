"""
InterestMeet services.

Swipe mechanics, deck supply and the state they drive.
"""

from interestmeet.services.app_store import AppStore, ProfileStats
from interestmeet.services.content_source import (
    AnthropicContentSource,
    ContentSource,
    get_content_source,
    set_content_source,
)
from interestmeet.services.conversation_store import ConversationStore
from interestmeet.services.deck_manager import Deck, DeckManager, FetchStatus
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
from interestmeet.services.outcome_reducer import SwipeOutcome, reduce_swipe
from interestmeet.services.swipe_session import SwipeResult, SwipeSession

__all__ = [
    "AnthropicContentSource",
    "AppStore",
    "Cancelled",
    "ContentSource",
    "ConversationStore",
    "Deck",
    "DeckManager",
    "Direction",
    "Dragging",
    "FetchStatus",
    "GestureClassifier",
    "Idle",
    "Offset",
    "ProfileStats",
    "Resolved",
    "SwipeOutcome",
    "SwipeResult",
    "SwipeSession",
    "classify_offset",
    "get_content_source",
    "reduce_swipe",
    "set_content_source",
]
