from interestmeet.models.card import Card, CardType, Rarity, with_rarity
from interestmeet.models.collection import (
    CollectionBucket,
    add_to_collections,
    level_for,
    total_collected,
)
from interestmeet.models.conversation import Conversation, LiveMatch, Message, Sender
from interestmeet.models.failure import (
    ApiResponse,
    FailureDetail,
    FailureKind,
    FetchFailure,
    InvalidInputError,
    KnownError,
    NoCardError,
    OutcomeType,
    ParseFailure,
    ProfileRequiredError,
)
from interestmeet.models.profile import Connection, Group, Post, Profile, ProfileBundle

__all__ = [
    "ApiResponse",
    "Card",
    "CardType",
    "CollectionBucket",
    "Connection",
    "Conversation",
    "FailureDetail",
    "FailureKind",
    "FetchFailure",
    "Group",
    "InvalidInputError",
    "KnownError",
    "LiveMatch",
    "Message",
    "NoCardError",
    "OutcomeType",
    "ParseFailure",
    "Post",
    "Profile",
    "ProfileBundle",
    "ProfileRequiredError",
    "Rarity",
    "Sender",
    "add_to_collections",
    "level_for",
    "total_collected",
    "with_rarity",
]
