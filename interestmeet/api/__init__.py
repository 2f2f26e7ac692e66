from interestmeet.api.collection import router as collection_router
from interestmeet.api.deck import router as deck_router
from interestmeet.api.health import router as health_router
from interestmeet.api.inbox import router as inbox_router
from interestmeet.api.profile import router as profile_router

__all__ = [
    "collection_router",
    "deck_router",
    "health_router",
    "inbox_router",
    "profile_router",
]
