"""
Per-process swipe session.

State is transient and process-local: there is exactly one session per
running service, created on first use.
"""

from interestmeet.services.app_store import AppStore
from interestmeet.services.content_source import get_content_source
from interestmeet.services.deck_manager import DeckManager
from interestmeet.services.swipe_session import SwipeSession

_session: SwipeSession | None = None


def get_swipe_session() -> SwipeSession:
    """
    FastAPI dependency returning the process-wide SwipeSession.

    Returns:
        Singleton SwipeSession instance
    """
    global _session
    if _session is None:
        source = get_content_source()
        _session = SwipeSession(AppStore(source), DeckManager(source))
    return _session


def reset_swipe_session() -> None:
    """Drop the current session (for testing)."""
    global _session
    _session = None
