"""
Deck API endpoints.

Theme selection, the active deck, pointer events and button swipes.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from interestmeet.api.dependencies import get_swipe_session
from interestmeet.api.schemas import (
    DeckResponse,
    OffsetResponse,
    PointerRequest,
    ReleaseResponse,
    SwipeResponse,
    from_deck,
    from_offset,
    from_swipe,
)
from interestmeet.services.gesture import Direction
from interestmeet.services.swipe_session import SwipeSession

router = APIRouter(tags=["deck"])

Session = Annotated[SwipeSession, Depends(get_swipe_session)]


class ThemeRequest(BaseModel):
    theme: str = Field(..., min_length=1, examples=["Tech"])


class ThemesResponse(BaseModel):
    themes: list[str]
    current_theme: str


class SwipeRequest(BaseModel):
    direction: Direction


@router.get("/themes", response_model=ThemesResponse)
async def list_themes(session: Session) -> ThemesResponse:
    return ThemesResponse(
        themes=session.store.themes,
        current_theme=session.store.current_theme,
    )


@router.post("/themes", response_model=DeckResponse)
async def add_theme(request: ThemeRequest, session: Session) -> DeckResponse:
    """Add a custom theme and switch the deck to it."""
    session.add_theme(request.theme)
    return from_deck(session.decks)


@router.post("/deck/activate", response_model=DeckResponse)
async def activate_deck(request: ThemeRequest, session: Session) -> DeckResponse:
    """Switch the deck to a theme. Re-activating the current theme is a no-op."""
    session.select_theme(request.theme)
    return from_deck(session.decks)


@router.get("/deck", response_model=DeckResponse)
async def get_deck(
    session: Session,
    wait: Annotated[bool, Query(description="Wait for an in-flight fetch")] = False,
) -> DeckResponse:
    """
    Get the active deck.

    Activates the current theme on first use. Polling an empty deck retries
    a failed fetch.
    """
    if session.decks.deck is None:
        session.select_theme(session.store.current_theme)
    else:
        session.decks.ensure_supply()

    if wait:
        await session.decks.wait_idle()
    return from_deck(session.decks)


@router.post("/deck/press", response_model=OffsetResponse)
async def press(request: PointerRequest, session: Session) -> OffsetResponse:
    session.press(request.x, request.y)
    return from_offset(session.classifier.offset, session.classifier.is_dragging)


@router.post("/deck/move", response_model=OffsetResponse)
async def move(request: PointerRequest, session: Session) -> OffsetResponse:
    offset = session.move(request.x, request.y)
    return from_offset(offset, session.classifier.is_dragging)


@router.post("/deck/release", response_model=ReleaseResponse)
async def release(session: Session) -> ReleaseResponse:
    """Release the card; a short drag snaps back with no outcome."""
    result = session.release()
    if result is None:
        return ReleaseResponse(resolved=False)
    return ReleaseResponse(resolved=True, swipe=from_swipe(result))


@router.post("/deck/swipe", response_model=SwipeResponse)
async def swipe(request: SwipeRequest, session: Session) -> SwipeResponse:
    """Swipe the current card using the on-screen buttons."""
    return from_swipe(session.swipe(request.direction))
