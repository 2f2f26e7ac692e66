"""
Profile API endpoints.

Onboarding, profile edits, quizzes, contributed cards and statistics.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from interestmeet.api.dependencies import get_swipe_session
from interestmeet.api.schemas import CardResponse, ProfileResponse, from_card, from_profile
from interestmeet.models.card import Rarity
from interestmeet.models.failure import ProfileRequiredError
from interestmeet.models.profile import Profile
from interestmeet.services.swipe_session import SwipeSession

router = APIRouter(prefix="/profile", tags=["profile"])

Session = Annotated[SwipeSession, Depends(get_swipe_session)]


class OnboardRequest(BaseModel):
    interests: list[str] = Field(..., examples=[["Hiking", "Jazz"]])


class EditRequest(BaseModel):
    request: str = Field(..., description="Free-form description of the change")


class QuizRequest(BaseModel):
    points: int = Field(..., ge=0)
    badge: str


class ContributionRequest(BaseModel):
    content: str = Field(..., min_length=1)
    type: str = Field(default="quote", min_length=1)
    rarity: Rarity = Rarity.COMMON


class StatsResponse(BaseModel):
    cards_collected: int
    matches: int
    unread: int
    karma: int
    match_level: int


def _require_profile(session: SwipeSession, operation: str) -> Profile:
    profile = session.store.profile
    if profile is None:
        raise ProfileRequiredError(operation)
    return profile


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def onboard(request: OnboardRequest, session: Session) -> ProfileResponse:
    """Generate a profile from the interests picked in the intro game."""
    profile = await session.store.onboard(request.interests)
    return from_profile(profile)


@router.get("", response_model=ProfileResponse)
async def get_profile(session: Session) -> ProfileResponse:
    return from_profile(_require_profile(session, "get_profile"))


@router.post("/edit", response_model=ProfileResponse)
async def edit_profile(request: EditRequest, session: Session) -> ProfileResponse:
    return from_profile(await session.store.edit_profile(request.request))


@router.post("/quiz", response_model=ProfileResponse)
async def complete_quiz(request: QuizRequest, session: Session) -> ProfileResponse:
    _require_profile(session, "complete_quiz")
    session.store.complete_quiz(request.points, request.badge)
    return from_profile(_require_profile(session, "complete_quiz"))


@router.post(
    "/contributions",
    response_model=CardResponse,
    status_code=status.HTTP_201_CREATED,
)
async def contribute_card(request: ContributionRequest, session: Session) -> CardResponse:
    """Create a card in the current theme. Contributing earns 50 karma."""
    card = session.store.create_card(request.content, request.type, request.rarity)
    return from_card(card)


@router.get("/stats", response_model=StatsResponse)
async def get_stats(session: Session) -> StatsResponse:
    stats = session.store.stats()
    return StatsResponse(
        cards_collected=stats.cards_collected,
        matches=stats.matches,
        unread=stats.unread,
        karma=stats.karma,
        match_level=stats.match_level,
    )
