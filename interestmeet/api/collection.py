"""Collection API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from interestmeet.api.dependencies import get_swipe_session
from interestmeet.api.schemas import CollectionResponse, from_bucket
from interestmeet.services.swipe_session import SwipeSession

router = APIRouter(prefix="/collections", tags=["collections"])


@router.get("", response_model=list[CollectionResponse])
async def list_collections(
    session: Annotated[SwipeSession, Depends(get_swipe_session)],
) -> list[CollectionResponse]:
    """Collected cards grouped by theme, in the order themes were first collected."""
    return [from_bucket(bucket) for bucket in session.store.collections]
