"""
Inbox API endpoints.

Lists matches, sends messages and opens live chats.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from interestmeet.api.dependencies import get_swipe_session
from interestmeet.api.schemas import ConversationResponse, from_conversation
from interestmeet.services.swipe_session import SwipeSession

router = APIRouter(prefix="/conversations", tags=["inbox"])

Session = Annotated[SwipeSession, Depends(get_swipe_session)]


class InboxResponse(BaseModel):
    conversations: list[ConversationResponse] = Field(default_factory=list)
    unread: int = 0


class SendMessageRequest(BaseModel):
    text: str


class SendMessageResponse(BaseModel):
    sent: bool
    conversation: ConversationResponse | None = None


class LiveChatRequest(BaseModel):
    theme: str | None = Field(default=None, description="Defaults to the current theme")


@router.get("", response_model=InboxResponse)
async def list_conversations(session: Session) -> InboxResponse:
    inbox = session.store.inbox
    return InboxResponse(
        conversations=[from_conversation(c) for c in inbox.conversations],
        unread=inbox.total_unread(),
    )


@router.post("/{conversation_id}/messages", response_model=SendMessageResponse)
async def send_message(
    conversation_id: str,
    request: SendMessageRequest,
    session: Session,
) -> SendMessageResponse:
    """
    Send a message.

    Blank text or an unknown conversation changes nothing and reports
    sent=false.
    """
    conversation = session.store.send_message(conversation_id, request.text)
    if conversation is None:
        return SendMessageResponse(sent=False)
    return SendMessageResponse(sent=True, conversation=from_conversation(conversation))


@router.post(
    "/live",
    response_model=ConversationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def start_live_chat(request: LiveChatRequest, session: Session) -> ConversationResponse:
    """Find an online user with similar karma and open a live chat."""
    conversation = await session.store.start_live_chat(request.theme)
    return from_conversation(conversation)
