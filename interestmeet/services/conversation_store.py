"""
Conversation Store — per-match message threads.

Conversations are created by the Outcome Reducer (liked person cards) or
by opening a live chat, and mutated only by send_message().
"""

import logging
import time
import uuid
from dataclasses import replace
from datetime import UTC, datetime

from interestmeet.models.conversation import Conversation, LiveMatch, Message, Sender

logger = logging.getLogger(__name__)


def _token() -> str:
    return f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}"


class ConversationStore:
    """Ordered conversations, most recent first."""

    def __init__(self, conversations: list[Conversation] | None = None) -> None:
        self._conversations: list[Conversation] = list(conversations or [])

    @property
    def conversations(self) -> list[Conversation]:
        return list(self._conversations)

    def get(self, conversation_id: str) -> Conversation | None:
        for conversation in self._conversations:
            if conversation.id == conversation_id:
                return conversation
        return None

    def total_unread(self) -> int:
        """Sum of unread counts, shown on the inbox tab."""
        return sum(c.unread_count for c in self._conversations)

    def commit(self, conversations: list[Conversation]) -> None:
        """Adopt the conversation list produced by a swipe outcome."""
        self._conversations = list(conversations)

    def send_message(self, conversation_id: str, text: str) -> Conversation | None:
        """
        Append a message from the user to a conversation.

        No-op when `text` is blank or the conversation does not exist.

        Returns:
            The updated conversation, or None if nothing changed
        """
        if not text or not text.strip():
            return None

        for index, conversation in enumerate(self._conversations):
            if conversation.id != conversation_id:
                continue
            message = Message(
                id=_token(),
                sender=Sender.ME,
                text=text,
                timestamp=datetime.now(UTC),
            )
            updated = replace(
                conversation,
                messages=(*conversation.messages, message),
                last_message=text,
                unread_count=0,
            )
            self._conversations[index] = updated
            return updated

        logger.debug("send_message to unknown conversation %s ignored", conversation_id)
        return None

    def open_live_chat(self, theme: str, match: LiveMatch) -> Conversation:
        """Start a live conversation seeded with the match's opening message."""
        conversation = Conversation(
            id=f"live-{_token()}",
            name=match.name,
            avatar_char=match.name[:1],
            last_message=match.message,
            unread_count=1,
            messages=(
                Message(
                    id="first-msg",
                    sender=Sender.THEM,
                    text=match.message,
                    timestamp=datetime.now(UTC),
                ),
            ),
            is_live=True,
            theme_context=theme,
        )
        self._conversations.insert(0, conversation)
        logger.info("live_chat_opened", extra={"theme": theme, "conversation_id": conversation.id})
        return conversation
