from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Sender(str, Enum):
    ME = "me"
    THEM = "them"


@dataclass(frozen=True)
class Message:
    """A single chat message. Messages are append-only within a thread."""

    id: str
    sender: Sender
    text: str
    timestamp: datetime


@dataclass(frozen=True)
class Conversation:
    """
    A message thread with one match.

    Created only when a person card is liked or a live chat is opened.
    Conversations are never deleted.
    """

    id: str
    name: str
    avatar_char: str
    last_message: str
    unread_count: int = 0
    messages: tuple[Message, ...] = field(default_factory=tuple)
    is_live: bool = False
    theme_context: str | None = None


@dataclass(frozen=True)
class LiveMatch:
    """An online user found for a themed live chat."""

    name: str
    message: str
