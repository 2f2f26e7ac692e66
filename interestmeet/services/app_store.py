"""
Application store — the owned home of Profile, Collections and Conversations.

All mutation goes through the methods below. Swipe effects are computed by
the Outcome Reducer and committed here in one step, so the entity
invariants hold between any two calls.
"""

import logging
import time
import uuid
from dataclasses import dataclass, replace

from interestmeet.config import KARMA_CONTRIBUTION, settings
from interestmeet.models.card import Card, Rarity
from interestmeet.models.collection import CollectionBucket, total_collected
from interestmeet.models.conversation import Conversation
from interestmeet.models.failure import InvalidInputError, ProfileRequiredError
from interestmeet.models.profile import Connection, Group, Profile
from interestmeet.services.content_source import ContentSource
from interestmeet.services.conversation_store import ConversationStore
from interestmeet.services.gesture import Direction
from interestmeet.services.outcome_reducer import SwipeOutcome, reduce_swipe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProfileStats:
    cards_collected: int
    matches: int
    unread: int
    karma: int
    match_level: int


class AppStore:
    """
    Process-local application state.

    Nothing here is persisted; a new store is a new session.
    """

    def __init__(self, source: ContentSource, themes: list[str] | None = None) -> None:
        self.source = source
        self.profile: Profile | None = None
        self.connections: list[Connection] = []
        self.groups: list[Group] = []
        self.collections: list[CollectionBucket] = []
        self.inbox = ConversationStore()
        self.themes: list[str] = list(themes if themes is not None else settings.default_themes)
        self.current_theme: str = self.themes[0] if self.themes else "Humor"

    @property
    def conversations(self) -> list[Conversation]:
        return self.inbox.conversations

    def _require_profile(self, operation: str) -> Profile:
        if self.profile is None:
            raise ProfileRequiredError(operation)
        return self.profile

    # -------------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------------

    async def onboard(self, interests: list[str]) -> Profile:
        """
        Generate the user's profile from their picked interests.

        Raises:
            InvalidInputError: If no interest was picked
            FetchFailure, ParseFailure: If generation failed
        """
        picked = [i.strip() for i in interests if i.strip()]
        if not picked:
            raise InvalidInputError("You must select at least one interest to start.")

        bundle = await self.source.generate_profile(", ".join(picked))
        self.profile = replace(bundle.profile, contributions=())
        self.connections = bundle.connections
        self.groups = bundle.groups
        logger.info("profile_created", extra={"interests": picked, "karma": self.profile.karma})
        return self.profile

    async def edit_profile(self, request: str) -> Profile:
        """
        Regenerate profile text from a free-form edit request.

        Karma, badges and contributions are kept.
        """
        profile = self._require_profile("edit_profile")
        if not request.strip():
            raise InvalidInputError("Describe what you'd like to change.")

        bundle = await self.source.generate_profile(", ".join(profile.interests), request)
        generated = bundle.profile
        self.profile = replace(
            profile,
            name=generated.name,
            summary=generated.summary,
            about_me=generated.about_me,
            looking_for=generated.looking_for,
            offering=generated.offering,
        )
        return self.profile

    def complete_quiz(self, points: int, badge: str) -> Profile | None:
        """Award quiz karma and the quiz badge (each badge is held once)."""
        if points < 0:
            raise InvalidInputError("Quiz points cannot be negative", detail=f"points={points}")
        if self.profile is None:
            return None

        badges = self.profile.badges
        if badge and badge not in badges:
            badges = (*badges, badge)
        self.profile = replace(self.profile, karma=self.profile.karma + points, badges=badges)
        return self.profile

    def create_card(self, content: str, card_type: str, rarity: Rarity) -> Card:
        """Add a user-authored card to the current theme's contributions."""
        profile = self._require_profile("create_card")
        if not content.strip():
            raise InvalidInputError("Card content cannot be empty")
        if not card_type.strip():
            raise InvalidInputError("Card type cannot be empty")

        card = Card(
            id=f"custom-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}",
            type=card_type.strip().lower(),
            content=content.strip(),
            theme=self.current_theme,
            rarity=rarity,
        )
        self.profile = replace(
            profile,
            karma=profile.karma + KARMA_CONTRIBUTION,
            contributions=(card, *profile.contributions),
        )
        logger.info("card_contributed", extra={"card_id": card.id, "theme": card.theme})
        return card

    # -------------------------------------------------------------------------
    # Themes
    # -------------------------------------------------------------------------

    def add_theme(self, theme: str) -> str:
        """Offer a new theme (first in the list) and select it."""
        theme = theme.strip()
        if not theme:
            raise InvalidInputError("Theme cannot be empty")
        if theme not in self.themes:
            self.themes.insert(0, theme)
        self.current_theme = theme
        return theme

    # -------------------------------------------------------------------------
    # Swipes and chat
    # -------------------------------------------------------------------------

    def apply_swipe(self, direction: Direction, card: Card) -> SwipeOutcome:
        """Fold one resolved swipe into the store."""
        outcome = reduce_swipe(
            direction,
            card,
            self.profile,
            self.collections,
            self.inbox.conversations,
        )
        self.profile = outcome.profile
        self.collections = outcome.collections
        self.inbox.commit(outcome.conversations)

        logger.info(
            "swipe_applied",
            extra={
                "card_id": card.id,
                "direction": direction.value,
                "collected": outcome.collected_card is not None,
                "matched": outcome.match is not None,
                "karma_awarded": outcome.karma_awarded,
            },
        )
        return outcome

    def send_message(self, conversation_id: str, text: str) -> Conversation | None:
        return self.inbox.send_message(conversation_id, text)

    async def start_live_chat(self, theme: str | None = None) -> Conversation:
        """Find an online user for `theme` and open a live conversation."""
        profile = self._require_profile("start_live_chat")
        theme = theme or self.current_theme
        match = await self.source.generate_live_match(theme, profile.karma)
        return self.inbox.open_live_chat(theme, match)

    def stats(self) -> ProfileStats:
        karma = self.profile.karma if self.profile else 0
        return ProfileStats(
            cards_collected=total_collected(self.collections),
            matches=len(self.inbox.conversations),
            unread=self.inbox.total_unread(),
            karma=karma,
            match_level=self.profile.match_level if self.profile else 1,
        )
