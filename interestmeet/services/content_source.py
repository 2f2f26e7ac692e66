"""
Content Source — generated cards, profiles and live chat openers.

The swipe core only depends on the ContentSource protocol. The production
implementation asks Claude for JSON and validates it with pydantic before
anything reaches application state.

FAILURE CONTRACT:
- Transport/API errors raise FetchFailure
- Unparseable or mis-shaped payloads raise ParseFailure
- Nothing is ever partially applied: a payload either validates in full
  or the call fails
"""

import json
import logging
import random
import re
import uuid
from typing import Any, Protocol

import anthropic
from anthropic.types import TextBlock
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from interestmeet.config import STARTING_KARMA, settings
from interestmeet.models.card import Card, Rarity
from interestmeet.models.conversation import LiveMatch
from interestmeet.models.failure import FetchFailure, ParseFailure
from interestmeet.models.profile import Connection, Group, Post, Profile, ProfileBundle

logger = logging.getLogger(__name__)

_FENCE_START = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_END = re.compile(r"\s*```$")


class ContentSource(Protocol):
    """Anything that can generate decks, profiles and live matches."""

    async def generate_deck(self, theme: str) -> list[Card]: ...

    async def generate_profile(
        self, interests: str, edit_context: str | None = None
    ) -> ProfileBundle: ...

    async def generate_live_match(self, theme: str, karma: int) -> LiveMatch: ...


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CardPayload(_Payload):
    id: str | None = None
    type: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    sub_content: str | None = Field(default=None, alias="subContent")
    theme: str | None = None
    rarity: Rarity = Rarity.COMMON


class DeckPayload(_Payload):
    cards: list[CardPayload]


class ProfileFieldsPayload(_Payload):
    name: str = Field(..., min_length=1)
    summary: str
    about_me: str | None = Field(default=None, alias="aboutMe")
    looking_for: str = Field(..., alias="lookingFor")
    offering: str


class ConnectionPayload(_Payload):
    name: str
    bio: str
    shared_interests: list[str] = Field(default_factory=list, alias="sharedInterests")


class PostPayload(_Payload):
    author: str
    content: str
    time_ago: str = Field(default="", alias="timeAgo")


class GroupPayload(_Payload):
    name: str
    description: str
    posts: list[PostPayload] = Field(default_factory=list)


class ProfileBundlePayload(_Payload):
    profile: ProfileFieldsPayload
    connections: list[ConnectionPayload] = Field(default_factory=list)
    groups: list[GroupPayload] = Field(default_factory=list)


class LiveMatchPayload(_Payload):
    name: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


# =============================================================================
# PARSING
# =============================================================================


def parse_json_content(content: str, operation: str) -> Any:
    """
    Parse model output as JSON, tolerating a surrounding Markdown code fence.

    Raises:
        ParseFailure: If the text is not valid JSON
    """
    cleaned = _FENCE_END.sub("", _FENCE_START.sub("", (content or "").strip()))
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ParseFailure(operation, f"invalid JSON: {e}") from e


def parse_deck(data: Any, theme: str) -> list[Card]:
    """
    Validate a deck payload and build Cards tagged with `theme`.

    Accepts either a bare list of cards or {"cards": [...]}.
    """
    if isinstance(data, list):
        data = {"cards": data}
    try:
        payload = DeckPayload.model_validate(data)
    except ValidationError as e:
        raise ParseFailure("generate_deck", str(e)) from e

    return [
        Card(
            id=item.id or f"{theme}-{uuid.uuid4().hex[:12]}",
            type=item.type.strip().lower(),
            content=item.content.strip(),
            sub_content=item.sub_content,
            # Cards always belong to the theme they were requested for
            theme=theme,
            rarity=item.rarity,
        )
        for item in payload.cards
    ]


def parse_profile_bundle(data: Any, interests: list[str]) -> ProfileBundle:
    """Validate a profile payload. Generated profiles start at STARTING_KARMA."""
    try:
        payload = ProfileBundlePayload.model_validate(data)
    except ValidationError as e:
        raise ParseFailure("generate_profile", str(e)) from e

    fields = payload.profile
    profile = Profile(
        name=fields.name,
        summary=fields.summary,
        about_me=fields.about_me,
        looking_for=fields.looking_for,
        offering=fields.offering,
        karma=STARTING_KARMA,
        interests=tuple(interests),
    )
    return ProfileBundle(
        profile=profile,
        connections=[
            Connection(name=c.name, bio=c.bio, shared_interests=tuple(c.shared_interests))
            for c in payload.connections
        ],
        groups=[
            Group(
                name=g.name,
                description=g.description,
                posts=tuple(
                    Post(author=p.author, content=p.content, time_ago=p.time_ago)
                    for p in g.posts
                ),
            )
            for g in payload.groups
        ],
    )


def parse_live_match(data: Any) -> LiveMatch:
    try:
        payload = LiveMatchPayload.model_validate(data)
    except ValidationError as e:
        raise ParseFailure("generate_live_match", str(e)) from e
    return LiveMatch(name=payload.name, message=payload.message)


def split_interests(interests: str) -> list[str]:
    """Split a comma separated interest string, dropping blanks."""
    return [part.strip() for part in interests.split(",") if part.strip()]


# =============================================================================
# PROMPTS
# =============================================================================


def build_deck_prompt(theme: str) -> str:
    return f"""Target Theme: "{theme}".
Task: Generate 6 "Collectible Cards" for a swipe deck centered around this theme.

Mix different types:
- "person": A fictional person who is deeply into this theme. Content starts
  with their name followed by a comma, e.g. "Ada, builds robots on weekends".
- "quote": A famous or funny quote about this theme.
- "fact": A surprising fact about this theme.
- "joke": A joke about this theme.

Assign the "theme" field as "{theme}".
Assign a "rarity" (common, rare, legendary) randomly.
Content should be engaging, short, and formatted for a mobile card.

Return only JSON: {{"cards": [{{"type": ..., "content": ..., "subContent": ...,
"theme": ..., "rarity": ...}}]}}"""


def build_profile_prompt(interests: str, edit_context: str | None = None) -> str:
    edit_line = f'Additional User Request/Edit: "{edit_context}"' if edit_context else ""
    return f"""User Context/Interests: "{interests}"
{edit_line}

Task:
1. Generate/Update a creative anonymous public handle (nickname).
2. Write/Update a fun profile summary (2-3 sentences).
3. Write a "Looking For" statement (e.g., "Looking for hiking buddies").
4. Write an "Offering" statement (e.g., "I can teach you Python").
5. Create 3 fictional user personas (connections) who match these interests.
6. Create 3 fictional community groups relevant to these interests.

Return only JSON:
{{"profile": {{"name": ..., "summary": ..., "aboutMe": ..., "lookingFor": ...,
"offering": ...}},
"connections": [{{"name": ..., "bio": ..., "sharedInterests": [...]}}],
"groups": [{{"name": ..., "description": ...,
"posts": [{{"author": ..., "content": ..., "timeAgo": ...}}]}}]}}"""


def build_live_match_prompt(theme: str, match_karma: int, user_karma: int) -> str:
    return f"""Generate a short introductory message from a fictional user who is
"Online" right now in a chat app.
Theme of the chat room: "{theme}".
The user's Karma level is {match_karma} (very close to the current user's
level of {user_karma}).

Task:
1. Create a username.
2. Write a 1-sentence opening message related to {theme}.

Return only JSON: {{"name": ..., "message": ...}}"""


# =============================================================================
# CLAUDE-BACKED SOURCE
# =============================================================================


class AnthropicContentSource:
    """
    Content Source backed by the Anthropic Messages API.

    Each call is a single JSON request/response; there is no streaming and
    no retry. Callers decide what to do with a failure.
    """

    def __init__(
        self,
        client: anthropic.AsyncAnthropic | None = None,
        model: str | None = None,
        max_tokens: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.client = client or anthropic.AsyncAnthropic(api_key=settings.anthropic_api_key)
        self.model = model or settings.content_model
        self.max_tokens = max_tokens or settings.content_max_tokens
        self._rng = rng or random.Random()

    async def _complete_json(self, prompt: str, operation: str) -> Any:
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            logger.warning("content_fetch_failed", extra={"operation": operation, "error": str(e)})
            raise FetchFailure(operation, str(e)) from e

        text = "".join(block.text for block in response.content if isinstance(block, TextBlock))
        return parse_json_content(text, operation)

    async def generate_deck(self, theme: str) -> list[Card]:
        data = await self._complete_json(build_deck_prompt(theme), "generate_deck")
        cards = parse_deck(data, theme)
        logger.info("deck_generated", extra={"theme": theme, "cards": len(cards)})
        return cards

    async def generate_profile(
        self, interests: str, edit_context: str | None = None
    ) -> ProfileBundle:
        prompt = build_profile_prompt(interests, edit_context)
        data = await self._complete_json(prompt, "generate_profile")
        return parse_profile_bundle(data, split_interests(interests))

    async def generate_live_match(self, theme: str, karma: int) -> LiveMatch:
        # Simulate an online user with a similar karma level
        variance = self._rng.randint(0, 4)
        match_karma = karma + variance if self._rng.random() > 0.5 else karma - variance
        prompt = build_live_match_prompt(theme, match_karma, karma)
        data = await self._complete_json(prompt, "generate_live_match")
        return parse_live_match(data)


# Default source instance
_source: ContentSource | None = None


def get_content_source() -> ContentSource:
    """
    Get the default Content Source instance.

    Returns:
        Singleton AnthropicContentSource instance
    """
    global _source
    if _source is None:
        _source = AnthropicContentSource()
    return _source


def set_content_source(source: ContentSource | None) -> None:
    """Replace the default Content Source (None restores lazy creation)."""
    global _source
    _source = source
