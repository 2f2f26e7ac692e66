from dataclasses import dataclass, replace
from enum import Enum


class Rarity(str, Enum):
    """Three-tier quality tag driving karma reward and visual treatment."""

    COMMON = "common"
    RARE = "rare"
    LEGENDARY = "legendary"


class CardType(str, Enum):
    """Built-in card types. Cards may also carry any user-defined label."""

    PERSON = "person"
    QUOTE = "quote"
    FACT = "fact"
    JOKE = "joke"


@dataclass(frozen=True, slots=True)
class Card:
    """
    A collectible swipe card.

    Attributes:
        id: Unique card identifier
        type: One of the CardType values or a custom label (e.g., "riddle")
        content: Main text; for person cards "Name, description"
        theme: Theme the card belongs to (e.g., "Tech")
        rarity: Quality tier
        sub_content: Optional tagline or extra info
    """

    id: str
    type: str
    content: str
    theme: str
    rarity: Rarity = Rarity.COMMON
    sub_content: str | None = None

    @property
    def is_person(self) -> bool:
        """True for person cards, the only type that can produce a match."""
        return self.type == CardType.PERSON.value


def with_rarity(card: Card, rarity: Rarity) -> Card:
    """Return a copy of `card` with its rarity overridden."""
    return replace(card, rarity=rarity)
