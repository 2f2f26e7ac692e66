from dataclasses import dataclass, field

from interestmeet.config import CARDS_PER_LEVEL
from interestmeet.models.card import Card


def level_for(count: int) -> int:
    """Collection level for a bucket holding `count` cards."""
    return count // CARDS_PER_LEVEL + 1


@dataclass
class CollectionBucket:
    """
    All cards collected for one theme.

    INVARIANT: count == len(cards) and level == count // 5 + 1.
    Both are recomputed on every append.
    """

    theme: str
    cards: list[Card] = field(default_factory=list)
    count: int = 0
    level: int = 1

    def add_card(self, card: Card) -> "CollectionBucket":
        """Return a new bucket with `card` appended."""
        cards = [*self.cards, card]
        return CollectionBucket(
            theme=self.theme,
            cards=cards,
            count=len(cards),
            level=level_for(len(cards)),
        )


def add_to_collections(collections: list[CollectionBucket], card: Card) -> list[CollectionBucket]:
    """
    Append `card` to the bucket for its theme, creating it if absent.

    Returns a new list; the input list and its buckets are left untouched.
    """
    updated: list[CollectionBucket] = []
    placed = False
    for bucket in collections:
        if bucket.theme == card.theme:
            updated.append(bucket.add_card(card))
            placed = True
        else:
            updated.append(bucket)

    if not placed:
        updated.append(CollectionBucket(theme=card.theme).add_card(card))

    return updated


def total_collected(collections: list[CollectionBucket]) -> int:
    """Total cards across all buckets."""
    return sum(bucket.count for bucket in collections)
