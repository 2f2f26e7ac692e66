from dataclasses import dataclass, field, replace

from interestmeet.models.card import Card


@dataclass(frozen=True)
class Profile:
    """
    The user's public profile.

    Attributes:
        name: Anonymous public handle
        summary: Short tagline
        looking_for: What the user is seeking
        offering: What the user brings to the table
        karma: Reputation score, never negative
        interests: Interests the profile was generated from
        badges: Quiz badges, each earned at most once
        contributions: User-authored cards, most recent first
        about_me: Optional longer description
    """

    name: str
    summary: str
    looking_for: str
    offering: str
    karma: int = 0
    interests: tuple[str, ...] = ()
    badges: tuple[str, ...] = ()
    contributions: tuple[Card, ...] = ()
    about_me: str | None = None

    def with_karma(self, points: int) -> "Profile":
        """Return a copy with `points` added to karma."""
        return replace(self, karma=self.karma + points)

    @property
    def match_level(self) -> int:
        """Level used when searching for live chat partners."""
        return self.karma // 10 + 1


@dataclass(frozen=True)
class Connection:
    """A fictional persona suggested alongside a generated profile."""

    name: str
    bio: str
    shared_interests: tuple[str, ...] = ()


@dataclass(frozen=True)
class Post:
    author: str
    content: str
    time_ago: str


@dataclass(frozen=True)
class Group:
    """A fictional community group relevant to the profile's interests."""

    name: str
    description: str
    posts: tuple[Post, ...] = ()


@dataclass(frozen=True)
class ProfileBundle:
    """Result of one profile generation call."""

    profile: Profile
    connections: list[Connection] = field(default_factory=list)
    groups: list[Group] = field(default_factory=list)
