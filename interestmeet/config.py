from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "InterestMeet"
    debug: bool = False

    anthropic_api_key: str = ""
    content_model: str = "claude-sonnet-4-20250514"
    content_max_tokens: int = 2048

    # Themes offered before the user adds their own
    default_themes: list[str] = [
        "Humor",
        "Tech",
        "Travel",
        "Deep Thoughts",
        "Startups",
        "Foodie",
        "Music",
        "Cinema",
        "Nature",
    ]


settings = Settings()


# =============================================================================
# SWIPE MECHANICS
# =============================================================================

# Displacement (px) a release must exceed to resolve a swipe
SWIPE_THRESHOLD = 100

# Exit animation period (ms) before the next card is shown
SETTLE_DELAY_MS = 300


# =============================================================================
# DECK SUPPLY
# =============================================================================

# Refill when fewer than this many unconsumed cards remain
REFILL_THRESHOLD = 3

# Consumed cards kept in memory before the head of the deck is pruned
MAX_CONSUMED_CARDS = 50


# =============================================================================
# KARMA
# =============================================================================

STARTING_KARMA = 30
KARMA_LEGENDARY_COLLECT = 10
KARMA_COLLECT = 2
KARMA_CONTRIBUTION = 50

# Collection bucket level step (cards per level)
CARDS_PER_LEVEL = 5
