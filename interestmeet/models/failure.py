"""
Failure classification for the InterestMeet service.

Every error the service raises on purpose is a KnownError subclass carrying
a FailureKind, a user-facing message, and an HTTP status. The API layer
converts them into the ApiResponse failure envelope.

Content Source failures (FetchFailure, ParseFailure) are also KnownErrors,
but the Deck Manager swallows them: a failed deck fetch is only ever
observable as an empty deck.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    MISSING_REQUIRED = "missing_required"

    # Resource failures
    EMPTY_RESULT = "empty_result"

    # Content Source failures
    FETCH_FAILED = "fetch_failed"
    PARSE_FAILED = "parse_failed"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class ApiResponse(BaseModel):
    """Response envelope used for every failure the API reports."""

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details",
    )

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse":
        """Create a known failure response."""
        return cls(
            outcome=OutcomeType.KNOWN_FAILURE,
            failure=FailureDetail(
                kind=kind,
                message=message,
                detail=detail,
                suggestion=suggestion,
            ),
        )

    @classmethod
    def unknown_failure(cls, detail: str | None = None) -> "ApiResponse":
        """Create an unknown failure response for unexpected exceptions."""
        return cls(
            outcome=OutcomeType.UNKNOWN_FAILURE,
            failure=FailureDetail(
                kind=FailureKind.UNKNOWN,
                message="Something went wrong and I don't know why. Try again.",
                detail=detail,
                suggestion="If this persists, please report the issue.",
            ),
        )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_response(self) -> ApiResponse:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class FetchFailure(KnownError):
    """Content Source was unreachable or answered with a non-OK status."""

    def __init__(self, operation: str, detail: str | None = None):
        self.operation = operation
        super().__init__(
            kind=FailureKind.FETCH_FAILED,
            message=f"Could not reach the content generator ({operation}).",
            detail=detail,
            suggestion="Try again in a moment.",
            status_code=502,
        )


class ParseFailure(KnownError):
    """Content Source answered, but the payload did not match the expected shape."""

    def __init__(self, operation: str, detail: str | None = None):
        self.operation = operation
        super().__init__(
            kind=FailureKind.PARSE_FAILED,
            message=f"The content generator returned something unusable ({operation}).",
            detail=detail,
            suggestion="Try again; generated content varies between attempts.",
            status_code=502,
        )


class ProfileRequiredError(KnownError):
    """Raised when an operation needs a profile and onboarding has not happened."""

    def __init__(self, operation: str):
        super().__init__(
            kind=FailureKind.MISSING_REQUIRED,
            message="Create your profile first.",
            detail=f"{operation} requires a profile",
            suggestion="Pick at least one interest to generate a profile.",
            status_code=409,
        )


class NoCardError(KnownError):
    """Raised when a swipe is attempted while the deck has no current card."""

    def __init__(self, theme: str | None):
        super().__init__(
            kind=FailureKind.EMPTY_RESULT,
            message="Out of cards. Fetching more...",
            detail=f"No current card for theme {theme!r}",
            suggestion="Wait for the deck to refill.",
            status_code=409,
        )


class InvalidInputError(KnownError):
    """Raised for request values that can never succeed."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=message,
            detail=detail,
            status_code=400,
        )
