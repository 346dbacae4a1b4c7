"""
Failure classification and response envelope.

Every user-visible failure is classified and explained. Three failure
families exist:

- TransportFailure: a single call to the game API failed. Recovered locally
  wherever a fallback exists; never surfaced individually during analysis.
- SyncFailure: no leaderboard data could be obtained from any endpoint.
  Fatal to the current analysis run only.
- ValidationFailure: player tag rejected before any network call is made.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    INVALID_INPUT = "invalid_input"
    MISSING_REQUIRED = "missing_required"
    NOT_FOUND = "not_found"
    EXTERNAL_API_ERROR = "external_api_error"
    SYNC_FAILED = "sync_failed"
    SUPERSEDED = "superseded"
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")


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


class ApiResponse(BaseModel, Generic[T]):
    """Response envelope for API endpoints."""

    outcome: OutcomeType
    data: T | None = None
    failure: FailureDetail | None = None

    @classmethod
    def success(cls, data: T) -> "ApiResponse[T]":
        """Create a success response."""
        return cls(outcome=OutcomeType.SUCCESS, data=data)

    @classmethod
    def known_failure(
        cls,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ) -> "ApiResponse[Any]":
        """Create a response for a failure the system can explain."""
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
    def unknown_failure(cls, detail: str | None = None) -> "ApiResponse[Any]":
        """Create the catch-all response for unexpected exceptions."""
        return cls(
            outcome=OutcomeType.UNKNOWN_FAILURE,
            failure=FailureDetail(
                kind=FailureKind.UNKNOWN,
                message="Something went wrong. Please retry.",
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

    def to_response(self) -> ApiResponse[Any]:
        """Convert to an ApiResponse."""
        return ApiResponse.known_failure(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class TransportFailure(KnownError):
    """
    A single call to the game API failed.

    Covers non-success HTTP status, network errors and undecodable bodies.
    """

    def __init__(self, path: str, detail: str, status: int | None = None):
        self.path = path
        self.status = status
        super().__init__(
            kind=FailureKind.EXTERNAL_API_ERROR,
            message=f"Request to {path} failed.",
            detail=detail,
            suggestion="Check the player tag and API key, then retry.",
            status_code=404 if status == 404 else 502,
        )


class SyncFailure(KnownError):
    """No leaderboard endpoint produced usable ranking data."""

    def __init__(self, attempted: list[str] | None = None):
        self.attempted = attempted or []
        super().__init__(
            kind=FailureKind.SYNC_FAILED,
            message="Meta analysis sync failed.",
            detail=f"No ranking data from {len(self.attempted)} endpoint(s)",
            suggestion="Previous results are kept. Retry in a moment.",
            status_code=502,
        )


class ValidationFailure(KnownError):
    """Player tag input rejected before any network call."""

    def __init__(self, message: str = "Please provide a player tag.", detail: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=message,
            detail=detail,
            suggestion="Player tags use digits and letters, e.g. #P802VR.",
            status_code=400,
        )


class NoProfileLoadedError(KnownError):
    """Meta analysis requested before any player profile was loaded."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.MISSING_REQUIRED,
            message="Load a player profile before running meta analysis.",
            status_code=409,
        )


class AnalysisSupersededError(KnownError):
    """A newer analysis or profile load replaced this run before it finished."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.SUPERSEDED,
            message="Meta analysis was superseded by a newer request.",
            suggestion="Use the results of the latest analysis.",
            status_code=409,
        )
