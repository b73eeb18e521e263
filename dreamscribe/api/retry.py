"""
Retry Policy

Decides which request failures are worth another attempt and how long to
back off before it. Kept apart from the HTTP loop so the contract can be
exercised on its own.
"""

from dataclasses import dataclass
from typing import Optional

from ..models.ai_models import ErrorKind
from .errors import APIRequestError

RETRYABLE_KINDS = frozenset({
    ErrorKind.TIMEOUT,
    ErrorKind.RATE_LIMITED,
    ErrorKind.SERVICE_UNAVAILABLE,
    ErrorKind.NETWORK_ERROR,
})


def classify_status(status: int) -> ErrorKind:
    """
    Map a non-2xx HTTP status onto an error kind.

    Args:
        status: HTTP status code

    Returns:
        Matching error kind
    """
    if status in (401, 403):
        return ErrorKind.AUTH_ERROR
    if status == 429:
        return ErrorKind.RATE_LIMITED
    if status >= 500:
        return ErrorKind.SERVICE_UNAVAILABLE
    return ErrorKind.BAD_REQUEST


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    """Parse a Retry-After header given in seconds."""
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


@dataclass(frozen=True)
class RetryPolicy:
    """
    Retry and backoff rules for outbound requests.

    Attributes:
        backoff_seconds: Fixed delay between attempts
        max_backoff_seconds: Upper bound for any single delay
    """
    backoff_seconds: float = 1.0
    max_backoff_seconds: float = 60.0

    def is_retryable(self, error: APIRequestError) -> bool:
        return error.kind in RETRYABLE_KINDS

    def should_retry(self, error: APIRequestError, attempt: int, retries: int) -> bool:
        """
        Check whether another attempt should follow.

        Args:
            error: Failure of the current attempt
            attempt: Current attempt number (0-based)
            retries: Additional attempts allowed after the first

        Returns:
            True if the caller should back off and try again
        """
        return attempt < retries and self.is_retryable(error)

    def backoff_for(self, error: APIRequestError, attempt: int) -> float:
        """
        Calculate the delay before the next attempt.

        Rate-limited responses honour Retry-After, falling back to
        exponential backoff; everything else waits the fixed delay.
        """
        if error.kind is ErrorKind.RATE_LIMITED:
            if error.retry_after is not None:
                return min(error.retry_after, self.max_backoff_seconds)
            return min(self.backoff_seconds * (2 ** attempt), self.max_backoff_seconds)

        return min(self.backoff_seconds, self.max_backoff_seconds)
