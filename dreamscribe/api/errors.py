"""
API Errors

Exceptions raised by the HTTP layer and by the narrative services.
"""

from typing import Optional

from ..models.ai_models import ErrorKind, USER_MESSAGES


class APIRequestError(Exception):
    """
    Raised by the HTTP layer when a request cannot produce usable data.

    Carries the failure category so callers can decide whether a retry
    makes sense.
    """

    def __init__(
        self,
        kind: ErrorKind,
        detail: str,
        status: Optional[int] = None,
        retry_after: Optional[float] = None,
        attempts: int = 1
    ):
        self.kind = kind
        self.detail = detail
        self.status = status
        self.retry_after = retry_after
        self.attempts = attempts
        super().__init__(f"{kind.value}: {detail}")


class GenerationError(Exception):
    """Raised by rewrite, analysis and assistant calls when generation fails."""

    def __init__(self, kind: ErrorKind, detail: str):
        self.kind = kind
        self.detail = detail
        self.user_message = USER_MESSAGES[kind]
        super().__init__(f"{kind.value}: {detail}")
