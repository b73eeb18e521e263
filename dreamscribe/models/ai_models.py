"""
AI Models for the Dreamscribe AI Core

Transient request and result structures exchanged with the generative text
provider. Nothing here is persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional


class ErrorKind(Enum):
    """Failure categories for a generation call."""
    TIMEOUT = "timeout"
    RATE_LIMITED = "rate_limited"
    SERVICE_UNAVAILABLE = "service_unavailable"  # 5xx
    AUTH_ERROR = "auth_error"                    # 401 / 403
    INVALID_RESPONSE_SHAPE = "invalid_response_shape"
    NETWORK_ERROR = "network_error"              # DNS / connection failures
    BAD_REQUEST = "bad_request"                  # other 4xx


USER_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.TIMEOUT: "Request timed out. Please try again.",
    ErrorKind.RATE_LIMITED: "Too many requests right now. Try again shortly.",
    ErrorKind.SERVICE_UNAVAILABLE: "The AI service is unavailable. Try again shortly.",
    ErrorKind.AUTH_ERROR: "The AI service rejected our credentials.",
    ErrorKind.INVALID_RESPONSE_SHAPE: "The AI service returned an unexpected response.",
    ErrorKind.NETWORK_ERROR: "Error connecting to AI service. Please check your internet connection.",
    ErrorKind.BAD_REQUEST: "The AI service could not process this request.",
}


@dataclass
class GenerationConfig:
    """Sampling knobs sent with every prompt."""
    max_output_tokens: int = 500
    temperature: float = 0.7
    top_p: float = 0.8
    top_k: int = 40

    def to_payload(self) -> Dict[str, Any]:
        return {
            "maxOutputTokens": self.max_output_tokens,
            "temperature": self.temperature,
            "topP": self.top_p,
            "topK": self.top_k,
        }


@dataclass
class PromptRequest:
    """A single prompt plus its generation settings."""
    text: str
    config: GenerationConfig = field(default_factory=GenerationConfig)

    def __post_init__(self):
        if not self.text or not self.text.strip():
            raise ValueError("Prompt text must not be empty")

    def to_payload(self) -> Dict[str, Any]:
        """Render the provider request body."""
        return {
            "contents": [{"parts": [{"text": self.text}]}],
            "generationConfig": self.config.to_payload(),
        }


@dataclass
class GenerationResult:
    """
    Outcome of one logical generation call, after any internal retries.

    Exactly one of ``text`` or ``error_kind`` is set.
    """
    text: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    detail: str = ""
    attempts: int = 1

    @classmethod
    def success(cls, text: str, attempts: int = 1) -> "GenerationResult":
        return cls(text=text, attempts=attempts)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        detail: str,
        attempts: int = 1
    ) -> "GenerationResult":
        return cls(error_kind=kind, detail=detail, attempts=attempts)

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @property
    def user_message(self) -> Optional[str]:
        """User-facing wording for a failure, ``None`` on success."""
        if self.error_kind is None:
            return None
        return USER_MESSAGES[self.error_kind]
