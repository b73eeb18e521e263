"""
Gemini API Client

Generative text client for Google's Gemini ``generateContent`` endpoint,
built on the shared pacing, timeout and retry handling of BaseAPIClient.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional

import structlog

from ..models.ai_models import ErrorKind, GenerationConfig, GenerationResult, PromptRequest
from ..models.config_models import DEFAULT_GEMINI_BASE_URL, DEFAULT_GEMINI_MODEL
from .base_client import BaseAPIClient
from .errors import APIRequestError
from .rate_limiter import RequestPacer
from .retry import RetryPolicy

logger = structlog.get_logger(__name__)


class GeminiClient(BaseAPIClient):
    """
    Gemini text generation client.

    Every call to ``generate`` yields exactly one GenerationResult; transport
    failures never escape as exceptions. Identical prompts are always sent
    again, nothing is cached.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_GEMINI_MODEL,
        base_url: str = DEFAULT_GEMINI_BASE_URL,
        rate_limiter: Optional[RequestPacer] = None,
        timeout: float = 30.0,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        max_retries: int = 2
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Gemini API key (required)
            model: Model identifier
            base_url: API base URL
            rate_limiter: Pacer instance (optional, a private one is created if not provided)
            timeout: Per-attempt timeout in seconds
            retry_policy: Retry rules
            sleep: Coroutine used for backoff waits
            max_retries: Default number of additional attempts per call
        """
        if not api_key:
            raise ValueError("Gemini API key is required")

        if rate_limiter is None:
            rate_limiter = RequestPacer.for_gemini()

        super().__init__(
            base_url=base_url,
            rate_limiter=rate_limiter,
            timeout=timeout,
            retry_policy=retry_policy,
            sleep=sleep,
            service_name="Gemini"
        )

        self.api_key = api_key
        self.model = model
        self.max_retries = max_retries

        self.logger.info("Gemini client initialized", model=model)

    def _extract_api_error(self, data: Any) -> Optional[str]:
        """
        Extract Gemini error information from response data.

        Args:
            data: Parsed response data

        Returns:
            Error message if found, None otherwise
        """
        if isinstance(data, dict) and "error" in data:
            error = data["error"]
            if isinstance(error, dict):
                return error.get("message", f"Error {error.get('code', 'unknown')}")
            return str(error)
        return None

    async def generate(
        self,
        prompt: str,
        retries: Optional[int] = None,
        config: Optional[GenerationConfig] = None
    ) -> GenerationResult:
        """
        Obtain a text completion for a prompt.

        Args:
            prompt: Prompt text (must not be empty)
            retries: Additional attempts after the first (defaults to max_retries)
            config: Sampling settings (provider defaults if omitted)

        Returns:
            Success with the verbatim completion, or a failure describing
            the last error once attempts are exhausted

        Raises:
            ValueError: If the prompt is empty
        """
        request = PromptRequest(text=prompt, config=config or GenerationConfig())

        try:
            data, attempts = await self._make_request(
                endpoint=f"models/{self.model}:generateContent",
                params={"key": self.api_key},
                payload=request.to_payload(),
                method="POST",
                headers={"Content-Type": "application/json"},
                retries=self.max_retries if retries is None else retries
            )
        except APIRequestError as e:
            return GenerationResult.failure(e.kind, e.detail, attempts=e.attempts)

        text = self._extract_text(data)
        if text is None:
            self.logger.warning(
                "Invalid response format from Gemini API",
                response_keys=list(data.keys()) if isinstance(data, dict) else None,
                attempts=attempts
            )
            return GenerationResult.failure(
                ErrorKind.INVALID_RESPONSE_SHAPE,
                "Invalid response format from Gemini API",
                attempts=attempts
            )

        self.logger.debug(
            "Gemini completion received",
            response_length=len(text),
            attempts=attempts
        )
        return GenerationResult.success(text, attempts=attempts)

    @staticmethod
    def _extract_text(data: Any) -> Optional[str]:
        """Return the first text part of any candidate, or None if there is none."""
        if not isinstance(data, dict):
            return None

        candidates = data.get("candidates")
        if not isinstance(candidates, list):
            return None

        for candidate in candidates:
            content = candidate.get("content") if isinstance(candidate, dict) else None
            parts = content.get("parts") if isinstance(content, dict) else None
            if not isinstance(parts, list):
                continue

            # Non-text parts (inlineData, functionCall) may precede the text
            for part in parts:
                if isinstance(part, dict) and isinstance(part.get("text"), str):
                    return part["text"]

        return None

    def get_service_info(self) -> Dict[str, Any]:
        info = super().get_service_info()
        info["model"] = self.model
        return info
