"""
Base API Client

Provides unified HTTP request handling, pacing, timeouts and retries for the
external AI provider clients in Dreamscribe.
"""

import asyncio
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

import aiohttp
import structlog

from ..models.ai_models import ErrorKind
from .errors import APIRequestError
from .rate_limiter import RequestPacer
from .retry import RetryPolicy, classify_status, parse_retry_after

logger = structlog.get_logger(__name__)


@dataclass
class HTTPResponse:
    """Transport-neutral view of one HTTP response."""
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    data: Any = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


class BaseAPIClient(ABC):
    """
    Base HTTP client with unified request handling, pacing and error handling.

    Each attempt waits on the pacer, runs under its own timeout and is mapped
    onto an ``ErrorKind``. The retry policy decides what happens next.
    """

    def __init__(
        self,
        base_url: str,
        rate_limiter: RequestPacer,
        timeout: float = 30.0,
        retry_policy: Optional[RetryPolicy] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        service_name: str = "api"
    ):
        """
        Initialize base API client.

        Args:
            base_url: Base URL for the API
            rate_limiter: Pacer shared by every request this client makes
            timeout: Per-attempt timeout in seconds
            retry_policy: Retry rules (defaults to a 1 second fixed backoff)
            sleep: Coroutine used for backoff waits
            service_name: Service name for logging and identification
        """
        self.base_url = base_url.rstrip('/')
        self.rate_limiter = rate_limiter
        self.timeout = timeout
        self.retry_policy = retry_policy or RetryPolicy()
        self.service_name = service_name
        self.session: Optional[aiohttp.ClientSession] = None
        self._sleep = sleep

        self.logger = logger.bind(
            service=service_name,
            component="BaseAPIClient",
            base_url=self.base_url
        )

        self.logger.debug("Base API client initialized", timeout=timeout)

    async def __aenter__(self):
        """Async context manager entry."""
        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )
        self.logger.debug("API client session started")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.session:
            await self.session.close()
            self.session = None
            self.logger.debug("API client session closed")

    async def _make_request(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        retries: int = 2
    ) -> Tuple[Any, int]:
        """
        Make a paced HTTP request with timeout handling and retries.

        Args:
            endpoint: API endpoint (relative to base_url)
            params: Query parameters
            payload: JSON body
            method: HTTP method
            headers: Additional headers
            retries: Additional attempts after the first

        Returns:
            Parsed JSON response data and the number of attempts used

        Raises:
            APIRequestError: Once the failure is not retryable or attempts run out
        """
        if retries < 0:
            raise ValueError("retries must not be negative")

        url = f"{self.base_url}/{endpoint.lstrip('/')}" if endpoint else self.base_url
        request_headers = dict(headers or {})
        request_headers.setdefault('User-Agent', f'Dreamscribe-{self.service_name}/1.0')

        total_attempts = retries + 1

        for attempt in range(total_attempts):
            await self.rate_limiter.wait_if_needed()

            self.logger.debug(
                "Making API request",
                method=method,
                endpoint=endpoint,
                attempt=attempt + 1,
                max_attempts=total_attempts
            )

            try:
                response = await asyncio.wait_for(
                    self._send_request(method, url, params, payload, request_headers),
                    timeout=self.timeout
                )
                data = self._handle_response(response, endpoint)
                self.logger.debug(
                    "API request successful",
                    endpoint=endpoint,
                    status=response.status,
                    attempt=attempt + 1
                )
                return data, attempt + 1

            except APIRequestError as e:
                error = e

            except asyncio.TimeoutError:
                error = APIRequestError(
                    ErrorKind.TIMEOUT,
                    f"{self.service_name} request timed out after {self.timeout}s"
                )
                self.logger.warning(
                    "Request timeout",
                    attempt=attempt + 1,
                    endpoint=endpoint,
                    timeout=self.timeout
                )

            except aiohttp.ClientError as e:
                error = APIRequestError(
                    ErrorKind.NETWORK_ERROR,
                    f"{self.service_name} connection error: {e}"
                )
                self.logger.warning(
                    "HTTP client error",
                    error=str(e),
                    error_type=type(e).__name__,
                    attempt=attempt + 1,
                    endpoint=endpoint
                )

            error.attempts = attempt + 1

            if not self.retry_policy.should_retry(error, attempt, retries):
                self.logger.error(
                    "Request failed",
                    endpoint=endpoint,
                    kind=error.kind.value,
                    status=error.status,
                    total_attempts=attempt + 1
                )
                raise error

            delay = self.retry_policy.backoff_for(error, attempt)
            self.logger.debug(
                "Backing off before retry",
                kind=error.kind.value,
                attempt=attempt + 1,
                delay=delay
            )
            await self._sleep(delay)

        # Unreachable: the final attempt either returns or raises
        raise RuntimeError(f"{self.service_name} request loop exited unexpectedly")

    def _handle_response(self, response: HTTPResponse, endpoint: str) -> Any:
        """
        Validate a response and return its data.

        Raises:
            APIRequestError: For non-2xx statuses and API errors in the body
        """
        if not response.is_success:
            kind = classify_status(response.status)
            retry_after = parse_retry_after(response.header('Retry-After'))
            self.logger.warning(
                f"{self.service_name} HTTP error",
                status=response.status,
                endpoint=endpoint,
                retry_after=retry_after
            )
            raise APIRequestError(
                kind,
                f"{self.service_name} API error: {response.status}",
                status=response.status,
                retry_after=retry_after
            )

        if response.data is None:
            raise APIRequestError(
                ErrorKind.INVALID_RESPONSE_SHAPE,
                f"{self.service_name} returned invalid JSON",
                status=response.status
            )

        error_info = self._extract_api_error(response.data)
        if error_info:
            self.logger.error(
                "API error in response body",
                error=error_info,
                endpoint=endpoint,
                status=response.status
            )
            raise APIRequestError(
                ErrorKind.INVALID_RESPONSE_SHAPE,
                f"{self.service_name} API error: {error_info}",
                status=response.status
            )

        return response.data

    async def _send_request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]],
        payload: Optional[Dict[str, Any]],
        headers: Dict[str, str]
    ) -> HTTPResponse:
        """
        Send one HTTP request over the aiohttp session.

        Returns:
            Status, headers and decoded JSON body (``None`` if undecodable)
        """
        if not self.session:
            self.logger.error("Client not initialized")
            raise RuntimeError(
                f"{self.service_name} client not initialized. Use async context manager."
            )

        async with self.session.request(
            method=method,
            url=url,
            params=params,
            json=payload,
            headers=headers
        ) as response:
            try:
                data = await response.json(content_type=None)
            except (json.JSONDecodeError, UnicodeDecodeError, aiohttp.ContentTypeError) as e:
                self.logger.warning(f"{self.service_name} invalid JSON response", error=str(e))
                data = None

            return HTTPResponse(
                status=response.status,
                headers=dict(response.headers),
                data=data
            )

    @abstractmethod
    def _extract_api_error(self, data: Any) -> Optional[str]:
        """
        Extract API-specific error information from response data.
        Must be implemented by subclasses.

        Args:
            data: Parsed response data

        Returns:
            Error message if found, None otherwise
        """
        pass

    def get_service_info(self) -> Dict[str, Any]:
        """
        Get service information for monitoring.

        Returns:
            Service configuration and status information
        """
        return {
            "service_name": self.service_name,
            "base_url": self.base_url,
            "timeout": self.timeout,
            "session_active": self.session is not None,
            "rate_limiter_type": type(self.rate_limiter).__name__,
            "component_type": "BaseAPIClient"
        }
