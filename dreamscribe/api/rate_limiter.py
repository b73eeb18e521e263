"""
Request Pacer

Enforces a minimum interval between outbound requests to the AI provider.
A single pacer instance is the shared rate-limit clock for every client it
is handed to.
"""

import asyncio
import time
from typing import Awaitable, Callable, Optional

import structlog

logger = structlog.get_logger(__name__)


class RequestPacer:
    """
    Minimum-interval rate limiter.

    The clock and sleep functions are injectable so tests can drive time
    without real delays.
    """

    def __init__(
        self,
        min_interval: float = 0.5,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        service_name: str = "api"
    ):
        """
        Initialize pacer with the given spacing.

        Args:
            min_interval: Minimum seconds between two dispatches
            clock: Monotonic time source
            sleep: Coroutine used to wait
            service_name: Service name for logging
        """
        if min_interval < 0:
            raise ValueError("min_interval must not be negative")

        self.min_interval = min_interval
        self.service_name = service_name
        self._clock = clock
        self._sleep = sleep
        self._last_dispatch: Optional[float] = None
        self._request_count = 0
        self.lock = asyncio.Lock()

        self.logger = logger.bind(service=f"RequestPacer-{service_name}")

        self.logger.debug("Request pacer initialized", min_interval=min_interval)

    @classmethod
    def for_gemini(cls, min_interval: float = 0.5, **kwargs) -> "RequestPacer":
        """
        Create pacer configured for the Gemini API.

        Args:
            min_interval: Minimum seconds between requests (default: 0.5)

        Returns:
            Configured pacer for Gemini
        """
        return cls(min_interval=min_interval, service_name="Gemini", **kwargs)

    @property
    def last_dispatch(self) -> Optional[float]:
        """Clock reading of the most recent dispatch, if any."""
        return self._last_dispatch

    async def wait_if_needed(self) -> float:
        """
        Wait if necessary, then record a dispatch.

        This method should be called before every request attempt.

        Returns:
            Clock reading recorded for this dispatch
        """
        async with self.lock:
            current_time = self._clock()

            if self._last_dispatch is not None:
                wait_time = self.min_interval - (current_time - self._last_dispatch)
                if wait_time > 0:
                    self.logger.debug(
                        "Pacing wait required",
                        wait_time=wait_time,
                        min_interval=self.min_interval
                    )
                    await self._sleep(wait_time)
                    current_time = max(self._clock(), self._last_dispatch + self.min_interval)

            self._last_dispatch = current_time
            self._request_count += 1
            return current_time

    def get_current_usage(self) -> dict:
        """
        Get current pacer statistics.

        Returns:
            Dictionary with usage information
        """
        return {
            "service": self.service_name,
            "min_interval": self.min_interval,
            "total_requests": self._request_count,
            "last_dispatch": self._last_dispatch,
        }

    def reset(self) -> None:
        """Reset pacer state (useful for testing)."""
        self._last_dispatch = None
        self._request_count = 0

        self.logger.info("Request pacer reset")
