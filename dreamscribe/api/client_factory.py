"""
API Client Factory

Provides standardized creation and configuration of the AI provider clients.
Clients created by one factory share a single pacer, so every caller is
spaced against the same rate-limit clock.
"""

import os
from typing import Dict, Optional, Any

import structlog

from ..models.config_models import (
    AIServiceConfig,
    DEFAULT_GEMINI_BASE_URL,
    DEFAULT_GEMINI_MODEL
)
from .gemini_client import GeminiClient
from .rate_limiter import RequestPacer
from .retry import RetryPolicy

logger = structlog.get_logger(__name__)


class APIClientFactory:
    """
    Factory for creating configured API clients.

    Resolves settings from an AIServiceConfig when given one, otherwise from
    the environment.
    """

    def __init__(self, config: Optional[AIServiceConfig] = None):
        """
        Initialize client factory.

        Args:
            config: AI service configuration (optional)
        """
        self.config = config or AIServiceConfig()
        self.logger = logger.bind(service="APIClientFactory")

        # Pacers are shared across clients with the same spacing
        self._rate_limiters: Dict[str, RequestPacer] = {}

        self.logger.info("API Client Factory initialized")

    def create_gemini_client(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None
    ) -> GeminiClient:
        """
        Create configured Gemini client.

        Args:
            api_key: Gemini API key (defaults to config or GEMINI_API_KEY)
            model: Model identifier (defaults to config or GEMINI_MODEL)

        Returns:
            Configured GeminiClient instance

        Raises:
            ValueError: If no API key can be resolved
        """
        api_key = api_key or self._get_gemini_api_key()
        if not api_key:
            raise ValueError("Gemini API key is required (set GEMINI_API_KEY)")

        client = GeminiClient(
            api_key=api_key,
            model=model or self._get_gemini_model(),
            base_url=self._get_gemini_base_url(),
            rate_limiter=self.create_gemini_rate_limiter(),
            timeout=self.config.request_timeout_seconds,
            retry_policy=RetryPolicy(backoff_seconds=self.config.retry_backoff_seconds),
            max_retries=self.config.max_retries
        )

        self.logger.info("Gemini client created", model=client.model)

        return client

    def create_gemini_rate_limiter(
        self,
        min_interval: Optional[float] = None
    ) -> RequestPacer:
        """
        Get or create the shared pacer for Gemini.

        Args:
            min_interval: Minimum spacing in seconds (defaults to config)

        Returns:
            Shared pacer instance
        """
        if min_interval is None:
            min_interval = self.config.min_request_interval_seconds

        rate_limiter_key = f"gemini_{min_interval}"
        if rate_limiter_key not in self._rate_limiters:
            self._rate_limiters[rate_limiter_key] = RequestPacer.for_gemini(min_interval)

        return self._rate_limiters[rate_limiter_key]

    def get_rate_limiter_stats(self) -> Dict[str, Dict[str, Any]]:
        """
        Get statistics for all active pacers.

        Returns:
            Dictionary of pacer statistics
        """
        return {key: limiter.get_current_usage() for key, limiter in self._rate_limiters.items()}

    def reset_rate_limiters(self) -> None:
        """Reset all pacers (useful for testing)."""
        for limiter in self._rate_limiters.values():
            limiter.reset()

        self.logger.info("All rate limiters reset")

    # Configuration resolution methods
    def _get_gemini_api_key(self) -> Optional[str]:
        """Get Gemini API key from configuration or environment."""
        return self.config.gemini_api_key or os.getenv('GEMINI_API_KEY')

    def _get_gemini_model(self) -> str:
        """Get Gemini model from configuration, environment or the default."""
        return self.config.gemini_model or os.getenv('GEMINI_MODEL') or DEFAULT_GEMINI_MODEL

    def _get_gemini_base_url(self) -> str:
        """Get Gemini base URL from configuration, environment or the default."""
        return self.config.gemini_base_url or os.getenv('GEMINI_BASE_URL') or DEFAULT_GEMINI_BASE_URL


# Global factory instance for convenience
_global_factory: Optional[APIClientFactory] = None


def get_client_factory(config: Optional[AIServiceConfig] = None) -> APIClientFactory:
    """
    Get global client factory instance.

    Args:
        config: AI service configuration (optional, used for initialization)

    Returns:
        Global APIClientFactory instance
    """
    global _global_factory

    if _global_factory is None:
        _global_factory = APIClientFactory(config)

    return _global_factory


def reset_client_factory():
    """Reset global client factory (useful for testing)."""
    global _global_factory
    _global_factory = None


def create_gemini_client(
    api_key: Optional[str] = None,
    model: Optional[str] = None
) -> GeminiClient:
    """Create Gemini client using global factory."""
    return get_client_factory().create_gemini_client(api_key, model)
