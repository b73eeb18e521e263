"""
API Module

Client layer for the generative text provider.
Provides consistent HTTP handling, pacing, retries and error handling.
"""

from .base_client import BaseAPIClient, HTTPResponse
from .rate_limiter import RequestPacer
from .retry import RetryPolicy, RETRYABLE_KINDS, classify_status, parse_retry_after
from .errors import APIRequestError, GenerationError
from .gemini_client import GeminiClient
from .client_factory import (
    APIClientFactory,
    get_client_factory,
    reset_client_factory,
    create_gemini_client
)

__all__ = [
    # Base infrastructure
    "BaseAPIClient",
    "HTTPResponse",
    "RequestPacer",
    "RetryPolicy",
    "RETRYABLE_KINDS",
    "classify_status",
    "parse_retry_after",

    # Errors
    "APIRequestError",
    "GenerationError",

    # Gemini client
    "GeminiClient",

    # Client factory
    "APIClientFactory",
    "get_client_factory",
    "reset_client_factory",
    "create_gemini_client",
]
