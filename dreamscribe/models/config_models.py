"""
Configuration Models for the Dreamscribe AI Core

Pydantic models describing how the AI services reach their provider.
"""

from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_MODEL = "gemini-1.5-flash"


class AIServiceConfig(BaseModel):
    """Overall AI service configuration"""

    # Provider
    gemini_api_key: Optional[str] = Field(default=None, description="Gemini API key")
    gemini_base_url: Optional[str] = Field(default=None, description="Gemini API base URL")
    gemini_model: Optional[str] = Field(default=None, description="Gemini model identifier")

    # Request behaviour
    request_timeout_seconds: float = Field(default=30.0, gt=0, description="Per-attempt timeout")
    min_request_interval_seconds: float = Field(
        default=0.5, ge=0, description="Minimum spacing between outbound requests"
    )
    max_retries: int = Field(default=2, ge=0, description="Additional attempts after the first")
    retry_backoff_seconds: float = Field(default=1.0, ge=0, description="Fixed backoff between retries")
