"""
Models Module

Data models and configuration schemas for the Dreamscribe AI core.
"""

from .ai_models import (
    ErrorKind,
    GenerationConfig,
    GenerationResult,
    PromptRequest,
    USER_MESSAGES
)
from .config_models import (
    AIServiceConfig,
    DEFAULT_GEMINI_BASE_URL,
    DEFAULT_GEMINI_MODEL
)

__all__ = [
    # AI request/result models
    "ErrorKind",
    "GenerationConfig",
    "GenerationResult",
    "PromptRequest",
    "USER_MESSAGES",

    # Configuration
    "AIServiceConfig",
    "DEFAULT_GEMINI_BASE_URL",
    "DEFAULT_GEMINI_MODEL",
]
