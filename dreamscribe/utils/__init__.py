"""
Utilities Module

Shared helpers for the Dreamscribe AI core.
"""

from .logging_config import DreamscribeLogger, setup_logging, get_logger

__all__ = [
    "DreamscribeLogger",
    "setup_logging",
    "get_logger",
]
