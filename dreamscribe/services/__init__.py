"""
Services Module

AI-backed journal services: mood classification, narrative rewriting and
analysis, and the dream assistant.
"""

from .mood_classifier import (
    MoodLabel,
    MoodClassifier,
    MOOD_LEXICON,
    build_mood_prompt,
    normalize_mood
)
from .narrative_service import (
    NarrativeService,
    build_analysis_prompt,
    build_improve_prompt
)
from .assistant_service import (
    DreamAssistant,
    DreamEntry,
    mood_distribution,
    format_mood_distribution
)
from .dream_ai_service import DreamAIService, create_dream_ai_service

__all__ = [
    # Mood classification
    "MoodLabel",
    "MoodClassifier",
    "MOOD_LEXICON",
    "build_mood_prompt",
    "normalize_mood",

    # Narrative
    "NarrativeService",
    "build_analysis_prompt",
    "build_improve_prompt",

    # Assistant
    "DreamAssistant",
    "DreamEntry",
    "mood_distribution",
    "format_mood_distribution",

    # Facade
    "DreamAIService",
    "create_dream_ai_service",
]
