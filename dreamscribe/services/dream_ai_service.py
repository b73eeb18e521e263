"""
Dream AI Service

Single entry point the journal UI consumes: mood classification, writing
improvement, dream analysis and the assistant, all sharing one Gemini client
and therefore one pacer.
"""

import os
from typing import Optional, Sequence

import structlog
from dotenv import load_dotenv

from ..api.client_factory import APIClientFactory
from ..models.config_models import AIServiceConfig
from ..utils.logging_config import setup_logging
from .assistant_service import DreamAssistant, DreamEntry
from .mood_classifier import MoodClassifier, MoodLabel
from .narrative_service import NarrativeService

logger = structlog.get_logger(__name__)


class DreamAIService:
    """
    Facade over the AI components.

    Use as an async context manager so the underlying HTTP session is opened
    and closed with it.
    """

    def __init__(self, llm_client):
        """
        Initialize the service around a generative text client.

        Args:
            llm_client: Client exposing ``async generate(prompt) -> GenerationResult``
        """
        self.llm_client = llm_client
        self.mood_classifier = MoodClassifier(llm_client)
        self.narrative_service = NarrativeService(llm_client)
        self.assistant = DreamAssistant(llm_client)
        self.logger = logger.bind(service="DreamAIService")

        self.logger.info("Dream AI service initialized")

    async def __aenter__(self):
        if hasattr(self.llm_client, "__aenter__"):
            await self.llm_client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if hasattr(self.llm_client, "__aexit__"):
            await self.llm_client.__aexit__(exc_type, exc_val, exc_tb)

    async def classify_mood(self, entry_text: str) -> MoodLabel:
        return await self.mood_classifier.classify_mood(entry_text)

    async def improve_writing(self, entry_text: str) -> str:
        return await self.narrative_service.improve_writing(entry_text)

    async def analyze(self, entry_text: str, history: Sequence[str] = ()) -> str:
        return await self.narrative_service.analyze(entry_text, history)

    async def ask_assistant(self, question: str, entries: Sequence[DreamEntry] = ()) -> str:
        return await self.assistant.ask(question, entries)


def create_dream_ai_service(
    config: Optional[AIServiceConfig] = None,
    configure_logging: bool = False
) -> DreamAIService:
    """
    Build a DreamAIService from configuration and the environment.

    Loads a ``.env`` file if present, so GEMINI_API_KEY and friends can live
    outside the code.

    Args:
        config: AI service configuration (optional)
        configure_logging: Set up file and console logging from LOG_DIR and
            LOG_LEVEL; leave False when the host app configures logging

    Raises:
        ValueError: If no Gemini API key is configured
    """
    load_dotenv()

    if configure_logging:
        setup_logging(
            log_dir=os.getenv("LOG_DIR", "logs"),
            log_level=os.getenv("LOG_LEVEL", "INFO")
        )

    factory = APIClientFactory(config)
    return DreamAIService(factory.create_gemini_client())
