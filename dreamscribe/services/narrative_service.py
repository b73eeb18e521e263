"""
Narrative Service for Dreamscribe

Writing improvement and interpretive analysis of journal entries. Both reuse
the generative text client with their own prompt templates and return the
model's text as-is.

Failures raise GenerationError; the input text is never returned in place of
a failed rewrite.
"""

from typing import Sequence

import structlog

from ..api.errors import GenerationError
from ..models.ai_models import GenerationResult

logger = structlog.get_logger(__name__)

HISTORY_CONTEXT_LIMIT = 3

IMPROVE_PROMPT_TEMPLATE = """You are an editor helping someone polish their dream journal.

Rewrite the dream below to correct grammar, spelling and flow.
Preserve every detail, event, person, place and feeling exactly as described.
Do not add new content, interpretations or commentary.
Keep the first-person voice of the original.

Dream: "{entry_text}"

Respond with ONLY the improved dream text."""

ANALYSIS_PROMPT_TEMPLATE = """You are a dream analysis expert helping users understand their dreams.
{history_block}
Analyze this dream: "{entry_text}"

Provide insights on:
1. Possible meanings or interpretations
2. Recurring themes or patterns
3. Emotional significance
4. Any actionable insights for the dreamer

Keep your response helpful, supportive, and not too long (2-3 sentences)."""


def build_improve_prompt(entry_text: str) -> str:
    return IMPROVE_PROMPT_TEMPLATE.format(entry_text=entry_text)


def build_analysis_prompt(entry_text: str, history: Sequence[str] = ()) -> str:
    """
    Compose the analysis prompt.

    Args:
        entry_text: Dream being analyzed
        history: Titles of earlier entries, oldest first

    Returns:
        Prompt including at most the last three history titles
    """
    recent = [title for title in history if title][-HISTORY_CONTEXT_LIMIT:]
    history_block = ""
    if recent:
        history_block = f"\nPrevious dreams context: {', '.join(recent)}\n"
    return ANALYSIS_PROMPT_TEMPLATE.format(history_block=history_block, entry_text=entry_text)


def unwrap_result(result: GenerationResult) -> str:
    """Return the text of a successful result or raise GenerationError."""
    if not result.ok:
        raise GenerationError(result.error_kind, result.detail)
    return result.text


class NarrativeService:
    """Rewrites and interprets dream entries through the generative text client."""

    def __init__(self, llm_client):
        """
        Initialize narrative service.

        Args:
            llm_client: Client exposing ``async generate(prompt) -> GenerationResult``
        """
        self.llm_client = llm_client
        self.logger = logger.bind(service="NarrativeService")

    async def improve_writing(self, entry_text: str) -> str:
        """
        Correct grammar and flow while keeping all factual content.

        Args:
            entry_text: Original journal text

        Returns:
            Improved text, verbatim from the provider

        Raises:
            ValueError: If the entry is empty
            GenerationError: If the generation fails
        """
        if not entry_text or not entry_text.strip():
            raise ValueError("A journal entry is required to improve writing")

        self.logger.info("Improving writing", text_length=len(entry_text))

        result = await self.llm_client.generate(build_improve_prompt(entry_text))
        if not result.ok:
            self.logger.error(
                "Writing improvement failed",
                kind=result.error_kind.value,
                detail=result.detail
            )
        return unwrap_result(result)

    async def analyze(self, entry_text: str, history: Sequence[str] = ()) -> str:
        """
        Produce a short interpretive commentary for a dream.

        Args:
            entry_text: Dream to analyze
            history: Titles of earlier entries; the last three are used as context

        Returns:
            Commentary text, verbatim from the provider

        Raises:
            ValueError: If the entry is empty
            GenerationError: If the generation fails
        """
        if not entry_text or not entry_text.strip():
            raise ValueError("A journal entry is required for analysis")

        self.logger.info(
            "Analyzing dream",
            text_length=len(entry_text),
            history_count=len(history)
        )

        result = await self.llm_client.generate(build_analysis_prompt(entry_text, history))
        if not result.ok:
            self.logger.error(
                "Dream analysis failed",
                kind=result.error_kind.value,
                detail=result.detail
            )
        return unwrap_result(result)
