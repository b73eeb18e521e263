"""
Dream Assistant Service

Answers questions about the journal and about using the app, grounded in
lightweight statistics over the user's recorded dreams.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Sequence

import structlog

from .mood_classifier import MoodLabel
from .narrative_service import HISTORY_CONTEXT_LIMIT, unwrap_result

logger = structlog.get_logger(__name__)

HELP_PROMPT_TEMPLATE = """You are a helpful assistant for a dream journaling app.

Current dream statistics:
- Total dreams: {total}
- Mood distribution: {distribution}
- Recent dreams: {recent}

User question: "{question}"

Provide helpful, specific advice about:
- How to use the app features
- Dream journaling tips
- Understanding dream patterns
- App navigation and functionality

Keep responses friendly and concise."""


@dataclass
class DreamEntry:
    """A recorded dream as seen by the assistant."""
    title: str
    text: str = ""
    mood: Optional[str] = None


def mood_distribution(entries: Iterable[DreamEntry]) -> Dict[str, int]:
    """
    Count moods across entries.

    A combined mood such as ``"Joyful, Strange"`` counts toward each part;
    entries without a mood count as Neutral.
    """
    counts: Counter = Counter()
    for entry in entries:
        moods = [part.strip() for part in entry.mood.split(",")] if entry.mood else []
        moods = [mood for mood in moods if mood] or [MoodLabel.NEUTRAL.value]
        counts.update(moods)
    return dict(counts)


def format_mood_distribution(counts: Dict[str, int]) -> str:
    return ", ".join(f"{mood}: {count}" for mood, count in counts.items())


def build_help_prompt(question: str, entries: Sequence[DreamEntry]) -> str:
    recent = [entry.title for entry in entries[-HISTORY_CONTEXT_LIMIT:] if entry.title]
    return HELP_PROMPT_TEMPLATE.format(
        total=len(entries),
        distribution=format_mood_distribution(mood_distribution(entries)) or "none yet",
        recent=", ".join(recent) or "none yet",
        question=question,
    )


class DreamAssistant:
    """Chat-style helper that knows the shape of the user's journal."""

    def __init__(self, llm_client):
        self.llm_client = llm_client
        self.logger = logger.bind(service="DreamAssistant")

    async def ask(self, question: str, entries: Sequence[DreamEntry] = ()) -> str:
        """
        Answer a user question with journal statistics as context.

        Args:
            question: The user's question
            entries: Recorded dreams, oldest first

        Returns:
            Assistant reply, verbatim from the provider

        Raises:
            ValueError: If the question is empty
            GenerationError: If the generation fails
        """
        if not question or not question.strip():
            raise ValueError("A question is required")

        entries = list(entries)
        self.logger.info("Answering assistant question", dream_count=len(entries))

        result = await self.llm_client.generate(build_help_prompt(question, entries))
        if not result.ok:
            self.logger.error(
                "Assistant answer failed",
                kind=result.error_kind.value,
                detail=result.detail
            )
        return unwrap_result(result)
