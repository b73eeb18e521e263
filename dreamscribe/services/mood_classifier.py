"""
Mood Classifier for Dreamscribe

Reduces free-form journal text to one of five mood labels. The model is asked
for a single descriptive word which is then normalized through a fixed
lexicon; anything unexpected becomes Neutral.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping

import structlog

logger = structlog.get_logger(__name__)


class MoodLabel(str, Enum):
    """The five mood categories a journal entry can carry."""
    JOYFUL = "Joyful"
    SAD = "Sad"
    NEUTRAL = "Neutral"
    STRANGE = "Strange"
    SCARY = "Scary"


MOOD_LEXICON: Mapping[str, MoodLabel] = MappingProxyType({
    # Positive
    "peaceful": MoodLabel.JOYFUL,
    "joyful": MoodLabel.JOYFUL,
    "exciting": MoodLabel.JOYFUL,
    "hopeful": MoodLabel.JOYFUL,
    "grateful": MoodLabel.JOYFUL,
    "loving": MoodLabel.JOYFUL,
    "confident": MoodLabel.JOYFUL,
    # Fearful
    "scary": MoodLabel.SCARY,
    "scared": MoodLabel.SCARY,
    "anxious": MoodLabel.SCARY,
    "overwhelming": MoodLabel.SCARY,
    "intense": MoodLabel.SCARY,
    # Negative
    "sad": MoodLabel.SAD,
    "angry": MoodLabel.SAD,
    "frustrated": MoodLabel.SAD,
    "lonely": MoodLabel.SAD,
    "guilty": MoodLabel.SAD,
    # Strange
    "curious": MoodLabel.STRANGE,
    "confused": MoodLabel.STRANGE,
    "mysterious": MoodLabel.STRANGE,
    "surreal": MoodLabel.STRANGE,
    "bizarre": MoodLabel.STRANGE,
    # Neutral
    "calm": MoodLabel.NEUTRAL,
    "neutral": MoodLabel.NEUTRAL,
    "mixed": MoodLabel.NEUTRAL,
})

MOOD_PROMPT_TEMPLATE = """Analyze the following dream and determine the most accurate mood tag.

Consider these factors:
- Emotional tone (fear, joy, confusion, peace, excitement, sadness, anger, wonder)
- Intensity level (mild, moderate, intense)
- Overall feeling (positive, negative, neutral, mixed)

Available mood tags:
- peaceful, joyful, exciting, curious, hopeful, grateful, loving, confident
- scary, anxious, sad, angry, confused, frustrated, lonely, guilty
- mysterious, surreal, bizarre, overwhelming, intense, calm, neutral
- mixed (for dreams with conflicting emotions)

Dream: "{entry_text}"

Respond with ONLY the single most appropriate mood tag, nothing else."""


def build_mood_prompt(entry_text: str) -> str:
    """Embed the entry verbatim in the classification prompt."""
    return MOOD_PROMPT_TEMPLATE.format(entry_text=entry_text)


def normalize_mood(raw: str) -> MoodLabel:
    """
    Map a raw model reply onto a mood label.

    Args:
        raw: Model output, any casing or surrounding whitespace

    Returns:
        Mapped label, or Neutral when the word is not in the lexicon
    """
    return MOOD_LEXICON.get(raw.strip().lower(), MoodLabel.NEUTRAL)


class MoodClassifier:
    """
    Assigns a MoodLabel to journal text.

    Mood tagging is cosmetic, so classification never raises: any failure
    of the underlying generation degrades to Neutral.
    """

    def __init__(self, llm_client):
        """
        Initialize mood classifier.

        Args:
            llm_client: Client exposing ``async generate(prompt) -> GenerationResult``
        """
        self.llm_client = llm_client
        self.logger = logger.bind(service="MoodClassifier")

    async def classify_mood(self, entry_text: str) -> MoodLabel:
        """
        Classify journal text into one of the five mood labels.

        Args:
            entry_text: Journal entry, embedded verbatim in the prompt

        Returns:
            One of the five MoodLabel values, never None
        """
        try:
            result = await self.llm_client.generate(build_mood_prompt(entry_text))
        except Exception as e:
            self.logger.warning(
                "Mood generation raised, defaulting to Neutral",
                error=str(e),
                error_type=type(e).__name__
            )
            return MoodLabel.NEUTRAL

        if not result.ok:
            self.logger.warning(
                "Mood generation failed, defaulting to Neutral",
                kind=result.error_kind.value,
                detail=result.detail
            )
            return MoodLabel.NEUTRAL

        mood = normalize_mood(result.text)
        self.logger.debug("Mood classified", raw_mood=result.text.strip()[:40], mood=mood.value)
        return mood
