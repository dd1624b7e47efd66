"""
Yearly story generation.
Packages a stats summary into a prompt, calls the text generator, and
always hands back a Narrative, degrading to an empty story on failure.
"""

from typing import Callable, Optional, Protocol, Sequence

from openai import AsyncOpenAI

from github_wrapped.core.config import Settings, settings as default_settings
from github_wrapped.core.exceptions import NarrativeUnavailableError
from github_wrapped.core.logger import get_logger
from github_wrapped.core.models import AggregateStats, DailyActivity, Narrative
from github_wrapped.narrative.prompts import build_highlights, build_story_prompt

logger = get_logger(__name__)


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> str:
        ...


class OpenAITextGenerator:
    """
    TextGenerator backed by an OpenAI-compatible chat completions endpoint.
    """

    def __init__(self, settings: Optional[Settings] = None, client: Optional[AsyncOpenAI] = None):
        self.settings = settings or default_settings
        self.model = self.settings.NARRATIVE_MODEL
        self.temperature = self.settings.NARRATIVE_TEMPERATURE
        self.max_tokens = self.settings.NARRATIVE_MAX_TOKENS

        if client is None and self.settings.OPENAI_API_KEY:
            client = AsyncOpenAI(
                api_key=self.settings.OPENAI_API_KEY,
                base_url=self.settings.NARRATIVE_BASE_URL,
            )
        self.client = client

        logger.info(f"OpenAITextGenerator initialized with model: {self.model}")

    async def generate(self, prompt: str) -> str:
        """
        Generate text for the prompt.

        Raises:
            NarrativeUnavailableError: If no client is configured or the call fails
        """
        if self.client is None:
            raise NarrativeUnavailableError("No API key configured for narrative generation")

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            raise NarrativeUnavailableError(f"Narrative generation failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        return content or ""


ThemeCondition = Callable[[AggregateStats, Sequence[DailyActivity]], bool]


def _recent_half_dominates(stats: AggregateStats, days: Sequence[DailyActivity]) -> bool:
    if stats.total_contributions <= 0:
        return False
    recent = sum(day.count for day in days[len(days) // 2:])
    return recent > stats.total_contributions / 2


# Priority order: the first condition that holds names the theme
THEME_CONDITIONS: tuple[tuple[str, ThemeCondition], ...] = (
    ("legendary-grind", lambda stats, days: stats.longest_streak > 30),
    ("open-source-hero", lambda stats, days: stats.stars_earned > 100),
    ("consistent-champion", lambda stats, days: sum(1 for day in days if day.count > 0) > 300),
    ("language-master", lambda stats, days: len(stats.top_languages) > 5),
    ("rising-phoenix", _recent_half_dominates),
)
DEFAULT_THEME = "coding-explorer"


def determine_theme(stats: AggregateStats, days: Sequence[DailyActivity]) -> str:
    for theme, condition in THEME_CONDITIONS:
        if condition(stats, days):
            return theme
    return DEFAULT_THEME


class Storyteller:
    """
    Narrative requester.

    ``tell`` never raises: any generator failure yields an empty story with
    no highlights and the fallback theme.
    """

    def __init__(self, generator: Optional[TextGenerator] = None, settings: Optional[Settings] = None):
        self.settings = settings or default_settings
        self.enabled = self.settings.NARRATIVE_ENABLED
        self.generator = generator or OpenAITextGenerator(self.settings)
        self.fallback_theme = self.settings.NARRATIVE_FALLBACK_THEME

    def fallback(self) -> Narrative:
        return Narrative(story="", highlights=[], theme=self.fallback_theme)

    async def tell(self, stats: AggregateStats, days: Sequence[DailyActivity]) -> Narrative:
        if not self.enabled:
            return self.fallback()

        prompt = build_story_prompt(stats)
        logger.debug(f"Requesting narrative, prompt length: {len(prompt)}")

        try:
            story = await self.generator.generate(prompt)
        except Exception as e:
            logger.warning(
                "Narrative unavailable, using fallback",
                extra={"error": str(e), "error_type": type(e).__name__},
            )
            return self.fallback()

        return Narrative(
            story=story,
            highlights=build_highlights(stats),
            theme=determine_theme(stats, days),
        )
