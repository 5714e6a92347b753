import logging
from typing import Any, List, Optional

from globetrotter.core.config import ApiSettings
from globetrotter.core.errors import (
    MissingParameterError,
    ServiceUnavailableError,
    classify_provider_error,
    snippet,
)
from globetrotter.core.normalizer import normalize_suggestions, normalize_trip_plan
from globetrotter.core.prompts import (
    DEFAULT_DURATION,
    build_suggestion_prompt,
    build_trip_plan_prompt,
)
from globetrotter.core.types import ActivitySuggestion, TripPlan
from globetrotter.core.validation import Invalid, validate_suggestions, validate_trip_plan
from globetrotter.services.generation import TextGenerator

logger = logging.getLogger(__name__)

SUGGESTIONS_FAILURE_MESSAGE = "Failed to generate suggestions. Please try again."
TRIP_PLAN_FAILURE_MESSAGE = "Failed to generate trip plan. Please try again."


def _require_city(city: Any) -> str:
    if not isinstance(city, str) or not city.strip():
        raise MissingParameterError()
    return city.strip()


class AIPlanner:
    """Runs the prompt → generate → normalise → validate pipeline.

    One instance is shared by all requests.  It holds no per-request state:
    each call issues exactly one generation request and is never retried, so
    suggestion and trip-plan requests for the same city can run concurrently.

    Attributes:
        settings: Application configuration
        generator: Text generation capability, ``None`` when no provider
            credential is configured
    """

    def __init__(self, settings: ApiSettings, generator: Optional[TextGenerator]) -> None:
        self.settings = settings
        self.generator = generator

    def __repr__(self) -> str:
        return f"AIPlanner(generator={self.generator!r}, environment='{self.settings.environment}')"

    def _ensure_generator(self) -> None:
        if self.generator is None:
            logger.error("Text generation requested but no provider is configured")
            raise ServiceUnavailableError()

    async def _generate(self, prompt: str, failure_message: str) -> str:
        try:
            text = await self.generator.generate(prompt)
        except Exception as exc:
            logger.error("Generation error: %s", exc, exc_info=True)
            raise classify_provider_error(exc, failure_message) from exc
        logger.info("Raw response received, length: %s", len(text))
        return text

    async def suggest(
        self,
        *,
        city: Any,
        interests: Optional[str] = None,
        trip_duration: Optional[str] = None,
    ) -> List[ActivitySuggestion]:
        """Return validated activity suggestions for ``city``.

        Raises:
            MissingParameterError: ``city`` is absent or blank
            ServiceUnavailableError: no generation provider configured
            ProviderError: the generation call failed
            AIResponseError: the model output could not be used
        """

        city = _require_city(city)
        self._ensure_generator()

        logger.info(f"Generating suggestions for city: {city}, duration: {trip_duration or DEFAULT_DURATION}")
        prompt = build_suggestion_prompt(city, trip_duration, interests)
        text = await self._generate(prompt, SUGGESTIONS_FAILURE_MESSAGE)

        clean_text = normalize_suggestions(text)
        result = validate_suggestions(clean_text)
        if isinstance(result, Invalid):
            logger.error("JSON parse error: %s", result.error)
            logger.error("Attempted to parse: %s", snippet(clean_text))
            raise result.error

        logger.info(f"Successfully parsed {len(result.value)} suggestions")
        return result.value

    async def trip_plan(
        self,
        *,
        city: Any,
        duration: Optional[str] = None,
        interests: Optional[str] = None,
        budget: Optional[str] = None,
    ) -> TripPlan:
        """Return a day-by-day trip plan for ``city``; raises like :meth:`suggest`."""

        city = _require_city(city)
        self._ensure_generator()

        logger.info(f"Generating detailed trip plan for: {city}, duration: {duration or DEFAULT_DURATION}")
        prompt = build_trip_plan_prompt(city, duration, interests, budget)
        text = await self._generate(prompt, TRIP_PLAN_FAILURE_MESSAGE)

        clean_text = normalize_trip_plan(text)
        result = validate_trip_plan(clean_text)
        if isinstance(result, Invalid):
            logger.error("JSON parse error: %s", result.error)
            logger.error("Attempted to parse: %s", snippet(clean_text))
            raise result.error

        logger.info(f"Successfully generated trip plan for {city}")
        return result.value
