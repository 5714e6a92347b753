"""Tests for the AI planner pipeline with an injected generator."""
from __future__ import annotations

import asyncio
import json

import pytest

from globetrotter.api.ai_service import (
    SUGGESTIONS_FAILURE_MESSAGE,
    TRIP_PLAN_FAILURE_MESSAGE,
    AIPlanner,
)
from globetrotter.core.config import ApiSettings
from globetrotter.core.errors import (
    MalformedJSONError,
    MissingParameterError,
    NoValidEntriesError,
    ProviderAuthError,
    ProviderError,
    ProviderQuotaError,
    ServiceUnavailableError,
    UnexpectedShapeError,
)

SUGGESTIONS = [
    {"title": "Fushimi Inari", "category": "activity", "cost_est": 0, "description": "Gates"},
    {"title": "Nishiki Market", "category": "food", "cost_est": 15},
]
TRIP_PLAN = {"overview": "Temples and tea", "daily_itinerary": [{"day": 1, "title": "East side"}]}


@pytest.fixture
def planner(stub_generator) -> AIPlanner:
    return AIPlanner(ApiSettings(), stub_generator)


async def test_suggest_returns_validated_entries(planner, stub_generator):
    stub_generator.response = "```json\n" + json.dumps(SUGGESTIONS + [{"category": "food"}]) + "\n```"

    result = await planner.suggest(city="  Kyoto ", interests="temples")

    assert result == SUGGESTIONS
    assert len(stub_generator.prompts) == 1
    assert "trip to Kyoto" in stub_generator.prompts[0]
    assert "Interests: temples" in stub_generator.prompts[0]


async def test_trip_plan_returns_parsed_object(planner, stub_generator):
    stub_generator.response = "Here is your plan:\n" + json.dumps(TRIP_PLAN)

    result = await planner.trip_plan(city="Kyoto", duration="2 days", budget="Budget")

    assert result == TRIP_PLAN
    assert "- Budget: Budget" in stub_generator.prompts[0]


@pytest.mark.parametrize("city", [None, "", "   ", 42, ["Kyoto"], {"name": "Kyoto"}])
async def test_missing_city_fails_before_generation(planner, stub_generator, city):
    with pytest.raises(MissingParameterError):
        await planner.suggest(city=city)
    with pytest.raises(MissingParameterError):
        await planner.trip_plan(city=city)
    assert stub_generator.prompts == []


async def test_unconfigured_generator_is_service_unavailable():
    planner = AIPlanner(ApiSettings(), None)

    with pytest.raises(ServiceUnavailableError):
        await planner.suggest(city="Kyoto")
    with pytest.raises(ServiceUnavailableError):
        await planner.trip_plan(city="Kyoto")


async def test_missing_city_is_reported_before_missing_service():
    planner = AIPlanner(ApiSettings(), None)
    with pytest.raises(MissingParameterError):
        await planner.suggest(city=" ")


@pytest.mark.parametrize(
    "message, expected",
    [
        ("API key not valid. Please pass a valid API key.", ProviderAuthError),
        ("You exceeded your current quota", ProviderQuotaError),
        ("connection reset by peer", ProviderError),
    ],
)
async def test_provider_failures_are_classified(planner, stub_generator, message, expected):
    stub_generator.error = RuntimeError(message)

    with pytest.raises(expected) as exc_info:
        await planner.suggest(city="Kyoto")

    assert type(exc_info.value) is expected
    assert len(stub_generator.prompts) == 1


async def test_generic_provider_failure_message_depends_on_mode(planner, stub_generator):
    stub_generator.error = RuntimeError("boom")

    with pytest.raises(ProviderError) as suggest_exc:
        await planner.suggest(city="Kyoto")
    with pytest.raises(ProviderError) as plan_exc:
        await planner.trip_plan(city="Kyoto")

    assert suggest_exc.value.message == SUGGESTIONS_FAILURE_MESSAGE
    assert plan_exc.value.message == TRIP_PLAN_FAILURE_MESSAGE
    assert len(stub_generator.prompts) == 2


async def test_unusable_output_raises_classified_errors(planner, stub_generator):
    stub_generator.response = "not json at all"
    with pytest.raises(MalformedJSONError):
        await planner.suggest(city="Kyoto")
    with pytest.raises(MalformedJSONError):
        await planner.trip_plan(city="Kyoto")

    stub_generator.response = '[{"category":"food","cost_est":10}]'
    with pytest.raises(NoValidEntriesError):
        await planner.suggest(city="Kyoto")

    stub_generator.response = '{"overview":"x"}'
    with pytest.raises(UnexpectedShapeError):
        await planner.trip_plan(city="Kyoto")


async def test_both_modes_can_run_concurrently():
    class ModeAwareGenerator:
        def __init__(self) -> None:
            self.calls = 0

        async def generate(self, prompt: str) -> str:
            self.calls += 1
            await asyncio.sleep(0)
            if "day-by-day" in prompt:
                return json.dumps(TRIP_PLAN)
            return json.dumps(SUGGESTIONS)

    generator = ModeAwareGenerator()
    planner = AIPlanner(ApiSettings(), generator)

    suggestions, plan = await asyncio.gather(
        planner.suggest(city="Kyoto"),
        planner.trip_plan(city="Kyoto"),
    )

    assert suggestions == SUGGESTIONS
    assert plan == TRIP_PLAN
    assert generator.calls == 2
