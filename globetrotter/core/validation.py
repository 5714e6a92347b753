"""Structural validation of normalised model output.

Each mode has one pure validator that returns a tagged result instead of
raising: ``Valid`` wraps the accepted value, ``Invalid`` wraps the
classified :class:`~globetrotter.core.errors.AIResponseError`.

Suggestion mode filters the list entry by entry and keeps whatever passes.
Itinerary mode only checks that ``daily_itinerary`` is a list and returns the
document untouched.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Generic, List, Mapping, TypeVar, Union, cast

from globetrotter.core.errors import (
    AIResponseError,
    MalformedJSONError,
    NoValidEntriesError,
    UnexpectedShapeError,
)
from globetrotter.core.types import ActivitySuggestion, TripPlan

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Keys whose values must be set (not null, false, 0 or "") for a suggestion to be kept.
SUGGESTION_TRUTHY_FIELDS = ("title", "category")
# Keys that only need to be present (``null`` is accepted).
SUGGESTION_PRESENT_FIELDS = ("cost_est",)
TRIP_PLAN_LIST_FIELD = "daily_itinerary"


@dataclass(frozen=True, slots=True)
class Valid(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Invalid:
    error: AIResponseError


ValidationResult = Union[Valid[T], Invalid]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def _parse(text: str) -> Union[Valid[Any], Invalid]:
    try:
        return Valid(json.loads(text, parse_constant=_reject_constant))
    except (ValueError, RecursionError) as exc:
        return Invalid(MalformedJSONError(str(exc), text=text))


def _is_set(value: Any) -> bool:
    # Empty lists and objects count as set; only null, false, 0 and "" do not.
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    return True


def is_valid_suggestion(item: Any) -> bool:
    """Return True when ``item`` carries a title, a category and a cost estimate."""

    if not isinstance(item, Mapping):
        return False
    if not all(_is_set(item.get(field)) for field in SUGGESTION_TRUTHY_FIELDS):
        return False
    return all(field in item for field in SUGGESTION_PRESENT_FIELDS)


def validate_suggestions(text: str) -> ValidationResult[List[ActivitySuggestion]]:
    """Parse ``text`` as a suggestion list and drop entries that fail the check.

    The surviving entries keep their input order.  An empty result is an
    error, never a successful empty list.
    """

    parsed = _parse(text)
    if isinstance(parsed, Invalid):
        return parsed

    data = parsed.value
    if not isinstance(data, list):
        return Invalid(UnexpectedShapeError("not an array", text=text))

    suggestions = [item for item in data if is_valid_suggestion(item)]
    dropped = len(data) - len(suggestions)
    if dropped:
        logger.debug("Dropped %s of %s suggestion entries missing required fields", dropped, len(data))

    if not suggestions:
        return Invalid(NoValidEntriesError(text=text))
    return Valid(cast(List[ActivitySuggestion], suggestions))


def validate_trip_plan(text: str) -> ValidationResult[TripPlan]:
    """Parse ``text`` as a trip plan that has a ``daily_itinerary`` list.

    Individual days are not inspected; the parsed object is returned as-is.
    """

    parsed = _parse(text)
    if isinstance(parsed, Invalid):
        return parsed

    data = parsed.value
    if not isinstance(data, dict) or not isinstance(data.get(TRIP_PLAN_LIST_FIELD), list):
        return Invalid(UnexpectedShapeError("invalid trip plan structure", text=text))
    return Valid(cast(TripPlan, data))
