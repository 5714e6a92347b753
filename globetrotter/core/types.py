"""Shape declarations for the structured values produced from model output.

The validator hands back parsed JSON unchanged; these declarations only name
the keys the rest of the application reads.
"""
from __future__ import annotations

from typing import Any, List, Literal, NotRequired, TypedDict, Union

SuggestionCategory = Union[Literal["activity", "food", "other"], str]
Mode = Literal["suggestions", "trip_plan"]


class ActivitySuggestion(TypedDict):
    title: str
    category: SuggestionCategory
    cost_est: Any
    description: NotRequired[str]


class TimeBlock(TypedDict, total=False):
    time: str
    activities: List[str]
    description: str


class Meals(TypedDict, total=False):
    breakfast: str
    lunch: str
    dinner: str


class DayPlan(TypedDict, total=False):
    day: int
    title: str
    morning: TimeBlock
    afternoon: TimeBlock
    evening: TimeBlock
    meals: Meals
    estimated_cost: float


class MustVisitPlace(TypedDict, total=False):
    name: str
    description: str
    estimated_time: str
    cost: float
    category: str


class TripPlan(TypedDict):
    daily_itinerary: List[DayPlan]
    overview: NotRequired[str]
    best_time_to_visit: NotRequired[str]
    estimated_budget: NotRequired[str]
    transportation: NotRequired[str]
    must_visit_places: NotRequired[List[MustVisitPlace]]
    travel_tips: NotRequired[List[str]]
    local_cuisine: NotRequired[List[str]]
