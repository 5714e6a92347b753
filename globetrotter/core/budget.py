"""Budget and statistics aggregation over trip records."""
from __future__ import annotations

import math
from typing import Any, Dict, Iterable, Mapping, Optional

from pydantic import BaseModel, Field


def to_amount(value: Any) -> float:
    """Coerce a stored monetary value to float, treating junk as zero.

    Accepts numbers and numeric prefixes of strings (``"12.5 EUR"`` → 12.5);
    ``numeric`` columns come back from the database as text.
    """

    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return 0.0 if math.isnan(value) else float(value)
    text = str(value).strip()
    # Longest numeric prefix.
    for end in range(len(text), 0, -1):
        try:
            amount = float(text[:end])
        except ValueError:
            continue
        return 0.0 if math.isnan(amount) else amount
    return 0.0


class TripBudget(BaseModel):
    """Spending summary for a single trip."""

    trip_id: str
    budget_limit: float
    currency: Optional[str] = None
    total_spent: float
    remaining: float
    category_breakdown: Dict[str, float] = Field(default_factory=dict)


class UserStats(BaseModel):
    """Aggregate figures across all trips owned by a user."""

    total_trips: int
    total_destinations: int
    total_budget: float
    total_spent: float
    total_activities: int


def summarize_trip_budget(
    trip_id: str,
    trip: Mapping[str, Any],
    activities: Iterable[Mapping[str, Any]],
) -> TripBudget:
    total_spent = 0.0
    breakdown: Dict[str, float] = {}
    for activity in activities:
        cost = to_amount(activity.get("cost"))
        total_spent += cost
        category = str(activity.get("category"))
        breakdown[category] = breakdown.get(category, 0.0) + cost

    budget_limit = to_amount(trip.get("budget_limit"))
    return TripBudget(
        trip_id=trip_id,
        budget_limit=budget_limit,
        currency=trip.get("currency"),
        total_spent=total_spent,
        remaining=budget_limit - total_spent,
        category_breakdown=breakdown,
    )


def summarize_user_stats(
    trips: Iterable[Mapping[str, Any]],
    stops: Iterable[Mapping[str, Any]],
    activities: Iterable[Mapping[str, Any]],
) -> UserStats:
    trips = list(trips)
    activities = list(activities)
    return UserStats(
        total_trips=len(trips),
        total_destinations=len(list(stops)),
        total_budget=sum(to_amount(trip.get("budget_limit")) for trip in trips),
        total_spent=sum(to_amount(activity.get("cost")) for activity in activities),
        total_activities=len(activities),
    )
