from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SuggestionRequest(BaseModel):
    """Request payload for quick activity suggestions."""

    city: Any = Field(default=None, description="Destination city (required, non-blank string)")
    interests: Optional[str] = Field(default=None, description="Free-text interests")
    trip_duration: Optional[str] = Field(default=None, description="Duration hint, e.g. '3 days'")


class TripPlanRequest(BaseModel):
    """Request payload for a full day-by-day trip plan."""

    city: Any = Field(default=None, description="Destination city (required, non-blank string)")
    duration: Optional[str] = Field(default=None, description="Duration hint, e.g. '5 days'")
    interests: Optional[str] = Field(default=None, description="Free-text interests")
    budget: Optional[str] = Field(default=None, description="Budget hint, e.g. 'Moderate'")


class SuggestionsResponse(BaseModel):
    suggestions: List[Dict[str, Any]] = Field(
        ..., description="Validated suggestions, in the order the model produced them"
    )


class TripPlanResponse(BaseModel):
    trip_plan: Dict[str, Any] = Field(
        ..., description="Trip plan as returned by the model; daily_itinerary is always a list"
    )


class ErrorResponse(BaseModel):
    """Error body returned for every handled failure."""

    error: str = Field(..., description="Stable, user-facing message")
    debug: Optional[str] = Field(
        default=None, description="Excerpt of the unparseable model output (development only)"
    )


class TripCreate(BaseModel):
    title: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    budget_limit: Optional[float] = None
    currency: Optional[str] = None


class StopCreate(BaseModel):
    city_name: Optional[str] = None
    country_code: Optional[str] = None
    arrival_date: Optional[str] = None
    order_index: Optional[int] = None

    model_config = ConfigDict(extra="allow")


class ShareToggle(BaseModel):
    is_public: bool = Field(..., description="Whether the trip is visible via its share link")


class MessageResponse(BaseModel):
    message: str
