"""FastAPI surface for the GlobeTrotter travel planner."""
from __future__ import annotations

import os
# Load environment variables from .env file
from dotenv import load_dotenv

# Load .env file before any other imports that might need environment variables
load_dotenv()


import logging
from typing import Any, Dict

import sentry_sdk
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from globetrotter.api import trips, users
from globetrotter.api.dependencies import get_ai_planner, get_settings, lifespan
from globetrotter.api.response_builder import _error_response
from globetrotter.api.schemas import (
    ErrorResponse,
    SuggestionRequest,
    SuggestionsResponse,
    TripPlanRequest,
    TripPlanResponse,
)
from globetrotter.core.errors import GlobeTrotterError

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

if get_settings().sentry_dsn:  # pragma: no cover - runtime configuration
    sentry_sdk.init(
        dsn=get_settings().sentry_dsn,
        environment=get_settings().environment,
        send_default_pii=False,
        traces_sample_rate=1.0,
    )

app = FastAPI(title="GlobeTrotter API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(trips.router)
app.include_router(users.router)

ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    400: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"{request.method} {request.url.path}")
    return await call_next(request)


@app.exception_handler(GlobeTrotterError)
async def handle_app_error(request: Request, exc: GlobeTrotterError) -> JSONResponse:
    """Return the stable message; add the output excerpt only in development."""

    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc}")
    else:
        logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc}")
    return _error_response(exc, include_debug=get_settings().is_development)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unexpected error on {request.url.path}: {exc}", exc_info=exc)
    content: Dict[str, Any] = {"error": "Something went wrong!"}
    if get_settings().is_development:
        content["message"] = str(exc)
    return JSONResponse(status_code=500, content=content)


@app.post("/api/ai/suggest", response_model=SuggestionsResponse, responses=ERROR_RESPONSES)
async def suggest_activities(payload: SuggestionRequest) -> SuggestionsResponse:
    """Suggest distinct activities for a city.

    The model is asked for a JSON array of ``{title, category, cost_est,
    description}`` objects.  Entries missing ``title``, ``category`` or
    ``cost_est`` are dropped; if none remain the request fails.

    Example JSON payload:
        ```json
        {"city": "Paris", "interests": "art, food", "trip_duration": "4 days"}
        ```
    """

    planner = get_ai_planner()
    suggestions = await planner.suggest(
        city=payload.city,
        interests=payload.interests,
        trip_duration=payload.trip_duration,
    )
    return SuggestionsResponse(suggestions=suggestions)


@app.post("/api/ai/trip-plan", response_model=TripPlanResponse, responses=ERROR_RESPONSES)
async def generate_trip_plan(payload: TripPlanRequest) -> TripPlanResponse:
    """Generate a day-by-day itinerary with places, tips and cuisine.

    Only ``daily_itinerary`` is checked (it must be a list); the rest of the
    plan is returned exactly as the model produced it.
    """

    planner = get_ai_planner()
    trip_plan = await planner.trip_plan(
        city=payload.city,
        duration=payload.duration,
        interests=payload.interests,
        budget=payload.budget,
    )
    return TripPlanResponse(trip_plan=trip_plan)


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "GlobeTrotter API is running"


@app.get("/health")
async def health_check() -> Dict[str, str]:
    """Simple health endpoint used for readiness probes."""

    return {"status": "healthy", "service": "globetrotter-api"}


@app.get("/api/ai/info")
async def get_ai_info() -> Dict[str, Any]:
    """Report which generation backend is wired in."""

    planner = get_ai_planner()
    settings = get_settings()
    return {
        "ai_info": {
            "provider": settings.llm_provider,
            "configured": planner.generator is not None,
            "generator": repr(planner.generator) if planner.generator else None,
            "environment": settings.environment,
        }
    }
