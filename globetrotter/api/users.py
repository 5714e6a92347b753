"""Profile and statistics endpoints for the authenticated user."""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends

from globetrotter.api.dependencies import AuthContext, get_data_store, require_auth
from globetrotter.core.budget import UserStats, summarize_user_stats
from globetrotter.services import SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/profile")
async def get_profile(
    auth: AuthContext = Depends(require_auth),
    store: SupabaseClient = Depends(get_data_store),
) -> Dict[str, Any]:
    return await store.select_one("profiles", filters={"id": auth.user.id}, token=auth.token)


@router.put("/profile")
async def update_profile(
    updates: Dict[str, Any] = Body(...),
    auth: AuthContext = Depends(require_auth),
    store: SupabaseClient = Depends(get_data_store),
) -> Dict[str, Any]:
    profile = await store.update("profiles", updates, filters={"id": auth.user.id}, token=auth.token)
    logger.info("Updated profile: %s", auth.user.id)
    return profile


@router.get("/stats", response_model=UserStats)
async def get_user_stats(
    auth: AuthContext = Depends(require_auth),
    store: SupabaseClient = Depends(get_data_store),
) -> UserStats:
    """Count trips, destinations and activities and total the budgets."""

    trips = await store.select(
        "trips", filters={"user_id": auth.user.id}, columns="id,budget_limit", token=auth.token
    )
    stops: List[Dict[str, Any]] = []
    activities: List[Dict[str, Any]] = []
    trip_ids = [trip["id"] for trip in trips if trip.get("id") is not None]
    if trip_ids:
        stops = await store.select(
            "stops", filters={"trip_id": trip_ids}, columns="id,trip_id", token=auth.token
        )
        activities = await store.select(
            "activities", filters={"trip_id": trip_ids}, columns="cost,trip_id", token=auth.token
        )
    return summarize_user_stats(trips, stops, activities)
