"""Trip, stop and activity endpoints proxied to the hosted database."""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, status

from globetrotter.api.dependencies import AuthContext, get_data_store, require_auth
from globetrotter.api.response_builder import _merge_nested
from globetrotter.api.schemas import MessageResponse, ShareToggle, StopCreate, TripCreate
from globetrotter.core.budget import TripBudget, summarize_trip_budget
from globetrotter.core.errors import DataStoreError, MissingParameterError, NotFoundError
from globetrotter.services import SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/trips", tags=["trips"])

STOPS_WITH_ACTIVITIES = "*, activities(*)"


async def _load_trip_with_stops(
    store: SupabaseClient,
    trip_filters: Dict[str, Any],
    *,
    token: str | None = None,
) -> Dict[str, Any]:
    trip = await store.select_one("trips", filters=trip_filters, token=token)
    stops = await store.select(
        "stops",
        filters={"trip_id": trip["id"]},
        columns=STOPS_WITH_ACTIVITIES,
        order="order_index",
        token=token,
    )
    return _merge_nested(trip, stops)


# ---------------------------------------------------------------------------
# Trips
# ---------------------------------------------------------------------------


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_trip(
    payload: TripCreate,
    auth: AuthContext = Depends(require_auth),
    store: SupabaseClient = Depends(get_data_store),
) -> Dict[str, Any]:
    if not payload.title or not payload.start_date or not payload.end_date:
        raise MissingParameterError("Title, start_date, and end_date are required")

    row = {
        "user_id": auth.user.id,
        "title": payload.title,
        "start_date": payload.start_date,
        "end_date": payload.end_date,
        "budget_limit": payload.budget_limit or 0,
        "currency": payload.currency or "USD",
    }
    trip = await store.insert("trips", row, token=auth.token)
    logger.info("Created trip: %s", trip.get("id"))
    return trip


@router.get("")
async def list_trips(
    auth: AuthContext = Depends(require_auth),
    store: SupabaseClient = Depends(get_data_store),
) -> List[Dict[str, Any]]:
    trips = await store.select(
        "trips",
        filters={"user_id": auth.user.id},
        order="start_date",
        token=auth.token,
    )
    logger.info(f"Retrieved {len(trips)} trips for user {auth.user.id}")
    return trips


@router.get("/share/{trip_id}")
async def get_public_trip(
    trip_id: str,
    store: SupabaseClient = Depends(get_data_store),
) -> Dict[str, Any]:
    """Return a shared trip without authentication; private trips are hidden."""

    try:
        return await _load_trip_with_stops(store, {"id": trip_id, "is_public": True})
    except DataStoreError as exc:
        logger.info("Public trip %s unavailable: %s", trip_id, exc.message)
        raise NotFoundError("Trip not found or not public") from exc


@router.get("/{trip_id}")
async def get_trip(
    trip_id: str,
    auth: AuthContext = Depends(require_auth),
    store: SupabaseClient = Depends(get_data_store),
) -> Dict[str, Any]:
    try:
        trip = await _load_trip_with_stops(store, {"id": trip_id}, token=auth.token)
    except DataStoreError as exc:
        raise NotFoundError(exc.message) from exc
    logger.info(f"Retrieved trip {trip_id} with {len(trip['stops'])} stops")
    return trip


@router.put("/{trip_id}")
async def update_trip(
    trip_id: str,
    updates: Dict[str, Any] = Body(...),
    auth: AuthContext = Depends(require_auth),
    store: SupabaseClient = Depends(get_data_store),
) -> Dict[str, Any]:
    trip = await store.update("trips", updates, filters={"id": trip_id}, token=auth.token)
    logger.info("Updated trip: %s", trip_id)
    return trip


@router.delete("/{trip_id}", response_model=MessageResponse)
async def delete_trip(
    trip_id: str,
    auth: AuthContext = Depends(require_auth),
    store: SupabaseClient = Depends(get_data_store),
) -> MessageResponse:
    await store.delete("trips", filters={"id": trip_id}, token=auth.token)
    logger.info("Deleted trip: %s", trip_id)
    return MessageResponse(message="Trip deleted successfully")


@router.patch("/{trip_id}/share")
async def toggle_trip_sharing(
    trip_id: str,
    payload: ShareToggle,
    auth: AuthContext = Depends(require_auth),
    store: SupabaseClient = Depends(get_data_store),
) -> Dict[str, Any]:
    trip = await store.update(
        "trips", {"is_public": payload.is_public}, filters={"id": trip_id}, token=auth.token
    )
    logger.info(f"Toggled sharing for trip {trip_id}: {'public' if payload.is_public else 'private'}")
    return trip


@router.get("/{trip_id}/budget", response_model=TripBudget)
async def get_trip_budget(
    trip_id: str,
    auth: AuthContext = Depends(require_auth),
    store: SupabaseClient = Depends(get_data_store),
) -> TripBudget:
    trip = await store.select_one(
        "trips", filters={"id": trip_id}, columns="budget_limit,currency", token=auth.token
    )
    activities = await store.select(
        "activities", filters={"trip_id": trip_id}, columns="cost,category", token=auth.token
    )
    budget = summarize_trip_budget(trip_id, trip, activities)
    logger.info(
        f"Calculated budget for trip {trip_id}: spent {budget.total_spent}, remaining {budget.remaining}"
    )
    return budget


# ---------------------------------------------------------------------------
# Stops
# ---------------------------------------------------------------------------


@router.post("/{trip_id}/stops", status_code=status.HTTP_201_CREATED)
async def add_stop(
    trip_id: str,
    payload: StopCreate,
    auth: AuthContext = Depends(require_auth),
    store: SupabaseClient = Depends(get_data_store),
) -> Dict[str, Any]:
    row = {**payload.model_dump(exclude_none=True), "trip_id": trip_id}
    stop = await store.insert("stops", row, token=auth.token)
    logger.info("Added stop to trip: %s", trip_id)
    return stop


@router.put("/{trip_id}/stops/{stop_id}")
async def update_stop(
    trip_id: str,
    stop_id: str,
    updates: Dict[str, Any] = Body(...),
    auth: AuthContext = Depends(require_auth),
    store: SupabaseClient = Depends(get_data_store),
) -> Dict[str, Any]:
    stop = await store.update(
        "stops", updates, filters={"id": stop_id, "trip_id": trip_id}, token=auth.token
    )
    logger.info("Updated stop: %s", stop_id)
    return stop


@router.delete("/{trip_id}/stops/{stop_id}", response_model=MessageResponse)
async def delete_stop(
    trip_id: str,
    stop_id: str,
    auth: AuthContext = Depends(require_auth),
    store: SupabaseClient = Depends(get_data_store),
) -> MessageResponse:
    # Activities reference the stop; remove them first.
    await store.delete("activities", filters={"stop_id": stop_id}, token=auth.token)
    await store.delete("stops", filters={"id": stop_id, "trip_id": trip_id}, token=auth.token)
    logger.info("Deleted stop: %s", stop_id)
    return MessageResponse(message="Stop deleted successfully")


# ---------------------------------------------------------------------------
# Activities
# ---------------------------------------------------------------------------


@router.post("/{trip_id}/activities", status_code=status.HTTP_201_CREATED)
async def add_activity(
    trip_id: str,
    payload: Dict[str, Any] = Body(...),
    auth: AuthContext = Depends(require_auth),
    store: SupabaseClient = Depends(get_data_store),
) -> Dict[str, Any]:
    activity = await store.insert("activities", {**payload, "trip_id": trip_id}, token=auth.token)
    logger.info("Added activity to trip: %s", trip_id)
    return activity


@router.put("/{trip_id}/activities/{activity_id}")
async def update_activity(
    trip_id: str,
    activity_id: str,
    updates: Dict[str, Any] = Body(...),
    auth: AuthContext = Depends(require_auth),
    store: SupabaseClient = Depends(get_data_store),
) -> Dict[str, Any]:
    activity = await store.update(
        "activities", updates, filters={"id": activity_id, "trip_id": trip_id}, token=auth.token
    )
    logger.info("Updated activity: %s", activity_id)
    return activity


@router.delete("/{trip_id}/activities/{activity_id}", response_model=MessageResponse)
async def delete_activity(
    trip_id: str,
    activity_id: str,
    auth: AuthContext = Depends(require_auth),
    store: SupabaseClient = Depends(get_data_store),
) -> MessageResponse:
    await store.delete(
        "activities", filters={"id": activity_id, "trip_id": trip_id}, token=auth.token
    )
    logger.info("Deleted activity: %s", activity_id)
    return MessageResponse(message="Activity deleted successfully")
