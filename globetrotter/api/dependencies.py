import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from functools import lru_cache
from typing import AsyncGenerator, Optional

import httpx
from fastapi import Depends, FastAPI, Header

from globetrotter.api.ai_service import AIPlanner
from globetrotter.core.config import ApiSettings
from globetrotter.core.errors import AuthenticationError, ServiceUnavailableError
from globetrotter.services import AuthUser, SupabaseClient, create_supabase_client, create_text_generator

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AuthContext:
    """Authenticated caller: the resolved user and the bearer token they sent."""

    user: AuthUser
    token: str


@lru_cache(maxsize=1)
def get_settings() -> ApiSettings:
    return ApiSettings.from_env()


@lru_cache(maxsize=1)
def get_ai_planner() -> AIPlanner:
    settings = get_settings()
    return AIPlanner(settings, create_text_generator(settings))


@lru_cache(maxsize=1)
def _get_supabase_client() -> Optional[SupabaseClient]:
    settings = get_settings()
    if not settings.supabase_configured:
        return None
    return create_supabase_client(settings)


def get_data_store() -> SupabaseClient:
    client = _get_supabase_client()
    if client is None:
        raise ServiceUnavailableError("Data store is not configured properly")
    return client


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization.split(" ", 1)[1].strip()
    return token or None


async def require_auth(
    authorization: Optional[str] = Header(default=None),
    store: SupabaseClient = Depends(get_data_store),
) -> AuthContext:
    """Resolve the ``Authorization: Bearer`` header to a Supabase user."""

    token = _bearer_token(authorization)
    if token is None:
        raise AuthenticationError("Missing or invalid authorization header")
    try:
        user = await store.get_user(token)
    except httpx.HTTPError as exc:
        raise AuthenticationError() from exc
    if user is None:
        raise AuthenticationError("Invalid or expired token")
    logger.info("Authenticated user: %s", user.id)
    return AuthContext(user=user, token=token)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    try:
        yield
    finally:
        if _get_supabase_client.cache_info().currsize:
            client = _get_supabase_client()
            if client is not None:
                await client.aclose()
            _get_supabase_client.cache_clear()
