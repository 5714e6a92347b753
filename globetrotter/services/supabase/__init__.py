"""Supabase (hosted Postgres + Auth) integration.

Public API:
    - SupabaseClient: Async HTTP client for the PostgREST and Auth endpoints
    - create_supabase_client: Factory function to create the client from settings
    - AuthUser: Pydantic schema for the authenticated user
"""
from globetrotter.services.supabase.client import SupabaseClient, build_params, create_supabase_client
from globetrotter.services.supabase.schemas import AuthUser, Filters

__all__ = [
    "SupabaseClient",
    "build_params",
    "create_supabase_client",
    "AuthUser",
    "Filters",
]
