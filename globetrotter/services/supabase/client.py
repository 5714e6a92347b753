import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from globetrotter.core.config import ApiSettings
from globetrotter.core.errors import DataStoreError, NotFoundError
from globetrotter.services.supabase.schemas import AuthUser, Filters, FilterValue

logger = logging.getLogger(__name__)


def _encode_value(value: FilterValue) -> str:
    if value is None:
        return "is.null"
    if isinstance(value, bool):
        return f"eq.{str(value).lower()}"
    if isinstance(value, (list, tuple, set)):
        return f"in.({','.join(str(item) for item in value)})"
    return f"eq.{value}"


def build_params(
    filters: Optional[Filters] = None,
    *,
    columns: Optional[str] = None,
    order: Optional[str] = None,
    ascending: bool = True,
) -> Dict[str, str]:
    """Translate keyword filters into PostgREST query parameters."""

    params: Dict[str, str] = {}
    if columns:
        params["select"] = columns
    for column, value in (filters or {}).items():
        params[column] = _encode_value(value)
    if order:
        params["order"] = f"{order}.{'asc' if ascending else 'desc'}"
    return params


class SupabaseClient:
    """Thin async wrapper around the Supabase REST (PostgREST) and Auth APIs.

    Every data request is sent with the caller's access token when one is
    given so that row-level security policies apply; otherwise the anon key
    is used as the bearer.
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        *,
        timeout_s: float = 15.0,
    ) -> None:
        self.url = url.rstrip("/")
        self.api_key = api_key
        self._client = httpx.AsyncClient(
            base_url=self.url,
            headers={"accept": "application/json", "apikey": api_key},
            timeout=httpx.Timeout(timeout_s, connect=10.0),
        )
        self.rest_url = f"{self.url}/rest/v1"
        self.auth_url = f"{self.url}/auth/v1"

    async def aclose(self) -> None:
        """Close the underlying HTTPX client."""

        await self._client.aclose()

    async def __aenter__(self) -> "SupabaseClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self._client.aclose()

    def _headers(self, token: Optional[str], prefer: Optional[str] = None) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {token or self.api_key}"}
        if prefer:
            headers["Prefer"] = prefer
        return headers

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(payload, Mapping):
            for key in ("message", "msg", "error_description", "error"):
                if payload.get(key):
                    return str(payload[key])
        return f"HTTP {response.status_code}"

    async def _arequest(
        self,
        method: str,
        path: str,
        *,
        token: Optional[str] = None,
        params: Optional[Mapping[str, str]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> Any:
        """Execute a request against the project and return the parsed JSON."""

        response = await self._client.request(
            method,
            path,
            params=params,
            json=json,
            headers=self._headers(token, prefer),
        )
        if response.is_error:
            message = self._error_message(response)
            logger.warning("Supabase %s %s failed (%s): %s", method, path, response.status_code, message)
            raise DataStoreError(message)
        if not response.content:
            return None
        return response.json()

    async def get_user(self, token: str) -> Optional[AuthUser]:
        """Resolve an access token to its user, or ``None`` if it is rejected."""

        response = await self._client.get(
            f"{self.auth_url}/user",
            headers=self._headers(token),
        )
        if response.is_error:
            logger.info("Token verification failed: %s", self._error_message(response))
            return None
        return AuthUser(**response.json())

    async def select(
        self,
        table: str,
        *,
        filters: Optional[Filters] = None,
        columns: str = "*",
        order: Optional[str] = None,
        ascending: bool = True,
        token: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params = build_params(filters, columns=columns, order=order, ascending=ascending)
        rows = await self._arequest("GET", f"{self.rest_url}/{table}", token=token, params=params)
        return rows or []

    async def select_one(
        self,
        table: str,
        *,
        filters: Optional[Filters] = None,
        columns: str = "*",
        token: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Return exactly one row or raise :class:`NotFoundError`."""

        rows = await self.select(table, filters=filters, columns=columns, token=token)
        if len(rows) != 1:
            raise NotFoundError(f"Expected one row from '{table}', found {len(rows)}")
        return rows[0]

    async def insert(
        self,
        table: str,
        row: Mapping[str, Any],
        *,
        token: Optional[str] = None,
    ) -> Dict[str, Any]:
        rows = await self._arequest(
            "POST",
            f"{self.rest_url}/{table}",
            token=token,
            json=[dict(row)],
            prefer="return=representation",
        )
        if not rows:
            raise DataStoreError(f"Insert into '{table}' returned no rows")
        return rows[0]

    async def update(
        self,
        table: str,
        values: Mapping[str, Any],
        *,
        filters: Filters,
        token: Optional[str] = None,
    ) -> Dict[str, Any]:
        rows = await self._arequest(
            "PATCH",
            f"{self.rest_url}/{table}",
            token=token,
            params=build_params(filters),
            json=dict(values),
            prefer="return=representation",
        )
        if not rows:
            raise NotFoundError(f"No row in '{table}' matched the update")
        return rows[0]

    async def delete(
        self,
        table: str,
        *,
        filters: Filters,
        token: Optional[str] = None,
    ) -> None:
        await self._arequest(
            "DELETE",
            f"{self.rest_url}/{table}",
            token=token,
            params=build_params(filters),
        )


def create_supabase_client(settings: ApiSettings) -> SupabaseClient:
    """Instantiate the Supabase client using project settings."""

    return SupabaseClient(settings.ensure("supabase_url"), settings.ensure("supabase_key"))

