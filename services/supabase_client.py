"""
Supabase PostgREST client.

A thin wrapper over the ``/rest/v1`` API using requests. The backend talks to
the database with the service-role key, so every query issued by the data
access layer carries an explicit ``user_id`` filter.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests

from services.parameter_store import config

logger = logging.getLogger(__name__)

# (column, operator, value) e.g. ("date", "gte", "2024-01-01")
Condition = Tuple[str, str, Any]


class SupabaseError(Exception):
    """Raised when PostgREST answers with an error status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details


def format_value(value: Any) -> str:
    """Render a Python value for a PostgREST filter."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class SupabaseClient:
    """
    Minimal PostgREST client.

    :param url: Supabase project URL, defaults to configuration.
    :param api_key: Key sent as ``apikey``; defaults to the service-role key.
    :param access_token: Bearer token; defaults to ``api_key``.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        access_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: int = 10,
    ):
        if url is None or api_key is None:
            settings = config.load_supabase_config()
            url = url or settings["url"]
            api_key = (
                api_key or settings["service_role_key"] or settings["anon_key"]
            )

        if not api_key:
            logger.warning("Supabase API key not configured")

        self.url = url.rstrip("/")
        self.api_key = api_key
        self.access_token = access_token or api_key
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key or "",
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[List[Tuple[str, str]]] = None,
        json_body: Any = None,
        prefer: Optional[str] = None,
    ) -> Any:
        headers = self.headers
        if prefer:
            headers["Prefer"] = prefer

        response = self.session.request(
            method,
            f"{self.url}/rest/v1/{path}",
            params=params,
            json=json_body,
            headers=headers,
            timeout=self.timeout,
        )

        if response.status_code >= 400:
            try:
                payload = response.json()
            except ValueError:
                payload = {"message": response.text}
            raise SupabaseError(
                payload.get("message") or f"HTTP {response.status_code}",
                status_code=response.status_code,
                code=payload.get("code"),
                details=payload.get("details"),
            )

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _filter_params(
        filters: Optional[Dict[str, Any]] = None,
        conditions: Sequence[Condition] = (),
    ) -> List[Tuple[str, str]]:
        params = []
        for column, value in (filters or {}).items():
            operator = "is" if value is None else "eq"
            params.append((column, f"{operator}.{format_value(value)}"))
        for column, operator, value in conditions:
            params.append((column, f"{operator}.{format_value(value)}"))
        return params

    def select(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        conditions: Sequence[Condition] = (),
        order: Sequence[str] = (),
        columns: str = "*",
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        Read rows.

        ``filters`` are equality matches, ``order`` terms use PostgREST syntax
        such as ``"name.asc"``.
        """
        params = [("select", columns)]
        params.extend(self._filter_params(filters, conditions))
        if order:
            params.append(("order", ",".join(order)))
        if limit is not None:
            params.append(("limit", str(limit)))
        if offset:
            params.append(("offset", str(offset)))

        return self._request("GET", table, params=params) or []

    def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored."""
        rows = self._request(
            "POST", table, json_body=row, prefer="return=representation"
        )
        if not rows:
            raise SupabaseError(f"Insert into {table} returned no row")
        return rows[0]

    def update(
        self, table: str, values: Dict[str, Any], filters: Dict[str, Any]
    ) -> List[Dict[str, Any]]:
        """Update matching rows and return them."""
        return (
            self._request(
                "PATCH",
                table,
                params=self._filter_params(filters),
                json_body=values,
                prefer="return=representation",
            )
            or []
        )

    def upsert(
        self, table: str, row: Dict[str, Any], on_conflict: str
    ) -> List[Dict[str, Any]]:
        """Insert a row or merge it into the row conflicting on ``on_conflict``."""
        return (
            self._request(
                "POST",
                table,
                params=[("on_conflict", on_conflict)],
                json_body=row,
                prefer="resolution=merge-duplicates,return=representation",
            )
            or []
        )

    def delete(self, table: str, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Delete matching rows and return them."""
        return (
            self._request(
                "DELETE",
                table,
                params=self._filter_params(filters),
                prefer="return=representation",
            )
            or []
        )

    def rpc(self, function: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Call a Postgres function exposed through PostgREST."""
        return self._request("POST", f"rpc/{function}", json_body=params or {})


_default_client: Optional[SupabaseClient] = None


def get_client() -> SupabaseClient:
    """Shared service-role client, created on first use."""
    global _default_client
    if _default_client is None:
        _default_client = SupabaseClient()
    return _default_client
