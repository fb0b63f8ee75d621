from __future__ import annotations

from threading import Lock
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode

import httpx

from src.core.config import get_settings

Filters = List[Tuple[str, str]]


class SupabaseClient:
    """PostgREST and Auth access over one pooled httpx client per process."""

    _shared_client: httpx.Client | None = None
    _client_lock: Lock = Lock()

    def __init__(self) -> None:
        settings = get_settings()
        project_url = settings.supabase_url.rstrip("/")
        self.rest_url = f"{project_url}/rest/v1"
        self.auth_url = f"{project_url}/auth/v1"
        self.api_key = settings.supabase_service_role_key or settings.supabase_anon_key
        if not self.api_key:
            raise ValueError("SUPABASE_SERVICE_ROLE_KEY or SUPABASE_ANON_KEY must be set")
        self._client = self._get_shared_client()

    @classmethod
    def _get_shared_client(cls) -> httpx.Client:
        with cls._client_lock:
            if cls._shared_client is None:
                cls._shared_client = httpx.Client(
                    timeout=30.0,
                    limits=httpx.Limits(max_keepalive_connections=20, max_connections=100),
                )
            return cls._shared_client

    def _headers(self, bearer: Optional[str] = None, write: bool = False) -> Dict[str, str]:
        headers = {"apikey": self.api_key, "Authorization": f"Bearer {bearer or self.api_key}"}
        if write:
            headers["Content-Type"] = "application/json"
            headers["Prefer"] = "return=representation"
        return headers

    def _table_url(self, table: str, params: Filters) -> str:
        url = f"{self.rest_url}/{table}"
        return f"{url}?{urlencode(params, doseq=True)}" if params else url

    def select(
        self,
        table: str,
        select: str = "*",
        filters: Optional[Filters] = None,
        limit: Optional[int] = None,
        order: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        params: Filters = [("select", select), *(filters or [])]
        if limit is not None:
            params.append(("limit", str(limit)))
        if order:
            params.append(("order", order))
        response = self._client.get(self._table_url(table, params), headers=self._headers())
        response.raise_for_status()
        return self._rows(response)

    def select_one(self, table: str, filters: Filters, select: str = "*") -> Optional[Dict[str, Any]]:
        rows = self.select(table, select=select, filters=filters, limit=1)
        return rows[0] if rows else None

    def insert(self, table: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = self._client.post(
            self._table_url(table, []), headers=self._headers(write=True), json=payload
        )
        response.raise_for_status()
        rows = self._rows(response)
        if not rows:
            raise httpx.HTTPStatusError(
                f"Insert into {table} returned no row", request=response.request, response=response
            )
        return rows[0]

    def update(self, table: str, payload: Dict[str, Any], filters: Filters) -> Optional[Dict[str, Any]]:
        """PATCH the rows matching filters; returns the first updated row, or None if none matched."""
        response = self._client.patch(
            self._table_url(table, filters), headers=self._headers(write=True), json=payload
        )
        response.raise_for_status()
        rows = self._rows(response)
        return rows[0] if rows else None

    def delete(self, table: str, filters: Filters) -> List[Dict[str, Any]]:
        """DELETE the rows matching filters and return them."""
        if not filters:
            raise ValueError(f"Refusing unfiltered delete on {table}")
        response = self._client.delete(self._table_url(table, filters), headers=self._headers(write=True))
        response.raise_for_status()
        return self._rows(response)

    def create_auth_user(
        self, email: str, password: str, metadata: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        response = self._client.post(
            f"{self.auth_url}/admin/users",
            headers=self._headers(write=True),
            json={
                "email": email,
                "password": password,
                "email_confirm": True,
                "user_metadata": metadata or {},
            },
        )
        response.raise_for_status()
        return response.json()

    def update_auth_user(self, user_id: str, attributes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        response = self._client.put(
            f"{self.auth_url}/admin/users/{user_id}", headers=self._headers(write=True), json=attributes
        )
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.json()

    def delete_auth_user(self, user_id: str) -> bool:
        response = self._client.delete(f"{self.auth_url}/admin/users/{user_id}", headers=self._headers())
        if response.status_code == 404:
            return False
        response.raise_for_status()
        return True

    def get_auth_user(self, access_token: str) -> Optional[Dict[str, Any]]:
        response = self._client.get(f"{self.auth_url}/user", headers=self._headers(bearer=access_token))
        if response.status_code in (401, 403):
            return None
        response.raise_for_status()
        data = response.json()
        return data if isinstance(data, dict) else None

    @staticmethod
    def _rows(response: httpx.Response) -> List[Dict[str, Any]]:
        if not response.content:
            return []
        data = response.json()
        if isinstance(data, dict):
            return [data]
        return data if isinstance(data, list) else []
