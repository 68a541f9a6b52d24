"""
Tiny API client for the Stock Master backend (JWT login + authenticated requests).

Environment variables:
- STOCKMASTER_API_URL: e.g. "http://localhost:8000" (default)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests


class ApiError(RuntimeError):
    def __init__(self, status_code: int, detail: Any):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


@dataclass
class StockMasterClient:
    base_url: str
    http: Any = field(default_factory=requests.Session)
    token: Optional[str] = None
    timeout: float = 30

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _url(self, path: str) -> str:
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, *, json: Any = None, data: Any = None, params: Dict[str, Any] | None = None) -> Any:
        resp = self.http.request(
            method,
            self._url(path),
            json=json,
            data=data,
            params=params,
            headers=self._headers(),
            timeout=self.timeout,
        )
        if resp.status_code >= 400:
            try:
                body = resp.json()
            except ValueError:
                body = resp.text
            detail = body.get("detail", body) if isinstance(body, dict) else body
            raise ApiError(resp.status_code, detail)

        if resp.status_code == 204:
            return None
        return resp.json()

    # ----------------------------
    # Auth
    # ----------------------------

    def register(self, email: str, password: str) -> Dict[str, Any]:
        """POST /auth/register; returns the created user (id, email, ...)."""
        return self._request("POST", "/auth/register", json={"email": email, "password": password})

    def login(self, email: str, password: str) -> str:
        """
        FastAPI-Users JWT login endpoint.
        POST /auth/jwt/login with form fields: username, password
        """
        self.token = None
        data = self._request("POST", "/auth/jwt/login", data={"username": email, "password": password})
        token = (data or {}).get("access_token")
        if not token:
            raise ApiError(200, f"Login response missing access_token: {data}")
        self.token = token
        return token

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/users/me")

    # ----------------------------
    # Inventory
    # ----------------------------

    def list_items(self, q: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"q": q} if q else None
        return self._request("GET", "/inventory/items", params=params)

    def add_item(self, name: str) -> Dict[str, Any]:
        return self._request("POST", "/inventory/items", json={"name": name})

    def remove_item(self, name: str) -> Optional[Dict[str, Any]]:
        return self._request("POST", "/inventory/items/remove", json={"name": name})


def make_client_from_env() -> StockMasterClient:
    base_url = os.getenv("STOCKMASTER_API_URL", "http://localhost:8000").strip()
    if not base_url:
        raise RuntimeError("Missing STOCKMASTER_API_URL")
    return StockMasterClient(base_url=base_url)
