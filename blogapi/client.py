"""HTTP client for the blog API.

Keeps the token and user from the last successful register/login in a
TokenStore, sends the token as a Bearer header on every request, and clears
both whenever the server answers 401.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000/api"
DEFAULT_TIMEOUT_SEC = 10.0


class BlogApiError(Exception):
    """Raised for any non-2xx response; message is the server's error string."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


@dataclass
class TokenStore:
    """Where the client keeps its credentials between calls."""

    token: str | None = None
    user: dict[str, Any] | None = None

    def save(self, token: str, user: dict[str, Any]) -> None:
        self.token = token
        self.user = user

    def clear(self) -> None:
        self.token = None
        self.user = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:500] if resp.text else f"HTTP {resp.status_code}"
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return f"HTTP {resp.status_code}"


class BlogClient:
    """
    Thin wrapper over the REST routes.

    Pass an existing httpx.Client (for instance FastAPI's TestClient) to reuse
    its transport; base_url is then a path prefix such as "/api".
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        store: TokenStore | None = None,
        http: httpx.Client | None = None,
        timeout: float = DEFAULT_TIMEOUT_SEC,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.store = store or TokenStore()
        self._owns_http = http is None
        self._http = http or httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> BlogClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = dict(kwargs.pop("headers", None) or {})
        if self.store.token:
            headers["Authorization"] = f"Bearer {self.store.token}"
        resp = self._http.request(method, f"{self.base_url}{path}", headers=headers, **kwargs)
        if resp.status_code == 401:
            logger.info("Server returned 401; clearing stored credentials")
            self.store.clear()
        if resp.status_code >= 400:
            raise BlogApiError(_error_message(resp), resp.status_code)
        return resp.json()

    def _remember(self, data: dict[str, Any]) -> dict[str, Any]:
        if data.get("token"):
            self.store.save(data["token"], data.get("user") or {})
        return data

    # Auth

    def register(self, username: str, email: str, password: str) -> dict[str, Any]:
        data = self._request(
            "POST",
            "/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        return self._remember(data)

    def login(self, email: str, password: str) -> dict[str, Any]:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        return self._remember(data)

    def logout(self) -> None:
        """Forget the token locally. Tokens are not revoked server-side."""
        self.store.clear()

    def profile(self) -> dict[str, Any]:
        return self._request("GET", "/auth/profile")

    # Posts

    def list_posts(
        self,
        page: int = 1,
        limit: int = 10,
        category: int | None = None,
        published: bool | None = None,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"page": page, "limit": limit}
        if category is not None:
            params["category"] = category
        if published is not None:
            params["published"] = "true" if published else "false"
        return self._request("GET", "/posts", params=params)

    def get_post(self, post_id: int) -> dict[str, Any]:
        return self._request("GET", f"/posts/{post_id}")

    def create_post(
        self, title: str, content: str, category: int | None = None
    ) -> dict[str, Any]:
        return self._request(
            "POST", "/posts", json={"title": title, "content": content, "category": category}
        )

    def update_post(self, post_id: int, **updates: Any) -> dict[str, Any]:
        return self._request("PUT", f"/posts/{post_id}", json=updates)

    def delete_post(self, post_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/posts/{post_id}")

    # Categories

    def list_categories(self) -> list[dict[str, Any]]:
        return self._request("GET", "/categories")

    def create_category(self, name: str) -> dict[str, Any]:
        return self._request("POST", "/categories", json={"name": name})
