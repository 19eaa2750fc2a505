"""HTTP client for the content inventory API."""

from __future__ import annotations

from typing import Any

import httpx


class ApiError(Exception):
    """A request failed. ``status_code`` is None when the server was unreachable."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InventoryClient:
    """Thin synchronous wrapper over the REST surface."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout, transport=transport)

    def __enter__(self) -> "InventoryClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def health(self) -> bool:
        """Return True if the server answers its liveness check."""
        try:
            response = self._client.get("/health")
        except httpx.HTTPError:
            return False
        return response.status_code == 200

    def list_assessments(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/assessments")

    def get_assessment(self, record_id: str) -> dict[str, Any]:
        return self._request("GET", f"/api/assessments/{record_id}")

    def create_assessment(self, payload: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/api/assessments", json=payload)

    def update_assessment(self, record_id: str, patch: dict[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/api/assessments/{record_id}", json=patch)

    def list_rfis(self) -> list[dict[str, Any]]:
        return self._request("GET", "/api/rfis")

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.ConnectError as e:
            raise ApiError(f"Cannot connect to API at {self.base_url}") from e
        except httpx.HTTPError as e:
            raise ApiError(f"Request failed: {e}") from e

        if response.is_success:
            return response.json()
        raise ApiError(_error_message(response), status_code=response.status_code)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}: {response.text or response.reason_phrase}"
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return f"HTTP {response.status_code}"
