"""Thin httpx wrapper around the Taskpad HTTP API."""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Non-2xx response, built from the server's error envelope."""

    def __init__(self, status_code: int, code: str, message: str, details: Any = None):
        super().__init__(f"{status_code} {code}: {message}")
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        return cls(
            status_code=response.status_code,
            code=body.get("code", "INTERNAL_ERROR"),
            message=body.get("message") or response.reason_phrase or "Request failed",
            details=body.get("details"),
        )


class TaskpadClient:
    """
    Appels à l'API. Les cookies de session sont conservés par le client httpx
    sous-jacent ; un token explicite peut aussi être passé en Bearer.
    """

    def __init__(self, http: httpx.Client, token: Optional[str] = None):
        self.http = http
        self.token = token

    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        response = self.http.request(method, path, headers=headers, **kwargs)
        if not response.is_success:
            error = ApiError.from_response(response)
            logger.warning("%s %s failed: %s", method, path, error)
            raise error
        return response.json()

    # --- auth ---

    def register(self, email: str, name: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/api/auth/register", json={"email": email, "name": name, "password": password})
        self.token = data["token"]
        return data["user"]

    def login(self, email: str, password: str) -> Dict[str, Any]:
        data = self._request("POST", "/api/auth/login", json={"email": email, "password": password})
        self.token = data["token"]
        return data["user"]

    def logout(self) -> None:
        self._request("POST", "/api/auth/logout")
        self.token = None
        self.http.cookies.clear()

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/api/auth/me")["user"]

    # --- tasks ---

    def list_tasks(self, **filters) -> List[Dict[str, Any]]:
        params = {k: v for k, v in filters.items() if v is not None}
        return self._request("GET", "/api/tasks", params=params)

    def create_task(self, title: str, content: str = "", **fields) -> Dict[str, Any]:
        return self._request("POST", "/api/tasks", json={"title": title, "content": content, **fields})

    def get_task(self, task_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/api/tasks/{task_id}")

    def replace_task(self, task_id: int, **fields) -> Dict[str, Any]:
        return self._request("PUT", f"/api/tasks/{task_id}", json=fields)

    def patch_task(self, task_id: int, **fields) -> Dict[str, Any]:
        return self._request("PATCH", f"/api/tasks/{task_id}", json=fields)

    def delete_task(self, task_id: int) -> None:
        self._request("DELETE", f"/api/tasks/{task_id}")

    def add_time(self, task_id: int, seconds: int) -> Dict[str, Any]:
        return self._request("POST", f"/api/tasks/{task_id}/time", json={"seconds": seconds})
