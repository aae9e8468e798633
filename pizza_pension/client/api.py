from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from pizza_pension.api.v1.schemas.registration import Registration
from pizza_pension.core.config import API_PREFIX


class ApiError(Exception):
    """An error response from the server, carrying the server's message."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("detail"):
        return str(body["detail"])
    return response.reason_phrase


class PizzaPensionClient:
    """
    Thin async wrapper around the HTTP API.

    The session cookie set by login() is kept by the underlying
    httpx.AsyncClient and sent with every later request.
    """

    def __init__(self, http: httpx.AsyncClient, api_prefix: str = API_PREFIX):
        self.http = http
        self.api_prefix = api_prefix.rstrip("/")

    @classmethod
    def connect(cls, base_url: str, **kwargs) -> "PizzaPensionClient":
        return cls(httpx.AsyncClient(base_url=base_url, **kwargs))

    async def aclose(self) -> None:
        await self.http.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        response = await self.http.request(method, f"{self.api_prefix}{path}", **kwargs)
        if response.is_error:
            message = _error_message(response)
            logger.debug(f"{method} {path} failed with {response.status_code}: {message}")
            raise ApiError(response.status_code, message)
        return response

    async def register(self, data: Dict[str, Any]) -> Registration:
        response = await self._request("POST", "/register", json=data)
        return Registration.model_validate(response.json())

    async def login(self, username: str, password: str) -> Dict[str, Any]:
        response = await self._request("POST", "/login", json={"username": username, "password": password})
        return response.json()

    async def logout(self) -> None:
        await self._request("POST", "/logout")

    async def current_user(self) -> Optional[Dict[str, Any]]:
        try:
            response = await self._request("GET", "/user")
        except ApiError as e:
            if e.status_code == 401:
                return None
            raise
        return response.json()

    async def list_registrations(self) -> List[Registration]:
        response = await self._request("GET", "/registrations")
        return [Registration.model_validate(item) for item in response.json()]

    async def delete_registration(self, registration_id: int) -> None:
        await self._request("DELETE", f"/registrations/{registration_id}")

    async def download_export(self) -> bytes:
        response = await self._request("GET", "/registrations/export")
        return response.content
