# storefront/client/api_client.py
import asyncio
from typing import Any

import requests

from storefront.domain.errors import ERRORS_BY_CODE, ERRORS_BY_STATUS, NetworkError, StorefrontError
from storefront.utils.logging import get_logger
from storefront.utils.retry import http_retry
from storefront.utils.settings import API_BASE_URL

logger = get_logger(__name__)


def error_from_response(response) -> StorefrontError:
    """Cialo bledu {message, code} -> wyjatek domenowy (po code, potem po statusie)."""
    try:
        body = response.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    cls = ERRORS_BY_CODE.get(body.get("code")) or ERRORS_BY_STATUS.get(response.status_code) or StorefrontError
    exc = cls(body.get("message"))
    exc.status_code = response.status_code
    return exc


class ApiClient:
    """
    Klient HTTP do API sklepu.
    requests.Session trzyma cookie sesji; wywolania blokujace ida do watku,
    zeby nie blokowac petli asyncio.
    """

    def __init__(self, base_url: str = API_BASE_URL, session: requests.Session | None = None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        # requests.Session nie jest bezpieczna watkowo; jedno zapytanie naraz
        self._lock: asyncio.Lock | None = None

    @http_retry()
    def _send(self, method: str, path: str, json=None, params=None):
        return self.session.request(
            method,
            f"{self.base_url}{path}",
            json=json,
            params=params,
            timeout=self.timeout,
        )

    def request_sync(self, method: str, path: str, json=None, params=None) -> Any:
        try:
            response = self._send(method, path, json=json, params=params)
        except requests.RequestException as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise NetworkError() from e

        if response.status_code >= 400:
            raise error_from_response(response)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    async def request(self, method: str, path: str, json=None, params=None) -> Any:
        if self._lock is None:
            self._lock = asyncio.Lock()
        async with self._lock:
            return await asyncio.to_thread(self.request_sync, method, path, json, params)

    async def get(self, path: str, params=None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json=None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json=None) -> Any:
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, json=None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    def close(self) -> None:
        self.session.close()
