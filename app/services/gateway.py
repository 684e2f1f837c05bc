import asyncio
import logging
import time as _time
from typing import Any, Dict, Optional

import httpx

from app.models.result import CallResult, FailureKind

logger = logging.getLogger(__name__)


class ApiGateway:
    """Sequential JSON client for one remote REST API.

    Every call is awaited to completion and converted into a CallResult.
    ``min_interval`` spaces consecutive calls by a fixed number of seconds
    (0 disables spacing).
    """

    def __init__(self, name: str, base_url: str, headers: Dict[str, str], timeout: float = 30.0,
                 min_interval: float = 0.0, client: Optional[httpx.AsyncClient] = None):
        self.name = name
        self.base_url = base_url.rstrip('/')
        self.min_interval = min_interval
        self._last_call_ts: Optional[float] = None
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(base_url=self.base_url, headers=headers, timeout=timeout)
        if client is not None:
            self.client.base_url = self.base_url
            self.client.headers.update(headers)

    async def _wait_for_slot(self) -> None:
        if self.min_interval <= 0 or self._last_call_ts is None:
            return
        since = _time.monotonic() - self._last_call_ts
        if since < self.min_interval:
            await asyncio.sleep(self.min_interval - since)

    async def request(self, method: str, path: str, label: str, params: Optional[Dict[str, Any]] = None,
                      json: Optional[Dict[str, Any]] = None) -> CallResult:
        await self._wait_for_slot()
        try:
            response = await self.client.request(method.upper(), path, params=params, json=json)
        except httpx.HTTPError as e:
            logger.error(f"{self.name}: {label} failed: {str(e) or type(e).__name__}")
            return CallResult.fail(FailureKind.TRANSPORT, str(e) or type(e).__name__, label=label)
        finally:
            self._last_call_ts = _time.monotonic()

        if not response.is_success:
            logger.error(f"{self.name}: {label} failed: {response.status_code} - {response.text}")
            return CallResult.fail(FailureKind.HTTP_STATUS, response.text, label=label,
                                   status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return CallResult.success({}, label=label, status_code=response.status_code)
        try:
            body = response.json()
        except ValueError as e:
            logger.error(f"{self.name}: {label} returned an undecodable body: {str(e)}")
            return CallResult.fail(FailureKind.INVALID_BODY, str(e), label=label, status_code=response.status_code)
        return CallResult.success(body, label=label, status_code=response.status_code)

    async def get(self, path: str, label: str, params: Optional[Dict[str, Any]] = None) -> CallResult:
        return await self.request('GET', path, label, params=params)

    async def post(self, path: str, label: str, json: Dict[str, Any]) -> CallResult:
        return await self.request('POST', path, label, json=json)

    async def put(self, path: str, label: str, json: Dict[str, Any]) -> CallResult:
        return await self.request('PUT', path, label, json=json)

    async def ping(self, path: str) -> bool:
        result = await self.get(path, f"{self.name} connection test")
        return result.ok

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "ApiGateway":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()
