"""REST store backend - PostgREST rows + GoTrue identity over HTTP."""

from typing import Any

import httpx

from memoboard.core.logging import get_logger
from memoboard.core.types import Identity
from memoboard.core.typing import Filters, Record
from memoboard.store.base import Order, StoreAccessor, StoreAuthError, StoreBackend, StoreError

logger = get_logger("store.rest")

REST_PATH = "/rest/v1"
AUTH_PATH = "/auth/v1"


class RestStore(StoreBackend):
    """HTTP connection pool to a PostgREST/GoTrue compatible service.

    The pool carries only the public API key. Caller credentials are
    attached per request by the accessor, never stored on the client.
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.url,
                headers={"apikey": self.api_key},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def connect(self) -> None:
        # Client is created lazily; touch it so the pool exists before requests
        _ = self.client
        logger.info(f"Using REST store: {self.url}")

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def accessor(self, token: str | None = None) -> "RestAccessor":
        return RestAccessor(self.client, self.api_key, token)

    async def health_check(self) -> bool:
        """Check if the auth service answers."""
        try:
            response = await self.client.get(f"{AUTH_PATH}/health")
            return response.status_code == 200
        except httpx.HTTPError as e:
            logger.warning(f"REST store health check failed: {e}")
            return False


class RestAccessor(StoreAccessor):
    """Per-request accessor; sends the caller token (or the anon key) as bearer."""

    def __init__(self, client: httpx.AsyncClient, api_key: str, token: str | None = None):
        self._client = client
        self._api_key = api_key
        self.token = token

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token or self._api_key}"}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: Record | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        try:
            response = await self._client.request(
                method,
                path,
                params=params,
                json=json,
                headers={**self.headers, **(headers or {})},
            )
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            logger.error(f"Store HTTP error: {method} {path} -> {e.response.status_code} - {e.response.text}")
            if e.response.status_code in (401, 403):
                raise StoreAuthError(f"Store rejected credential ({e.response.status_code})") from e
            raise StoreError(f"Store returned {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"Store request failed: {method} {path}: {e!r}")
            raise StoreError(f"Store request failed: {type(e).__name__}") from e

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Store returned non-JSON body: {response.request.method} {response.request.url.path}")
            raise StoreError("Store returned a malformed response") from e

    def _rows(self, response: httpx.Response) -> list[Record]:
        rows = self._json(response)
        if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
            logger.error(f"Store returned {type(rows).__name__} where rows were expected")
            raise StoreError("Store returned a malformed response")
        return rows

    @staticmethod
    def _filter_params(filters: Filters | None) -> dict[str, str]:
        return {column: f"eq.{value}" for column, value in (filters or {}).items()}

    async def insert(self, table: str, record: Record) -> Record:
        response = await self._request(
            "POST",
            f"{REST_PATH}/{table}",
            json=record,
            headers={"Prefer": "return=representation"},
        )
        rows = self._rows(response)
        if not rows:
            raise StoreError(f"Insert into {table} returned no row")
        return rows[0]

    async def select(
        self,
        table: str,
        filters: Filters | None = None,
        order: Order | None = None,
    ) -> list[Record]:
        params = {"select": "*", **self._filter_params(filters)}
        if order:
            params["order"] = f"{order.column}.{'desc' if order.descending else 'asc'}"
        response = await self._request("GET", f"{REST_PATH}/{table}", params=params)
        return self._rows(response)

    async def delete(self, table: str, filters: Filters) -> int:
        if not filters:
            raise StoreError("Refusing to delete without filters")
        response = await self._request(
            "DELETE",
            f"{REST_PATH}/{table}",
            params=self._filter_params(filters),
            headers={"Prefer": "return=representation"},
        )
        if not response.content:
            return 0
        return len(self._rows(response))

    async def get_user(self) -> Identity:
        if not self.token:
            raise StoreAuthError("No credential")
        response = await self._request("GET", f"{AUTH_PATH}/user")
        data = self._json(response)
        if not isinstance(data, dict) or not data.get("id"):
            raise StoreAuthError("Store returned no user")
        return Identity(id=str(data["id"]), email=data.get("email"))
