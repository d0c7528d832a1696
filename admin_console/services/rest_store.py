"""Remote store client for the hosted PostgREST API."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

import httpx

from admin_console.errors import StoreError
from admin_console.services.store import RemoteStore, Row

logger = logging.getLogger(__name__)


class RestStore(RemoteStore):
    """Store backed by the hosted database's REST endpoint (``/rest/v1/<relation>``)."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    def _url(self, relation: str) -> str:
        return f"{self.base_url}/rest/v1/{relation}"

    def _headers(self, prefer: str | None = None) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        relation: str,
        params: dict[str, str] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(
                    method,
                    self._url(relation),
                    params=params,
                    json=json,
                    headers=self._headers(prefer),
                )
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling store ({method} {relation}): {e}")
            raise StoreError(f"Could not reach the store: {e}") from e

        if response.is_error:
            raise self._error_from_response(response)
        return response

    def _json(self, response: httpx.Response, relation: str) -> Any:
        """Decode a success body, treating an empty or malformed one as a store failure."""
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Store returned a non-JSON body for {relation}: {e}")
            raise StoreError(
                f"Store returned an unreadable response for {relation}",
                status_code=response.status_code,
            ) from e

    def _error_from_response(self, response: httpx.Response) -> StoreError:
        """Build a StoreError from the store's JSON error body when there is one."""
        message = f"Store responded with HTTP {response.status_code}"
        code = None
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("message") or message
            code = body.get("code")
        return StoreError(message, status_code=response.status_code, code=code)

    async def select(
        self,
        relation: str,
        columns: Sequence[str],
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[Row]:
        params = {"select": ",".join(columns)}
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        response = await self._request("GET", relation, params=params)
        return self._json(response, relation)

    async def count(self, relation: str) -> int:
        response = await self._request(
            "HEAD", relation, params={"select": "*"}, prefer="count=exact"
        )
        # Content-Range looks like "0-24/3573", or "*/0" for an empty relation
        content_range = response.headers.get("content-range", "")
        _, _, total = content_range.partition("/")
        if not total.isdigit():
            raise StoreError(
                f"Store returned no row count for {relation}", status_code=response.status_code
            )
        return int(total)

    async def insert(self, relation: str, row: Mapping[str, Any]) -> Row:
        response = await self._request(
            "POST", relation, json=dict(row), prefer="return=representation"
        )
        rows = self._json(response, relation)
        return rows[0] if rows else dict(row)

    async def delete(self, relation: str, match: Mapping[str, Any]) -> int:
        if not match:
            raise StoreError("Refusing to delete without a filter", status_code=400)
        params = {column: f"eq.{value}" for column, value in match.items()}
        response = await self._request(
            "DELETE", relation, params=params, prefer="return=representation"
        )
        return len(self._json(response, relation))

    async def upsert(self, relation: str, row: Mapping[str, Any], on_conflict: str) -> Row:
        response = await self._request(
            "POST",
            relation,
            params={"on_conflict": on_conflict},
            json=dict(row),
            prefer="resolution=merge-duplicates,return=representation",
        )
        rows = self._json(response, relation)
        return rows[0] if rows else dict(row)
