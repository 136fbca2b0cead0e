"""Ratings store for a hosted Postgres exposed through PostgREST (Supabase).

Uses the REST query syntax directly over httpx:

    GET  /rest/v1/ratings?select=*&order=created_at.desc
    POST /rest/v1/ratings   (Prefer: return=representation)
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from site_ratings.lib.exceptions import StoreConnectionError, StoreError
from site_ratings.lib.ratings.retry import TRANSIENT_ERROR_PHRASE
from site_ratings.lib.ratings.store import RatingStore, Row

logger = logging.getLogger(__name__)


class RestRatingStore(RatingStore):
    """Ratings collection behind a PostgREST endpoint."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the REST store.

        Args:
            base_url: Project root, e.g. ``https://xyz.supabase.co``.
            api_key: Project API key, sent as ``apikey`` and bearer token.
            timeout_seconds: Transport timeout per request.
            transport: Optional httpx transport (tests use MockTransport).
        """
        self.rest_url = f"{base_url.rstrip('/')}/rest/v1/{self.collection}"
        self.timeout_seconds = timeout_seconds
        self._transport = transport
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
        }

    async def select_all(self) -> List[Row]:
        response = await self._request(
            "GET",
            params={"select": "*", "order": "created_at.desc"},
        )
        rows = response.json()
        if not isinstance(rows, list):
            raise StoreError("Unexpected response from ratings store: expected a list of rows")
        return rows

    async def insert_one(self, row: Row) -> Row:
        payload = {"rating": row["rating"], "comment": row.get("comment")}
        response = await self._request(
            "POST",
            json=[payload],
            headers={"Prefer": "return=representation"},
        )
        rows = response.json()
        if not rows:
            raise StoreError("Ratings store did not return the inserted row")
        inserted = rows[0] if isinstance(rows, list) else rows
        logger.info('Inserted rating %s', inserted.get("id"))
        return inserted

    async def _request(
        self,
        method: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> httpx.Response:
        request_headers = dict(self._headers)
        if headers:
            request_headers.update(headers)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    self.rest_url,
                    params=params,
                    json=json,
                    headers=request_headers,
                )
        except (httpx.ConnectError, httpx.ConnectTimeout) as e:
            raise StoreConnectionError(
                f"{TRANSIENT_ERROR_PHRASE} to ratings store: {e}"
            ) from e
        except httpx.HTTPError as e:
            raise StoreError(f"Ratings store request failed: {e}") from e

        if response.status_code >= 400:
            raise StoreError(
                self._error_message(response),
                details={"status_code": response.status_code},
            )
        return response

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """PostgREST errors carry ``message``; fall back to the status line."""
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return f"Ratings store returned HTTP {response.status_code}"
