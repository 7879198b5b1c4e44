"""Hosted table store client (Supabase PostgREST API).

Talks to ``{url}/rest/v1/{table}`` with httpx. Every failure, whether an
HTTP error status or a transport problem, surfaces as StoreError with the
backend's message.
"""

import logging
from typing import Optional

import httpx

from ..config import config
from ..models.property import PropertyDraft, PropertyRecord
from .base import PropertyStore, StoreError, build_row, projected_fields

logger = logging.getLogger(__name__)


def _error_message(response: httpx.Response) -> str:
    """Extract the human-readable message from a PostgREST error body."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {response.status_code}: {response.text[:200] or response.reason_phrase}"


class SupabaseStore(PropertyStore):
    """Property store backed by a Supabase table.

    Example:
        store = SupabaseStore(url="https://xyz.supabase.co", key="anon-key")
        rows = await store.select_all(order_by="created_at")
    """

    name = "supabase"

    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
        table: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            url: Project URL. Defaults to AUCTIONDASH_SUPABASE_URL.
            key: API key. Defaults to AUCTIONDASH_SUPABASE_KEY.
            table: Table name. Defaults to AUCTIONDASH_TABLE_NAME.
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.url = (url or config.supabase_url or "").rstrip("/")
        self.key = key or config.supabase_key or ""
        self.table = table or config.table_name
        self.timeout = timeout or config.request_timeout
        self._transport = transport

    def is_available(self) -> bool:
        return bool(self.url and self.key)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=f"{self.url}/rest/v1",
            headers={
                "apikey": self.key,
                "Authorization": f"Bearer {self.key}",
            },
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _request(self, method: str, **kwargs) -> httpx.Response:
        if not self.is_available():
            raise StoreError(self.name, "Supabase URL and key are not configured")

        async with self._client() as client:
            try:
                resp = await client.request(method, f"/{self.table}", **kwargs)
                resp.raise_for_status()
            except httpx.HTTPStatusError as e:
                message = _error_message(e.response)
                logger.error(f"{method} /{self.table} failed: {message}")
                raise StoreError(self.name, message) from e
            except httpx.HTTPError as e:
                logger.error(f"{method} /{self.table} failed: {e}")
                raise StoreError(self.name, str(e) or type(e).__name__) from e
        return resp

    def _parse_records(self, resp: httpx.Response) -> list[PropertyRecord]:
        """Decode a row list, reporting malformed bodies as StoreError."""
        try:
            return [PropertyRecord(**data) for data in resp.json()]
        except (ValueError, TypeError) as e:
            # ValidationError and JSONDecodeError are both ValueErrors
            logger.error(f"Unexpected response body from /{self.table}: {e}")
            raise StoreError(self.name, f"Unexpected response body: {e}") from e

    async def insert(self, draft: PropertyDraft) -> list[PropertyRecord]:
        row = build_row(draft)
        resp = await self._request(
            "POST",
            json=[row],
            headers={"Prefer": "return=representation"},
        )
        records = self._parse_records(resp)
        logger.info(f"Inserted property {draft.case_number} into {self.table}")
        return records

    async def select_all(
        self,
        fields: Optional[list[str]] = None,
        order_by: Optional[str] = None,
        descending: bool = True,
    ) -> list[PropertyRecord]:
        columns = projected_fields(fields)
        params = {"select": ",".join(columns) if columns else "*"}
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"

        resp = await self._request("GET", params=params)
        records = self._parse_records(resp)
        logger.debug(f"Fetched {len(records)} properties from {self.table}")
        return records
