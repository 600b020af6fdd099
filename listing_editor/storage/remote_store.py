# listing_editor/storage/remote_store.py

"""Remote data store and object store clients.

The editor only depends on the two small protocols below.  The
Supabase implementations talk to PostgREST (``/rest/v1``) and the
storage API (``/storage/v1``) over a ``curl_cffi`` session.  Every
call is blocking; callers push them onto a worker thread.
"""

import json
import logging
from typing import Any, Protocol
from urllib.parse import quote

from curl_cffi import requests as curl_requests

from listing_editor.config.settings import Settings

logger = logging.getLogger("listing_editor.remote")


class RemoteStoreError(Exception):
    """A remote call failed (transport, HTTP status or configuration)."""

    def __init__(
        self, message: str, status_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class DataStore(Protocol):
    """Row-level access to product tables."""

    def get_by_id(
        self, table: str, record_id: str
    ) -> dict[str, Any] | None: ...

    def update(
        self, table: str, record_id: str, fields: dict[str, Any]
    ) -> None: ...

    def delete(self, table: str, where: dict[str, str]) -> None: ...

    def insert(
        self, table: str, rows: list[dict[str, Any]]
    ) -> None: ...

    def list_where(
        self,
        table: str,
        where: dict[str, str],
        columns: str = "*",
    ) -> list[dict[str, Any]]: ...


class ObjectStore(Protocol):
    """Blob storage with public URLs."""

    def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> None: ...

    def get_public_url(self, bucket: str, path: str) -> str: ...


def _eq_filters(where: dict[str, str]) -> dict[str, str]:
    """Translate column equality into PostgREST query params."""
    return {column: f"eq.{value}" for column, value in where.items()}


class _SupabaseClient:
    """Shared session, auth headers and status handling."""

    def __init__(
        self,
        url: str | None = None,
        key: str | None = None,
        session: Any | None = None,
    ) -> None:
        self.settings = Settings()
        self.base_url = (url or self.settings.SUPABASE_URL).rstrip("/")
        self.key = key if key is not None else self.settings.SUPABASE_KEY
        self.session = session or curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._timeout = self.settings.REQUEST_TIMEOUT

    def _headers(self, **extra: str) -> dict[str, str]:
        return {
            "apikey": self.key,
            "Authorization": f"Bearer {self.key}",
            **extra,
        }

    def _require_config(self) -> None:
        if not self.base_url or not self.key:
            raise RemoteStoreError(
                "SUPABASE_URL and SUPABASE_KEY must be configured"
            )

    def _request(
        self, method: str, url: str, **kwargs: Any
    ) -> Any:
        """Issue one request; any failure becomes RemoteStoreError."""
        self._require_config()
        try:
            resp = self.session.request(
                method, url, timeout=self._timeout, **kwargs
            )
        except Exception as exc:
            logger.warning(
                "%s %s failed: %s", method, url, exc, exc_info=True
            )
            raise RemoteStoreError(
                f"{method} {url} failed: {exc}"
            ) from exc

        if resp.status_code >= 400:
            detail = resp.text[:300]
            logger.warning(
                "%s %s -> HTTP %d: %s",
                method,
                url,
                resp.status_code,
                detail,
            )
            raise RemoteStoreError(
                f"HTTP {resp.status_code} from {method} {url}: {detail}",
                status_code=resp.status_code,
            )
        return resp


class SupabaseDataStore(_SupabaseClient):
    """PostgREST-backed implementation of :class:`DataStore`."""

    def _table_url(self, table: str) -> str:
        return f"{self.base_url}/rest/v1/{table}"

    def get_by_id(
        self, table: str, record_id: str
    ) -> dict[str, Any] | None:
        """Fetch one row by ``id``; ``None`` when it does not exist."""
        rows = self.list_where(table, {"id": record_id})
        if not rows:
            return None
        return rows[0]

    def update(
        self, table: str, record_id: str, fields: dict[str, Any]
    ) -> None:
        self._request(
            "PATCH",
            self._table_url(table),
            params=_eq_filters({"id": record_id}),
            headers=self._headers(
                **{
                    "Content-Type": "application/json",
                    "Prefer": "return=minimal",
                }
            ),
            data=json.dumps(fields, ensure_ascii=False),
        )

    def delete(self, table: str, where: dict[str, str]) -> None:
        # An unfiltered DELETE would wipe the table
        if not where:
            raise RemoteStoreError("Refusing to delete without a filter")
        self._request(
            "DELETE",
            self._table_url(table),
            params=_eq_filters(where),
            headers=self._headers(Prefer="return=minimal"),
        )

    def insert(self, table: str, rows: list[dict[str, Any]]) -> None:
        if not rows:
            return
        self._request(
            "POST",
            self._table_url(table),
            headers=self._headers(
                **{
                    "Content-Type": "application/json",
                    "Prefer": "return=minimal",
                }
            ),
            data=json.dumps(rows, ensure_ascii=False),
        )

    def list_where(
        self,
        table: str,
        where: dict[str, str],
        columns: str = "*",
    ) -> list[dict[str, Any]]:
        """Rows matching *where*, in the order the store returns them."""
        resp = self._request(
            "GET",
            self._table_url(table),
            params={"select": columns, **_eq_filters(where)},
            headers=self._headers(Accept="application/json"),
        )
        try:
            rows: list[dict[str, Any]] = resp.json()
        except ValueError as exc:
            raise RemoteStoreError(
                f"Malformed JSON from {table}: {exc}"
            ) from exc
        if not isinstance(rows, list) or not all(
            isinstance(row, dict) for row in rows
        ):
            raise RemoteStoreError(
                f"Unexpected response shape from {table}: {rows!r:.200}"
            )
        return rows


class SupabaseObjectStore(_SupabaseClient):
    """Storage-API-backed implementation of :class:`ObjectStore`."""

    def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> None:
        self._request(
            "POST",
            f"{self.base_url}/storage/v1/object/{bucket}/{quote(path)}",
            headers=self._headers(**{"Content-Type": content_type}),
            data=data,
        )
        logger.debug(
            "Uploaded %d bytes to %s/%s", len(data), bucket, path
        )

    def get_public_url(self, bucket: str, path: str) -> str:
        if not self.base_url or not bucket or not path:
            raise RemoteStoreError("Could not obtain a public URL")
        return (
            f"{self.base_url}/storage/v1/object/public/"
            f"{bucket}/{quote(path)}"
        )
