"""Firebase Realtime Database store over the REST API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import aiohttp

from binwatch.exceptions import BinStoreError

_logger = logging.getLogger(__name__)


class FirebaseDocumentStore:
    """Document store backed by the Firebase RTDB REST protocol.

    ``get`` / ``set`` / ``update`` map to ``GET`` / ``PUT`` / ``PATCH`` on
    ``<database_url>/<root_path>/<path>.json``. The database answers
    ``null`` for a missing node.
    """

    def __init__(
        self,
        database_url: str,
        http_session: aiohttp.ClientSession | None = None,
        *,
        root_path: str = "Trash-Bins",
        auth: str | None = None,
    ) -> None:
        self._base_url = database_url.rstrip("/")
        self._root_path = root_path.strip("/")
        self._external_session = http_session is not None
        self._http = http_session
        self._auth = auth

    def _session(self) -> aiohttp.ClientSession:
        if self._http is None:
            self._http = aiohttp.ClientSession()
        return self._http

    async def close(self) -> None:
        """Close the HTTP session if this store created it."""
        if self._external_session or self._http is None:
            return
        await self._http.close()
        self._http = None

    def _url(self, path: str) -> str:
        node = "/".join(part for part in (self._root_path, path.strip("/")) if part)
        return f"{self._base_url}/{quote(node, safe='/')}.json"

    async def _request(
        self,
        method: str,
        path: str,
        body: Mapping[str, Any] | None = None,
    ) -> Any:
        url = self._url(path)
        params = {"auth": self._auth} if self._auth else None

        _logger.debug("%s %s", method, url)

        try:
            async with self._session().request(
                method,
                url,
                params=params,
                data=json.dumps(body) if body is not None else None,
                headers={"content-type": "application/json; charset=UTF-8"},
            ) as resp:
                text = await resp.text()
                if resp.status // 100 != 2:
                    raise BinStoreError(
                        f"HTTP {resp.status} from {method} {path}: {text[:200]}",
                        path=path,
                        status_code=resp.status,
                    )
        except BinStoreError:
            raise
        except aiohttp.ClientError as exc:
            raise BinStoreError(f"{method} {path} failed: {exc}", path=path) from exc

        try:
            return json.loads(text) if text else None
        except json.JSONDecodeError as exc:
            raise BinStoreError(f"Invalid JSON from {method} {path}: {text[:200]}", path=path) from exc

    async def get(self, path: str) -> dict[str, Any] | None:
        result = await self._request("GET", path)
        if result is None:
            return None
        if not isinstance(result, dict):
            raise BinStoreError(f"Document at {path} is not an object", path=path)
        return result

    async def set(self, path: str, document: Mapping[str, Any]) -> None:
        await self._request("PUT", path, document)

    async def update(self, path: str, fields: Mapping[str, Any]) -> None:
        await self._request("PATCH", path, fields)
