"""HTTP client for the Seoul bus information API."""

import itertools
import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import unquote

import aiohttp

from blindroute.adapters.api_request_logger import log_api_request
from blindroute.adapters.request_pacer import RequestPacer
from blindroute.adapters.seoul_bus_api.constants import (
    HEADER_CODE_NO_RESULT,
    HEADER_CODE_OK,
    SEOUL_BUS_BASE_URL,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession


class SeoulBusHttpClient:
    """Sends GET requests to the bus registry, rotating across service keys."""

    def __init__(
        self,
        session: "ClientSession | None",
        service_keys: list[str],
        base_url: str = SEOUL_BUS_BASE_URL,
        timeout_seconds: float = 10,
        pacer: RequestPacer | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            session: aiohttp session used for all requests.
            service_keys: API keys; URL-encoded keys are accepted and decoded.
            base_url: Base URL of the REST API.
            timeout_seconds: Total timeout per request.
            pacer: Optional request pacer shared by all calls of this client.
        """
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._pacer = pacer or RequestPacer("seoul_bus_api")
        decoded = [unquote(key) for key in service_keys if key]
        if not decoded:
            logger.warning("No bus registry service keys configured; requests will be rejected")
        self._keys = itertools.cycle(decoded) if decoded else None

    def _next_service_key(self) -> str:
        """Return the next key in rotation."""
        return next(self._keys) if self._keys is not None else ""

    async def fetch_items(self, path: str, params: dict[str, str]) -> list[dict[str, Any]] | None:
        """GET ``path`` and return ``msgBody.itemList``.

        Returns:
            The item list (empty when the API reports no result), or None if the
            request failed.
        """
        if not self._session:
            return None

        url = f"{self._base_url}/{path}"
        query = {"serviceKey": self._next_service_key(), **params, "resultType": "json"}
        log_api_request("GET", url, params=query)

        await self._pacer.acquire()
        try:
            async with self._session.get(url, params=query, timeout=self._timeout) as response:
                return await self._handle_response(response, url)
        except Exception as e:
            logger.warning(f"Error requesting bus registry {path}: {e}")
            return None

    async def _handle_response(
        self, response: "ClientResponse", url: str
    ) -> list[dict[str, Any]] | None:
        """Handle a bus registry response."""
        if response.status != 200:
            response_text = await response.text()
            logger.warning(
                f"Bus registry returned status {response.status} for {url}: {response_text[:200]}"
            )
            return None

        # The API does not always label JSON bodies with a JSON content type
        data = await response.json(content_type=None)
        return self._extract_items(data, url)

    @staticmethod
    def _extract_items(data: Any, url: str) -> list[dict[str, Any]] | None:
        """Pull the item list out of a response body."""
        if not isinstance(data, dict):
            logger.warning(f"Unexpected bus registry response for {url}: {str(data)[:200]}")
            return None

        header = data.get("msgHeader") or {}
        header_cd = str(header.get("headerCd", HEADER_CODE_OK))
        if header_cd == HEADER_CODE_NO_RESULT:
            return []
        if header_cd != HEADER_CODE_OK:
            logger.warning(
                f"Bus registry error {header_cd} for {url}: {header.get('headerMsg', 'unknown error')}"
            )
            return None

        items = (data.get("msgBody") or {}).get("itemList")
        if items is None:
            return []
        if isinstance(items, dict):
            return [items]
        return [item for item in items if isinstance(item, dict)]
