# src/search/client.py — v1
"""Search capability: abstract interface and an httpx-backed implementation."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from relocator.search.signing import RequestSigner

logger = logging.getLogger(__name__)


class BaseSearchClient(ABC):
    """Sends a query body to the configured index and returns the response."""

    @abstractmethod
    async def search(self, body: dict[str, Any]) -> dict[str, Any]:
        """Run a ``_search`` query.

        Raises:
            httpx.HTTPError: If the endpoint is unreachable or answers an error.
            ValueError: If the response body is not a JSON object.
        """


class HttpSearchClient(BaseSearchClient):
    """POSTs queries to ``{base_url}/{index}/_search``."""

    def __init__(
        self,
        base_url: str,
        index: str,
        signer: RequestSigner | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}/{index}/_search"
        self._signer = signer
        self._timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return self._url

    async def search(self, body: dict[str, Any]) -> dict[str, Any]:
        payload = json.dumps(body).encode("utf-8")
        headers = {"Content-Type": "application/json"}
        if self._signer is not None:
            headers = await self._signer.sign("POST", self._url, payload, headers)

        async with httpx.AsyncClient(
            timeout=self._timeout, transport=self._transport,
        ) as client:
            response = await client.post(self._url, content=payload, headers=headers)
        response.raise_for_status()

        logger.debug("Search response (%d bytes)", len(response.content))
        document = response.json()
        if not isinstance(document, dict):
            raise ValueError("Search response is not a JSON object")
        return document
