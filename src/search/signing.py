# src/search/signing.py — v1
"""SigV4 request signing for the search endpoint.

Credentials come from the default botocore chain (environment, shared
config, container/instance role). When none can be resolved the request is
returned unsigned and the degradation is logged.

Resolving credentials can block on the network (instance metadata, container
role endpoints) and refreshable credentials renew inside ``add_auth``, so the
whole signing step runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.exceptions import BotoCoreError
from botocore.session import get_session

logger = logging.getLogger(__name__)


class RequestSigner:
    """Adds SigV4 authorization headers to outgoing search requests."""

    def __init__(
        self,
        region: str,
        service: str = "es",
        session: Any | None = None,
    ) -> None:
        """Initialize the signer.

        Args:
            region: Signing region.
            service: Signing service name ("es" for managed domains,
                "aoss" for serverless collections).
            session: botocore session (defaults to a fresh one).
        """
        self._region = region
        self._service = service
        self._session = session or get_session()

    async def sign(
        self,
        method: str,
        url: str,
        body: bytes,
        headers: dict[str, str],
    ) -> dict[str, str]:
        """Return ``headers`` plus authorization, or unchanged if unsigned."""
        return await asyncio.to_thread(self._sign, method, url, body, headers)

    def _sign(
        self,
        method: str,
        url: str,
        body: bytes,
        headers: dict[str, str],
    ) -> dict[str, str]:
        try:
            credentials = self._session.get_credentials()
        except BotoCoreError as exc:
            logger.warning("Returning unsigned request: %s", exc)
            return dict(headers)

        if credentials is None:
            logger.warning("Returning unsigned request: no credentials found")
            return dict(headers)

        request = AWSRequest(method=method, url=url, data=body, headers=headers)
        SigV4Auth(credentials, self._service, self._region).add_auth(request)
        return dict(request.headers.items())
