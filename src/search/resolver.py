# src/search/resolver.py — v1
"""Identity resolver: content digest -> candidate FileSet identities.

Queries the search index for documents of the FileSet entity type whose
sha256 digest matches exactly, and projects each ranked hit to its ``id``.
An empty result is returned as-is; deciding whether that is fatal is the
caller's job.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from relocator.core.errors import ResolutionError
from relocator.search.client import BaseSearchClient

logger = logging.getLogger(__name__)

ENTITY_TYPE_FIELD = "model.name.keyword"
ENTITY_TYPE = "FileSet"
DIGEST_FIELD = "digests.sha256.keyword"
IDENTITY_FIELD = "id"


def build_query(digest: str, max_results: int) -> dict[str, Any]:
    """Build the exact-match query body for a digest."""
    return {
        "_source": [IDENTITY_FIELD],
        "size": max_results,
        "query": {
            "bool": {
                "must": [
                    {"match": {ENTITY_TYPE_FIELD: ENTITY_TYPE}},
                    {"match": {DIGEST_FIELD: digest}},
                ],
            },
        },
    }


def parse_hits(document: dict[str, Any]) -> list[str]:
    """Project a search response to identities, in rank order, de-duplicated.

    Raises:
        ResolutionError: If the response has no ``hits.hits`` list.
    """
    hits = document.get("hits")
    entries = hits.get("hits") if isinstance(hits, dict) else None
    if not isinstance(entries, list):
        raise ResolutionError("search response has no hits list")

    identities: list[str] = []
    seen: set[str] = set()
    for hit in entries:
        source = hit.get("_source") if isinstance(hit, dict) else None
        identity = source.get(IDENTITY_FIELD) if isinstance(source, dict) else None
        if identity is None or identity == "":
            logger.warning("Skipping search hit without %r: %r", IDENTITY_FIELD, hit)
            continue
        identity = str(identity)
        if identity in seen:
            continue
        seen.add(identity)
        identities.append(identity)
    return identities


class IdentityResolver:
    """Resolve content digests through a search capability."""

    def __init__(self, client: BaseSearchClient) -> None:
        self._client = client

    async def resolve(self, digest: str, max_results: int = 1) -> list[str]:
        """Return up to ``max_results`` candidate identities for ``digest``.

        Args:
            digest: Content digest (non-empty).
            max_results: Hit cap; 1 for single-destination relocation.

        Returns:
            Identities in search rank order; empty when nothing matches.

        Raises:
            ResolutionError: If the digest is empty, or the search capability
                is unreachable or answers with malformed content.
        """
        if not digest:
            raise ResolutionError("empty content digest")

        body = build_query(digest, max_results)
        try:
            document = await self._client.search(body)
        except httpx.HTTPError as exc:
            raise ResolutionError(f"search request failed for {digest}: {exc}") from exc
        except ValueError as exc:
            raise ResolutionError(f"malformed search response for {digest}: {exc}") from exc

        identities = parse_hits(document)
        logger.info(
            "Resolved digest %s to %d identities", digest, len(identities),
            extra={"data": {"identities": identities}},
        )
        return identities
