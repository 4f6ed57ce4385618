# src/pipeline/fanout.py — v1
"""Relocation fan-out: copy the source to every identity's canonical path.

All copies run concurrently and are joined before returning. Each copy is
isolated: a failure is logged and recorded in its CopyOutcome, never raised,
so every destination is always attempted. Outcomes come back in identity
order regardless of completion order.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from relocator.core.errors import NoIdentityError
from relocator.core.models import ChecksumTagSet, CopyOutcome
from relocator.storage.base_object_store import BaseObjectStore
from relocator.storage.layout import canonical_path, extract_digest

logger = logging.getLogger(__name__)


class RelocationFanout:
    """Issue one tagged copy per candidate identity."""

    def __init__(self, store: BaseObjectStore) -> None:
        self._store = store

    async def relocate(
        self,
        bucket: str,
        source_key: str,
        identities: Sequence[str],
        tags: ChecksumTagSet,
    ) -> list[CopyOutcome]:
        """Copy ``source_key`` to each identity's canonical path.

        Returns:
            One CopyOutcome per identity, in input order.

        Raises:
            NoIdentityError: If ``identities`` is empty (no copy is issued).
        """
        if not identities:
            raise NoIdentityError(extract_digest(source_key))

        tagging = tags.as_tagging()
        return list(await asyncio.gather(*(
            self._copy_one(bucket, source_key, identity, tagging)
            for identity in identities
        )))

    async def _copy_one(
        self, bucket: str, source_key: str, identity: str, tagging: str,
    ) -> CopyOutcome:
        destination = identity
        try:
            destination = canonical_path(identity)
            await self._store.copy(bucket, source_key, destination, tagging)
        except Exception as exc:
            logger.error(
                "Copy to %s failed: %s", destination, exc,
                extra={"data": {"identity": identity, "error": repr(exc)}},
            )
            return CopyOutcome(destination=destination, succeeded=False, error=str(exc))
        return CopyOutcome(destination=destination, succeeded=True)
