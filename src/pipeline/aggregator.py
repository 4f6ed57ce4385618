# src/pipeline/aggregator.py — v1
"""Outcome aggregator and original cleanup.

The original is removed only when every destination copy succeeded and
cleanup is enabled. A failed delete raises CleanupError: the canonical
copies already exist, and re-invocation repeats idempotent copies before
retrying the delete.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from relocator.core.errors import CleanupError
from relocator.core.models import AggregateResult, CopyOutcome
from relocator.storage.base_object_store import BaseObjectStore

logger = logging.getLogger(__name__)


class OutcomeAggregator:
    """Tally fan-out outcomes and conditionally delete the original."""

    def __init__(self, store: BaseObjectStore) -> None:
        self._store = store

    async def aggregate(
        self,
        outcomes: Sequence[CopyOutcome],
        bucket: str,
        source_key: str,
        delete_enabled: bool,
        expected: int | None = None,
    ) -> AggregateResult:
        """Tally outcomes and clean up the original when safe.

        Args:
            outcomes: One CopyOutcome per attempted destination.
            bucket: Bucket holding the original.
            source_key: Key of the original.
            delete_enabled: Whether cleanup is configured.
            expected: Number of identities fanned out; a shorter outcome
                list counts as failure.

        Returns:
            AggregateResult with the comma-joined attempted destinations.

        Raises:
            CleanupError: If all copies succeeded but the delete failed.
        """
        expected = len(outcomes) if expected is None else expected
        all_succeeded = (
            len(outcomes) == expected
            and expected > 0
            and all(o.succeeded for o in outcomes)
        )
        destinations = ",".join(o.destination for o in outcomes)

        if not all_succeeded:
            logger.warning(
                "Not all copies succeeded (%d of %d ok), keeping original",
                sum(o.succeeded for o in outcomes), expected,
            )
            return AggregateResult(False, destinations)

        if delete_enabled:
            try:
                await self._store.delete(bucket, source_key)
            except Exception as exc:
                logger.error(
                    "Copies exist but deleting s3://%s/%s failed: %s",
                    bucket, source_key, exc,
                )
                raise CleanupError(
                    f"failed to delete s3://{bucket}/{source_key} after copying "
                    f"to {destinations}: {exc}"
                ) from exc

        return AggregateResult(True, destinations)
