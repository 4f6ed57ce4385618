# src/pipeline/processor.py — v1
"""Task processor: runs one invocation through the relocation pipeline.

Stages, in order:
    resolving   digest -> candidate identities (search)
    validating  source metadata must carry sha1 + sha256
    relocating  concurrent tagged copy per identity, joined
    aggregating tally, then delete the original if allowed

Any failure ends the task as PermanentFailure. Nothing is retried here; the
orchestrator re-invokes, which is safe because destinations are derived
deterministically and tags are replaced, not merged.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from relocator.core.errors import (
    InvalidTaskError,
    PartialCopyFailure,
    RelocationError,
    ResolutionError,
)
from relocator.core.models import InvocationEnvelope, InvocationResponse, WorkItem
from relocator.logging.context import set_stage, task_context
from relocator.pipeline.aggregator import OutcomeAggregator
from relocator.pipeline.envelope import build_response
from relocator.pipeline.fanout import RelocationFanout
from relocator.pipeline.validator import ChecksumValidator
from relocator.search.resolver import IdentityResolver
from relocator.storage.layout import bucket_from_arn, extract_digest

if TYPE_CHECKING:
    from relocator.config.settings import Settings
    from relocator.search.client import BaseSearchClient
    from relocator.storage.base_object_store import BaseObjectStore

logger = logging.getLogger(__name__)


class TaskProcessor:
    """Process the first task of an invocation and build the reply."""

    def __init__(
        self,
        search_client: BaseSearchClient,
        store: BaseObjectStore,
        max_results: int = 1000,
        delete_originals: bool = False,
    ) -> None:
        self._resolver = IdentityResolver(search_client)
        self._validator = ChecksumValidator(store)
        self._fanout = RelocationFanout(store)
        self._aggregator = OutcomeAggregator(store)
        self._max_results = max_results
        self._delete_originals = delete_originals

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        search_client: BaseSearchClient | None = None,
        store: BaseObjectStore | None = None,
    ) -> TaskProcessor:
        """Build a processor wired to the configured search index and store.

        Raises:
            ConfigurationError: If the search endpoint or index is unset.
        """
        if search_client is None:
            from relocator.search.client_factory import create_search_client

            search_client = create_search_client(settings)
        if store is None:
            from relocator.storage.store_factory import create_object_store

            store = create_object_store(settings)

        return cls(
            search_client=search_client,
            store=store,
            max_results=settings.search_max_results,
            delete_originals=settings.delete_originals,
        )

    async def process(self, envelope: InvocationEnvelope) -> InvocationResponse:
        """Run the pipeline for ``envelope.tasks[0]``.

        Never raises on task failure: the outcome is encoded in the reply.
        """
        item = envelope.item
        with task_context(envelope.invocation_id, item.task_id):
            logger.info("event", extra={"data": envelope.model_dump(by_alias=True)})

            try:
                result_string = await self._run(item)
                result_code = "Succeeded"
            except RelocationError as exc:
                logger.error("Task failed: %s", exc.result_string)
                result_code, result_string = "PermanentFailure", exc.result_string
            except Exception as exc:
                logger.exception("Task failed unexpectedly")
                result_code, result_string = "PermanentFailure", f"UnexpectedError: {exc}"
            finally:
                set_stage(None)

            response = build_response(envelope, item.task_id, result_code, result_string)
            logger.info("result", extra={"data": response.to_wire()})
        return response

    async def _run(self, item: WorkItem) -> str:
        key = item.s3_key
        try:
            bucket = bucket_from_arn(item.s3_bucket_arn)
        except ValueError as exc:
            raise InvalidTaskError(str(exc)) from exc
        try:
            digest = extract_digest(key)
        except ValueError as exc:
            raise ResolutionError(str(exc)) from exc

        set_stage("resolving")
        identities = await self._resolver.resolve(digest, self._max_results)

        set_stage("validating")
        tags = await self._validator.validate(bucket, key)

        set_stage("relocating")
        outcomes = await self._fanout.relocate(bucket, key, identities, tags)

        set_stage("aggregating")
        result = await self._aggregator.aggregate(
            outcomes, bucket, key, self._delete_originals, expected=len(identities),
        )
        if not result.all_succeeded:
            failed = len(identities) - sum(o.succeeded for o in outcomes)
            raise PartialCopyFailure(failed, len(identities), result.destinations)
        return result.destinations
