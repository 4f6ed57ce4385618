# tests/conftest.py — v1
"""Shared test fixtures for unit tests.

Provides sample invocation events, a mocked object store, and a mocked
search client. No external dependencies; all I/O is mocked.
"""

from __future__ import annotations

import logging
from typing import Any
from unittest.mock import AsyncMock

import pytest

from relocator.core.models import ChecksumTagSet, InvocationEnvelope
from relocator.logging.context import clear_context
from relocator.search.client import BaseSearchClient
from relocator.storage.base_object_store import BaseObjectStore

DIGEST = "abc123def4567890abc123def4567890abc123def4567890abc123def4567890"
IDENTITY = "1a2b3c4d5e6f7a8b9c0d"
BUCKET = "source-bucket"
SOURCE_KEY = f"uploads/2024/{DIGEST}"


def make_search_response(*identities: Any) -> dict[str, Any]:
    """Search response with one hit per identity, in rank order."""
    return {
        "took": 3,
        "hits": {
            "total": {"value": len(identities), "relation": "eq"},
            "hits": [{"_index": "meadow", "_source": {"id": i}} for i in identities],
        },
    }


def make_event(
    key: str = SOURCE_KEY,
    bucket_arn: str = f"arn:aws:s3:::{BUCKET}",
    task_id: str = "task-1",
) -> dict[str, Any]:
    """Batch invocation event carrying a single task."""
    return {
        "invocationSchemaVersion": "1.0",
        "invocationId": "inv-123",
        "job": {"id": "job-1"},
        "tasks": [{"taskId": task_id, "s3Key": key, "s3BucketArn": bucket_arn}],
    }


# === FIXTURES: Sample data ===


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture(autouse=True)
def relocator_logger():
    """Restore the package logger after tests that call setup_logging()."""
    root = logging.getLogger("relocator")
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def sample_event() -> dict[str, Any]:
    return make_event()


@pytest.fixture
def sample_envelope(sample_event: dict[str, Any]) -> InvocationEnvelope:
    return InvocationEnvelope.model_validate(sample_event)


@pytest.fixture
def sample_tags() -> ChecksumTagSet:
    return ChecksumTagSet(sha1="da39a3ee5e6b4b0d3255bfef95601890afd80709", sha256=DIGEST)


# === FIXTURES: Mock collaborators ===


@pytest.fixture
def mock_store(sample_tags: ChecksumTagSet) -> AsyncMock:
    """Object store whose source carries both checksum fields."""
    store = AsyncMock(spec=BaseObjectStore)
    store.head.return_value = {
        "ContentLength": 42,
        "Metadata": {"sha1": sample_tags.sha1, "sha256": sample_tags.sha256},
    }
    store.copy.return_value = None
    store.delete.return_value = None
    return store


@pytest.fixture
def mock_search_client() -> AsyncMock:
    """Search client resolving the sample digest to one identity."""
    client = AsyncMock(spec=BaseSearchClient)
    client.search.return_value = make_search_response(IDENTITY)
    return client


# === FIXTURES: Factories ===


@pytest.fixture
def search_response():
    """Factory building a search response from identities."""
    return make_search_response


@pytest.fixture
def event_factory():
    """Factory building a single-task invocation event."""
    return make_event
