# src/api/handler.py — v1
"""Serverless entry point invoked once per batch task.

Usage (function handler setting):
    relocator.api.handler.handler

Task failures are reported inside the returned dict. A malformed event
(no ``tasks`` array, or an empty one) raises, leaving the orchestrator to
apply ``treatMissingKeysAs``.

The default processor and its clients are built once per container and
reused by warm invocations.
"""

from __future__ import annotations

import asyncio
from functools import lru_cache
from typing import Any

from relocator.config.settings import Settings, load_settings
from relocator.core.models import InvocationEnvelope
from relocator.logging.logger import setup_logging_from_settings
from relocator.pipeline.processor import TaskProcessor


def handler(
    event: dict[str, Any],
    context: Any = None,
    settings: Settings | None = None,
    processor: TaskProcessor | None = None,
) -> dict[str, Any]:
    """Process one batch invocation event and return the reply dict.

    Args:
        event: Invocation JSON (invocationId, invocationSchemaVersion, tasks).
        context: Runtime context object (unused).
        settings: Settings override. When None, the environment settings are
            loaded once and the resulting processor is reused.
        processor: Pre-built processor (tests, local runs).

    Returns:
        Reply dict with camelCase keys.

    Raises:
        pydantic.ValidationError: If the event does not match the schema.
        ConfigurationError: If required settings are missing.
    """
    envelope = InvocationEnvelope.model_validate(event)

    if processor is None:
        processor = _default_processor() if settings is None else _build_processor(settings)

    response = asyncio.run(processor.process(envelope))
    return response.to_wire()


def _build_processor(settings: Settings) -> TaskProcessor:
    setup_logging_from_settings(settings)
    return TaskProcessor.from_settings(settings)


@lru_cache(maxsize=1)
def _default_processor() -> TaskProcessor:
    """Processor for the environment's settings, shared across warm invocations."""
    return _build_processor(load_settings())
