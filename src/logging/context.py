# src/logging/context.py — v1
"""Contextual logging support: attach invocation_id, task_id, stage to log records."""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per invocation.
_invocation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "invocation_id", default=None
)
_task_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "task_id", default=None
)
_stage: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "stage", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    invocation_id: str | None = None
    task_id: str | None = None
    stage: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        invocation_id=_invocation_id.get(),
        task_id=_task_id.get(),
        stage=_stage.get(),
    )


def set_stage(stage: str | None) -> None:
    """Set the pipeline stage currently executing."""
    _stage.set(stage)


def clear_context() -> None:
    """Reset all context variables."""
    _invocation_id.set(None)
    _task_id.set(None)
    _stage.set(None)


@contextmanager
def task_context(invocation_id: str, task_id: str) -> Iterator[LogContext]:
    """Bind invocation and task ids for the duration of one task.

    On exit the variables are reset to the values they held on entry, so a
    warm container never leaks one invocation's ids into the next.
    """
    tokens = (
        (_invocation_id, _invocation_id.set(invocation_id)),
        (_task_id, _task_id.set(task_id)),
        (_stage, _stage.set(None)),
    )
    try:
        yield get_context()
    finally:
        for var, token in reversed(tokens):
            var.reset(token)
