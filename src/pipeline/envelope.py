# src/pipeline/envelope.py — v1
"""Result envelope builder: wrap a task outcome in the reply schema."""

from __future__ import annotations

from relocator.core.models import (
    InvocationEnvelope,
    InvocationResponse,
    ResultCode,
    TaskResult,
)


def build_response(
    envelope: InvocationEnvelope,
    task_id: str,
    result_code: ResultCode,
    result_string: str,
) -> InvocationResponse:
    """Build the single-result reply for ``envelope``. Performs no I/O."""
    return InvocationResponse(
        invocation_schema_version=envelope.invocation_schema_version,
        treat_missing_keys_as="PermanentFailure",
        invocation_id=envelope.invocation_id,
        results=[
            TaskResult(
                task_id=task_id,
                result_code=result_code,
                result_string=result_string,
            )
        ],
    )
