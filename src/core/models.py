# src/core/models.py — v1
"""Domain models shared by every pipeline stage.

Wire-facing models (WorkItem, InvocationEnvelope, TaskResult,
InvocationResponse) use camelCase aliases matching the batch orchestrator's
JSON schema; Python code addresses them by snake_case field names.
"""

from __future__ import annotations

from typing import Any, Literal, NamedTuple
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

ResultCode = Literal["Succeeded", "TemporaryFailure", "PermanentFailure"]

SHA1_TAG = "computed-sha1"
SHA256_TAG = "computed-sha256"


class WorkItem(BaseModel):
    """One object to relocate, as supplied by the orchestrator."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    task_id: str = Field(alias="taskId")
    s3_key: str = Field(alias="s3Key")
    s3_bucket_arn: str = Field(alias="s3BucketArn")


class InvocationEnvelope(BaseModel):
    """A batch invocation. Only the first task is processed."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    invocation_id: str = Field(alias="invocationId")
    invocation_schema_version: str = Field(alias="invocationSchemaVersion")
    tasks: list[WorkItem] = Field(min_length=1)

    @property
    def item(self) -> WorkItem:
        return self.tasks[0]


class ChecksumTagSet(BaseModel):
    """Checksums read from source metadata, reattached to every copy."""

    model_config = ConfigDict(frozen=True)

    sha1: str
    sha256: str

    def as_tags(self) -> dict[str, str]:
        return {SHA1_TAG: self.sha1, SHA256_TAG: self.sha256}

    def as_tagging(self) -> str:
        """URL-encoded form accepted by the object store's Tagging parameter."""
        return urlencode(self.as_tags())


class CopyOutcome(BaseModel):
    """Result of copying the source to one canonical destination."""

    model_config = ConfigDict(frozen=True)

    destination: str
    succeeded: bool
    error: str | None = None


class AggregateResult(NamedTuple):
    """Fan-out tally produced by the outcome aggregator."""

    all_succeeded: bool
    destinations: str


class TaskResult(BaseModel):
    """Terminal per-task artifact returned to the orchestrator."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    task_id: str = Field(alias="taskId")
    result_code: ResultCode = Field(alias="resultCode")
    result_string: str = Field(alias="resultString")


class InvocationResponse(BaseModel):
    """Fixed reply schema expected by the orchestrator."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    invocation_schema_version: str = Field(alias="invocationSchemaVersion")
    treat_missing_keys_as: ResultCode = Field(
        default="PermanentFailure", alias="treatMissingKeysAs"
    )
    invocation_id: str = Field(alias="invocationId")
    results: list[TaskResult] = Field(min_length=1, max_length=1)

    def to_wire(self) -> dict[str, Any]:
        """Serialize with the orchestrator's camelCase keys."""
        return self.model_dump(by_alias=True)
