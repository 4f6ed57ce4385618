# src/core/errors.py — v1
"""Typed failure kinds raised inside the relocation pipeline.

Every kind is task-fatal. The processor collapses them into a
``PermanentFailure`` result whose result string starts with ``code``.
"""

from __future__ import annotations


class RelocationError(Exception):
    """Base class for all task-level failures."""

    code = "RelocationError"

    @property
    def result_string(self) -> str:
        """Machine-readable code followed by the human-readable message."""
        return f"{self.code}: {self}"


class ResolutionError(RelocationError):
    """Search capability unreachable or returned malformed content."""

    code = "ResolutionError"


class NoIdentityError(RelocationError):
    """No candidate identity matched the content digest."""

    code = "NoIdentityError"

    def __init__(self, digest: str) -> None:
        self.digest = digest
        super().__init__(f"no FileSet found for digest {digest}")


class MissingChecksumError(RelocationError):
    """Source object metadata lacks a required checksum field."""

    code = "MissingChecksumError"


class PartialCopyFailure(RelocationError):
    """At least one destination copy failed; nothing was deleted."""

    code = "PartialCopyFailure"

    def __init__(self, failed: int, total: int, destinations: str) -> None:
        self.failed = failed
        self.total = total
        self.destinations = destinations
        super().__init__(f"{failed} of {total} copies failed: {destinations}")


class CleanupError(RelocationError):
    """Every copy succeeded but removing the original did not."""

    code = "CleanupError"


class InvalidTaskError(RelocationError):
    """The task names no usable source location (e.g. an ARN without a bucket)."""

    code = "InvalidTaskError"
