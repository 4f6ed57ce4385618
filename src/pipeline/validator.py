# src/pipeline/validator.py — v1
"""Checksum validator: the source must carry sha1 and sha256 metadata."""

from __future__ import annotations

import logging

from relocator.core.errors import MissingChecksumError
from relocator.core.models import ChecksumTagSet
from relocator.storage.base_object_store import BaseObjectStore

logger = logging.getLogger(__name__)

SHA1_METADATA_KEY = "sha1"
SHA256_METADATA_KEY = "sha256"


class ChecksumValidator:
    """Read checksum fields from object metadata before any copy proceeds.

    Values are passed through unchanged; object bytes are never re-hashed.
    """

    def __init__(self, store: BaseObjectStore) -> None:
        self._store = store

    async def validate(self, bucket: str, key: str) -> ChecksumTagSet:
        """Return the tag set for ``key``.

        Raises:
            MissingChecksumError: If the metadata cannot be read or either
                checksum field is absent or empty.
        """
        try:
            info = await self._store.head(bucket, key)
        except Exception as exc:
            raise MissingChecksumError(
                f"cannot read metadata for s3://{bucket}/{key}: {exc}"
            ) from exc

        logger.debug("Object info", extra={"data": info})
        metadata = {str(k).lower(): v for k, v in (info.get("Metadata") or {}).items()}

        missing = [
            name for name in (SHA1_METADATA_KEY, SHA256_METADATA_KEY)
            if not metadata.get(name)
        ]
        if missing:
            raise MissingChecksumError(
                f"s3://{bucket}/{key} is missing metadata: {', '.join(missing)}"
            )

        return ChecksumTagSet(
            sha1=metadata[SHA1_METADATA_KEY],
            sha256=metadata[SHA256_METADATA_KEY],
        )
