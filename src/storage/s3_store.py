# src/storage/s3_store.py — v1
"""S3-compatible object store.

Supports AWS S3, MinIO, and other S3-compatible storage. boto3 calls are
blocking, so each one runs in a worker thread; this lets the fan-out overlap
copies to several destinations.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from relocator.storage.base_object_store import BaseObjectStore

logger = logging.getLogger(__name__)


class S3ObjectStore(BaseObjectStore):
    """Object store backed by a boto3 S3 client."""

    def __init__(
        self,
        region: str | None = None,
        endpoint_url: str | None = None,
        client: Any | None = None,
    ) -> None:
        """Initialize the S3 store.

        Args:
            region: AWS region (optional, uses boto3 default if not set).
            endpoint_url: Custom endpoint for MinIO/compatible storage.
            client: Pre-built boto3 S3 client (takes precedence).
        """
        if client is not None:
            self._s3 = client
            return

        import boto3

        kwargs: dict = {}
        if region:
            kwargs["region_name"] = region
        if endpoint_url:
            kwargs["endpoint_url"] = endpoint_url
        self._s3 = boto3.client("s3", **kwargs)

    async def head(self, bucket: str, key: str) -> dict[str, Any]:
        """Fetch object metadata."""
        response = await asyncio.to_thread(
            self._s3.head_object, Bucket=bucket, Key=key
        )
        logger.debug("S3 head: s3://%s/%s", bucket, key)
        return response

    async def copy(
        self,
        bucket: str,
        source_key: str,
        destination_key: str,
        tagging: str,
    ) -> None:
        """Server-side copy carrying ``tagging`` with the REPLACE directive."""
        params = {
            "Bucket": bucket,
            "CopySource": {"Bucket": bucket, "Key": source_key},
            "Key": destination_key,
            "Tagging": tagging,
            "TaggingDirective": "REPLACE",
        }
        logger.info("S3 copy", extra={"data": params})
        await asyncio.to_thread(self._s3.copy_object, **params)

    async def delete(self, bucket: str, key: str) -> None:
        """Delete an object."""
        await asyncio.to_thread(self._s3.delete_object, Bucket=bucket, Key=key)
        logger.info("S3 delete: s3://%s/%s", bucket, key)
