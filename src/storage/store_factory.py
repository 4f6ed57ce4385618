# src/storage/store_factory.py — v1
"""Factory: instantiate the object store from configuration."""

from __future__ import annotations

from relocator.config.settings import Settings
from relocator.storage.base_object_store import BaseObjectStore


def create_object_store(settings: Settings) -> BaseObjectStore:
    """Create the S3 object store described by settings.

    Args:
        settings: Application settings (REGION, S3_ENDPOINT_URL).

    Returns:
        BaseObjectStore instance.
    """
    from relocator.storage.s3_store import S3ObjectStore

    return S3ObjectStore(
        region=settings.region or None,
        endpoint_url=settings.s3_endpoint_url or None,
    )
