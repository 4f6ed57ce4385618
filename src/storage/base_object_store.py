# src/storage/base_object_store.py — v1
"""Abstract object store interface consumed by the relocation pipeline."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class BaseObjectStore(ABC):
    """Head / copy / delete by key within a bucket."""

    @abstractmethod
    async def head(self, bucket: str, key: str) -> dict[str, Any]:
        """Return the object's metadata, including its ``Metadata`` mapping."""

    @abstractmethod
    async def copy(
        self,
        bucket: str,
        source_key: str,
        destination_key: str,
        tagging: str,
    ) -> None:
        """Copy within the bucket, replacing destination tags with ``tagging``."""

    @abstractmethod
    async def delete(self, bucket: str, key: str) -> None:
        """Remove the object at ``key``."""
