# src/storage/layout.py — v1
"""Key layout conventions for the content-addressed destination namespace.

Destination keys shard on the identity's leading characters so that writes
spread across prefixes instead of hot-spotting one flat namespace:

    1a2b3c4d5e6f...  ->  1a/2b/3c/4d/1a2b3c4d5e6f...
"""

from __future__ import annotations

import posixpath

# Leading identity characters used for sharding, split into pairs.
SHARD_CHARS = 8
SHARD_WIDTH = 2


def extract_digest(key: str) -> str:
    """Return the content digest carried by an object key (its base name).

    Raises:
        ValueError: If the key has no trailing segment.
    """
    digest = posixpath.basename(key)
    if not digest:
        raise ValueError(f"Object key has no base name: {key!r}")
    return digest


def bucket_from_arn(arn: str) -> str:
    """Return the bucket name from a bucket ARN (its last ``:`` segment)."""
    bucket = arn.rsplit(":", 1)[-1]
    if not bucket:
        raise ValueError(f"Bucket ARN has no bucket name: {arn!r}")
    return bucket


def shard_prefix(identity: str) -> list[str]:
    """Split the identity's first 8 characters into two-character segments.

    An odd trailing character among the first 8 is not sharded.
    """
    head = identity[:SHARD_CHARS]
    return [
        head[i:i + SHARD_WIDTH]
        for i in range(0, len(head) - SHARD_WIDTH + 1, SHARD_WIDTH)
    ]


def canonical_path(identity: str) -> str:
    """Return the deterministic destination key for a candidate identity.

    Raises:
        ValueError: If the identity is empty.
    """
    if not identity:
        raise ValueError("Cannot derive a canonical path from an empty identity")
    return "/".join([*shard_prefix(identity), identity])
