# tests/unit/pipeline/test_unit_fanout.py — v1
"""Tests for pipeline/fanout.py: concurrent isolated copies."""

from __future__ import annotations

import asyncio

import pytest

from relocator.core.errors import NoIdentityError
from relocator.pipeline.fanout import RelocationFanout

TAGGING = "computed-sha1=da39a3ee5e6b4b0d3255bfef95601890afd80709"


class TestRelocationFanout:
    @pytest.mark.asyncio
    async def test_one_outcome_per_identity(self, mock_store, sample_tags):
        outcomes = await RelocationFanout(mock_store).relocate(
            "bucket", "uploads/abc", ["11223344aa", "55667788bb"], sample_tags,
        )
        assert [o.destination for o in outcomes] == [
            "11/22/33/44/11223344aa",
            "55/66/77/88/55667788bb",
        ]
        assert all(o.succeeded for o in outcomes)
        assert mock_store.copy.await_count == 2

    @pytest.mark.asyncio
    async def test_copy_carries_tags(self, mock_store, sample_tags):
        await RelocationFanout(mock_store).relocate(
            "bucket", "uploads/abc", ["11223344aa"], sample_tags,
        )
        mock_store.copy.assert_awaited_once_with(
            "bucket", "uploads/abc", "11/22/33/44/11223344aa", sample_tags.as_tagging(),
        )
        assert sample_tags.as_tagging().startswith(TAGGING)

    @pytest.mark.asyncio
    async def test_failure_is_isolated(self, mock_store, sample_tags):
        async def copy(bucket, src, dst, tagging):
            if dst.endswith("bad00000"):
                raise RuntimeError("SlowDown")

        mock_store.copy.side_effect = copy
        outcomes = await RelocationFanout(mock_store).relocate(
            "bucket", "k", ["good0000", "bad00000", "good1111"], sample_tags,
        )
        assert [o.succeeded for o in outcomes] == [True, False, True]
        assert outcomes[1].error == "SlowDown"
        assert mock_store.copy.await_count == 3

    @pytest.mark.asyncio
    async def test_copies_run_concurrently(self, mock_store, sample_tags):
        started = 0
        both_started = asyncio.Event()

        async def copy(bucket, src, dst, tagging):
            nonlocal started
            started += 1
            if started == 2:
                both_started.set()
            await asyncio.wait_for(both_started.wait(), timeout=1)

        mock_store.copy.side_effect = copy
        outcomes = await RelocationFanout(mock_store).relocate(
            "bucket", "k", ["aaaaaaaa1", "bbbbbbbb2"], sample_tags,
        )
        assert all(o.succeeded for o in outcomes)

    @pytest.mark.asyncio
    async def test_outcomes_keep_input_order(self, mock_store, sample_tags):
        async def copy(bucket, src, dst, tagging):
            # Finish in reverse order
            await asyncio.sleep(0.02 if dst.endswith("first000") else 0)

        mock_store.copy.side_effect = copy
        outcomes = await RelocationFanout(mock_store).relocate(
            "bucket", "k", ["first000", "second00"], sample_tags,
        )
        assert [o.destination.rsplit("/", 1)[-1] for o in outcomes] == [
            "first000", "second00",
        ]

    @pytest.mark.asyncio
    async def test_empty_identities(self, mock_store, sample_tags):
        with pytest.raises(NoIdentityError, match="abc123"):
            await RelocationFanout(mock_store).relocate(
                "bucket", "uploads/abc123", [], sample_tags,
            )
        mock_store.copy.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_identity_recorded_as_failure(self, mock_store, sample_tags):
        outcomes = await RelocationFanout(mock_store).relocate(
            "bucket", "k", ["", "aabbccdd"], sample_tags,
        )
        assert [o.succeeded for o in outcomes] == [False, True]
        assert mock_store.copy.await_count == 1
