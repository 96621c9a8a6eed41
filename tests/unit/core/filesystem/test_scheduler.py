"""Tests for the bounded fan-out scheduler."""

from __future__ import annotations

import asyncio
import threading
import time

import pytest

from dirsize.core.filesystem.scheduler import AdmissionGate, BoundedFanOut


class TestAdmissionGate:
    """Test the AdmissionGate counting semaphore."""

    def test_rejects_limit_below_one(self) -> None:
        """Test a gate needs at least one permit."""
        with pytest.raises(ValueError, match="at least 1"):
            _ = AdmissionGate(0)

    @pytest.mark.asyncio
    async def test_tracks_in_flight_and_peak(self) -> None:
        """Test holders are counted while inside the gate."""
        gate = AdmissionGate(2)

        async with gate:
            assert gate.in_flight == 1
            async with gate:
                assert gate.in_flight == 2

        assert gate.in_flight == 0
        assert gate.peak == 2

    @pytest.mark.asyncio
    async def test_releases_on_error(self) -> None:
        """Test the permit is returned when the body raises."""
        gate = AdmissionGate(1)

        with pytest.raises(RuntimeError):
            async with gate:
                raise RuntimeError("boom")

        assert gate.in_flight == 0
        async with asyncio.timeout(1):
            async with gate:
                assert gate.in_flight == 1


class TestBoundedFanOut:
    """Test the BoundedFanOut scheduler."""

    @pytest.mark.asyncio
    async def test_empty_input(self) -> None:
        """Test no work yields an empty result."""

        async def work(item: int) -> int:
            return item

        assert await BoundedFanOut(AdmissionGate()).run([], work) == []

    @pytest.mark.asyncio
    async def test_results_in_input_order(self) -> None:
        """Test results follow input order, not completion order."""

        async def work(item: int) -> int:
            await asyncio.sleep(0.01 * (5 - item))
            return item * 10

        results = await BoundedFanOut(AdmissionGate(3)).run([1, 2, 3, 4, 5], work)

        assert results == [10, 20, 30, 40, 50]

    @pytest.mark.asyncio
    async def test_absent_results_compacted(self) -> None:
        """Test None results are dropped without disturbing the order."""

        async def work(item: int) -> int | None:
            return item if item % 2 else None

        results = await BoundedFanOut(AdmissionGate()).run(list(range(10)), work)

        assert results == [1, 3, 5, 7, 9]

    @pytest.mark.asyncio
    async def test_first_error_propagates_unwrapped(self) -> None:
        """Test the original exception escapes, not an exception group."""

        async def work(item: int) -> int:
            if item == 3:
                raise KeyError(item)
            await asyncio.sleep(0.01)
            return item

        with pytest.raises(KeyError):
            _ = await BoundedFanOut(AdmissionGate()).run([1, 2, 3, 4], work)

    @pytest.mark.asyncio
    async def test_nested_error_propagates_unwrapped(self) -> None:
        """Test errors from nested fan-outs keep their original type."""
        fan_out = BoundedFanOut(AdmissionGate(2))

        async def inner(item: int) -> int:
            if item == 2:
                raise LookupError("missing")
            return item

        async def outer(item: int) -> list[int]:
            return await fan_out.run([item, item + 1], inner)

        with pytest.raises(LookupError, match="missing"):
            _ = await fan_out.run([0, 1], outer)

    @pytest.mark.asyncio
    async def test_call_blocking_bounded(self) -> None:
        """Test blocking calls never exceed the gate limit."""
        gate = AdmissionGate(3)
        fan_out = BoundedFanOut(gate)
        lock = threading.Lock()
        active = 0
        observed = 0

        def blocking(item: int) -> int:
            nonlocal active, observed
            with lock:
                active += 1
                observed = max(observed, active)
            time.sleep(0.01)
            with lock:
                active -= 1
            return item

        async def work(item: int) -> int:
            return await fan_out.call_blocking(blocking, item)

        results = await fan_out.run(list(range(12)), work)

        assert results == list(range(12))
        assert observed <= 3
        assert gate.peak <= 3
        assert gate.in_flight == 0

    @pytest.mark.asyncio
    async def test_call_blocking_passes_arguments(self) -> None:
        """Test positional and keyword arguments reach the callable."""
        fan_out = BoundedFanOut(AdmissionGate(1))

        result = await fan_out.call_blocking(divmod, 17, 5)
        joined = await fan_out.call_blocking(" ".join, ["a", "b"])

        assert result == (3, 2)
        assert joined == "a b"

    @pytest.mark.asyncio
    async def test_cancelled_call_keeps_permit_until_thread_returns(self) -> None:
        """Test a cancelled call does not let a new read start alongside its thread."""
        fan_out = BoundedFanOut(AdmissionGate(1))
        lock = threading.Lock()
        started = threading.Event()
        release = threading.Event()
        active = 0
        observed = 0

        def blocking(hold: bool) -> bool:
            nonlocal active, observed
            with lock:
                active += 1
                observed = max(observed, active)
            try:
                if hold:
                    started.set()
                    _ = release.wait(5)
            finally:
                with lock:
                    active -= 1
            return hold

        first = asyncio.create_task(fan_out.call_blocking(blocking, True))
        _ = await asyncio.to_thread(started.wait, 5)
        _ = first.cancel()
        second = asyncio.create_task(fan_out.call_blocking(blocking, False))
        await asyncio.sleep(0.05)

        assert not second.done()
        assert fan_out.gate.in_flight == 1

        release.set()
        assert await second is False
        with pytest.raises(asyncio.CancelledError):
            await first
        assert observed == 1
        assert fan_out.gate.in_flight == 0
