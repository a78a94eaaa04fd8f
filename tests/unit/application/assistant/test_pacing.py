"""Tests for the pacing gate."""

import asyncio

import pytest

from tasktrack.application.assistant.pacing import PacingGate


class FakeTime:
    """Clock and sleep that advance together."""

    def __init__(self):
        self.now = 100.0
        self.sleeps: list[float] = []

    def clock(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class TestPacingGate:
    """Test PacingGate.wait."""

    @pytest.mark.asyncio
    async def test_first_call_does_not_wait(self):
        fake = FakeTime()
        gate = PacingGate(0.5, clock=fake.clock, sleep=fake.sleep)

        assert await gate.wait() == 0.0
        assert fake.sleeps == []

    @pytest.mark.asyncio
    async def test_back_to_back_calls_are_spaced(self):
        fake = FakeTime()
        gate = PacingGate(0.5, clock=fake.clock, sleep=fake.sleep)

        await gate.wait()
        fake.now += 0.2
        waited = await gate.wait()

        assert waited == pytest.approx(0.3)
        assert gate.last_dispatch == pytest.approx(100.5)

    @pytest.mark.asyncio
    async def test_no_wait_after_interval(self):
        fake = FakeTime()
        gate = PacingGate(0.5, clock=fake.clock, sleep=fake.sleep)

        await gate.wait()
        fake.now += 2.0

        assert await gate.wait() == 0.0

    @pytest.mark.asyncio
    async def test_concurrent_callers_are_serialized(self):
        fake = FakeTime()
        gate = PacingGate(0.5, clock=fake.clock, sleep=fake.sleep)
        dispatched: list[float] = []

        async def call() -> None:
            await gate.wait()
            dispatched.append(fake.now)

        await asyncio.gather(call(), call(), call())

        assert dispatched == pytest.approx([100.0, 100.5, 101.0])

    @pytest.mark.asyncio
    async def test_real_sleep_delays_second_call(self):
        gate = PacingGate(0.05)
        loop = asyncio.get_running_loop()

        await gate.wait()
        start = loop.time()
        await gate.wait()

        assert loop.time() - start >= 0.04
