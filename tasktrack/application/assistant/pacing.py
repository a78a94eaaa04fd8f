"""Minimum spacing between outbound generation requests."""

import asyncio
import time
from collections.abc import Awaitable, Callable

from tasktrack.infrastructure.telemetry.logging import get_logger
from tasktrack.infrastructure.telemetry.metrics import record_pacing_wait

logger = get_logger(__name__)


class PacingGate:
    """Process-wide gate spacing dispatches at least `min_interval_seconds` apart.

    Waiters pass one at a time in arrival order; each records its own
    dispatch time before releasing the next.
    """

    def __init__(
        self,
        min_interval_seconds: float = 0.5,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.min_interval_seconds = min_interval_seconds
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._last_dispatch: float | None = None

    @property
    def last_dispatch(self) -> float | None:
        return self._last_dispatch

    async def wait(self) -> float:
        """Suspend until the interval has elapsed. Returns seconds waited."""
        async with self._lock:
            waited = 0.0
            if self._last_dispatch is not None:
                elapsed = self._clock() - self._last_dispatch
                if elapsed < self.min_interval_seconds:
                    waited = self.min_interval_seconds - elapsed
                    logger.debug("Pacing outbound request", extra={"wait_seconds": waited})
                    await self._sleep(waited)

            self._last_dispatch = self._clock()
            record_pacing_wait(waited)
            return waited
