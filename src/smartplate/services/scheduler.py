"""Background task refreshing deals once a day."""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from smartplate.services.deals import DealAggregator

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class DealRefreshScheduler:
    """Runs `update_all_deals` daily at a fixed UTC hour."""

    aggregator: DealAggregator
    hour: int = 6
    clock: Callable[[], datetime] = field(default=_utcnow)
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep)
    _task: asyncio.Task[None] | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23:
            raise ValueError(f"hour must be in 0..23, got {self.hour}")

    def seconds_until_next_run(self) -> float:
        """Seconds from now until the next scheduled refresh."""
        now = self.clock()
        target = now.replace(hour=self.hour, minute=0, second=0, microsecond=0)
        if target <= now:
            target += timedelta(days=1)
        return (target - now).total_seconds()

    async def run_once(self) -> None:
        """Refresh deals, logging instead of raising on failure."""
        _logger.info("Running scheduled deal update")
        try:
            deals = await self.aggregator.update_all_deals()
        except Exception:
            _logger.exception("Scheduled deal update failed")
            return
        _logger.info("Scheduled deal update completed with %s deals", len(deals))

    async def run_forever(self) -> None:
        """Sleep until each scheduled hour and refresh."""
        while True:
            await self.sleep(self.seconds_until_next_run())
            await self.run_once()

    def start(self) -> None:
        """Start the background loop on the running event loop."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.run_forever())

    async def stop(self) -> None:
        """Cancel the background loop and wait for it to exit."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
