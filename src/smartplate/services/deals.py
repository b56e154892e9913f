"""Deal aggregation across stores with a staleness-refreshed cache."""

import asyncio
import logging
from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from smartplate.domain.deals import Deal
from smartplate.services.fallback_data import aggregate_fallback_deals
from smartplate.services.stores import StoreAdapter

STALENESS_WINDOW = timedelta(hours=24)

_logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one adapter call: either deals or the error it raised."""

    source: str
    deals: list[Deal] = field(default_factory=list)
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """Whether the adapter call succeeded."""
        return self.error is None


def merge_results(results: Sequence[FetchResult]) -> list[Deal]:
    """Flatten successful results in adapter order, skipping failures."""
    merged: list[Deal] = []
    for result in results:
        if result.ok:
            merged.extend(result.deals)
    return merged


@dataclass
class DealAggregator:
    """Owns the process-wide deal cache and refreshes it from store adapters.

    Reads and refreshes are not locked. Two stale reads racing each other both
    refresh and the last one to finish wins.
    """

    adapters: list[StoreAdapter]
    deals: list[Deal] = field(default_factory=list)
    last_update: datetime | None = None
    staleness_window: timedelta = STALENESS_WINDOW
    clock: Callable[[], datetime] = field(default=_utcnow)
    fallback: Callable[[datetime | None], list[Deal]] = field(
        default=aggregate_fallback_deals
    )

    @classmethod
    def with_fallback(
        cls,
        adapters: list[StoreAdapter],
        clock: Callable[[], datetime] = _utcnow,
    ) -> "DealAggregator":
        """Create an aggregator primed with the static fallback list."""
        now = clock()
        aggregator = cls(
            adapters=adapters,
            deals=aggregate_fallback_deals(now),
            last_update=now,
            clock=clock,
        )
        _logger.info(
            "Initialized deal cache with %s fallback deals", len(aggregator.deals)
        )
        return aggregator

    def is_stale(self) -> bool:
        """Whether the cache needs a refresh before serving reads."""
        if not self.deals or self.last_update is None:
            return True
        return self.clock() - self.last_update > self.staleness_window

    async def get_current_deals(self) -> list[Deal]:
        """Return cached deals, refreshing first when stale."""
        try:
            if self.is_stale():
                _logger.info("Deal data is stale, updating")
                await self.update_all_deals()
        except Exception:
            _logger.exception("Failed to serve current deals, using fallback list")
            return self.fallback(self.clock())
        return self.deals

    async def update_all_deals(self) -> list[Deal]:
        """Fetch every adapter concurrently and replace the cache."""
        if not self.adapters:
            _logger.info("No deal adapters registered, using fallback list")
            merged: list[Deal] = []
        else:
            results = await asyncio.gather(
                *(self._fetch(adapter) for adapter in self.adapters)
            )
            merged = merge_results(results)

        now = self.clock()
        if merged:
            _logger.info("Updated cache with %s deals", len(merged))
            self.deals = merged
        else:
            _logger.info("No deals from adapters, using fallback list")
            self.deals = self.fallback(now)
        self.last_update = now
        return self.deals

    def get_deals_by_store(self, store_name: str) -> list[Deal]:
        """Deals whose store matches exactly, ignoring case."""
        wanted = store_name.lower()
        return [deal for deal in self.deals if deal.store.value.lower() == wanted]

    def get_deals_by_category(self, category: str) -> list[Deal]:
        """Deals whose category contains the given text, ignoring case."""
        wanted = category.lower()
        return [deal for deal in self.deals if wanted in deal.category.lower()]

    def status(self) -> dict[str, object]:
        """Summarize the cache for diagnostics."""
        per_store = Counter(deal.store.value for deal in self.deals)
        return {
            "total": len(self.deals),
            "stores": dict(per_store),
            "lastUpdate": self.last_update.isoformat() if self.last_update else None,
            "stale": self.is_stale(),
            "apiSources": sorted({deal.api_source for deal in self.deals}),
        }

    async def _fetch(self, adapter: StoreAdapter) -> FetchResult:
        source = str(getattr(adapter, "store", type(adapter).__name__))
        try:
            deals = await adapter.fetch_deals()
        except Exception as exc:
            _logger.warning("Deal adapter %s failed: %s", source, exc)
            return FetchResult(source=source, error=exc)
        if not isinstance(deals, list):
            error = TypeError(f"adapter returned {type(deals).__name__}")
            _logger.warning("Deal adapter %s failed: %s", source, error)
            return FetchResult(source=source, error=error)
        _logger.info("Deal adapter %s returned %s deals", source, len(deals))
        return FetchResult(source=source, deals=deals)
