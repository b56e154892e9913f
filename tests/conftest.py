"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from smartplate.adapters.spoonacular_client import RecipeApiClient
from smartplate.config import Settings
from smartplate.containers import AppContainer
from smartplate.domain.deals import Deal, StoreName
from smartplate.services.deals import DealAggregator
from smartplate.services.recipes import RecipeService
from smartplate.services.scheduler import DealRefreshScheduler
from smartplate.services.stores import StoreAdapter

START = datetime(2026, 10, 19, 8, 0, tzinfo=UTC)


@dataclass
class FakeClock:
    """Controllable clock for staleness tests."""

    now: datetime = START

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


def make_deal(
    name: str,
    store: StoreName = StoreName.COLES,
    category: str = "Pantry",
    price: float = 2.0,
    original_price: float | None = 3.0,
) -> Deal:
    return Deal(
        name=name,
        category=category,
        price=price,
        original_price=original_price,
        store=store,
        description=name,
        unit="each",
        valid_until=START + timedelta(days=7),
        api_source="test",
    )


@dataclass
class FakeStoreAdapter(StoreAdapter):
    """Adapter returning a fixed deal list and counting calls."""

    store: StoreName
    deals: list[Deal] = field(default_factory=list)
    calls: int = 0

    @property
    def has_credentials(self) -> bool:
        return False

    async def fetch_deals(self) -> list[Deal]:
        self.calls += 1
        return list(self.deals)


@dataclass
class FailingStoreAdapter(StoreAdapter):
    """Adapter that always raises."""

    store: StoreName
    calls: int = 0

    @property
    def has_credentials(self) -> bool:
        return True

    async def fetch_deals(self) -> list[Deal]:
        self.calls += 1
        raise RuntimeError(f"{self.store.value} is down")


@dataclass
class FakeRecipeApiClient(RecipeApiClient):
    """Recipe API fake returning canned payloads."""

    search_payload: dict[str, object] = field(default_factory=lambda: {"results": []})
    info_payload: dict[str, object] | None = None
    error: Exception | None = None
    search_params: list[dict[str, object]] = field(default_factory=list)

    async def complex_search(self, params: dict[str, object]) -> dict[str, object]:
        self.search_params.append(params)
        if self.error is not None:
            raise self.error
        return self.search_payload

    async def get_information(self, recipe_id: int) -> dict[str, object]:
        if self.error is not None:
            raise self.error
        if self.info_payload is None:
            raise LookupError(recipe_id)
        return self.info_payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        coles_api_key=None,
        woolworths_api_key=None,
        spoonacular_api_key=None,
        environment="test",
        scheduled_refresh_enabled=False,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def coles_adapter() -> FakeStoreAdapter:
    return FakeStoreAdapter(
        store=StoreName.COLES,
        deals=[
            make_deal("Baby Spinach", StoreName.COLES, "Vegetables"),
            make_deal("Greek Yogurt", StoreName.COLES, "Dairy"),
        ],
    )


@pytest.fixture
def woolworths_adapter() -> FakeStoreAdapter:
    return FakeStoreAdapter(
        store=StoreName.WOOLWORTHS,
        deals=[make_deal("Atlantic Salmon", StoreName.WOOLWORTHS, "Seafood")],
    )


@pytest.fixture
def container(
    settings: Settings,
    clock: FakeClock,
    coles_adapter: FakeStoreAdapter,
    woolworths_adapter: FakeStoreAdapter,
) -> AppContainer:
    adapters: list[StoreAdapter] = [coles_adapter, woolworths_adapter]
    deal_aggregator = DealAggregator.with_fallback(adapters, clock=clock)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        store_adapters=adapters,
        deal_aggregator=deal_aggregator,
        recipe_service=RecipeService(),
        refresh_scheduler=DealRefreshScheduler(aggregator=deal_aggregator),
        close_resources=close_resources,
    )
