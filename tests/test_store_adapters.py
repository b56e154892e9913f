"""Tests for store adapters."""

import asyncio
from dataclasses import dataclass, field
from datetime import timedelta

import httpx
import pytest

from smartplate.adapters.price_api_client import PriceApiClient
from smartplate.domain.deals import StoreName
from smartplate.services.fallback_data import (
    coles_fallback_deals,
    woolworths_fallback_deals,
)
from smartplate.services.stores import (
    PriceApiStoreAdapter,
    coerce_price,
    infer_category,
)
from tests.conftest import START, FakeClock


@dataclass
class FakePriceApiClient(PriceApiClient):
    payload: object = None
    error: Exception | None = None
    queries: list[str] = field(default_factory=list)

    async def search_products(self, query: str) -> object:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.payload


def _adapter(
    client: PriceApiClient | None, store: StoreName = StoreName.COLES
) -> PriceApiStoreAdapter:
    fallback = (
        coles_fallback_deals if store is StoreName.COLES else woolworths_fallback_deals
    )
    return PriceApiStoreAdapter(
        store=store, client=client, fallback=fallback, clock=FakeClock()
    )


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("$3.50", 3.5),
        ("4", 4.0),
        (2.25, 2.25),
        (7, 7.0),
        ("-1.99", 1.99),
        ("abc", 0.0),
        ("1.2.3", 0.0),
        ("", 0.0),
        (None, 0.0),
    ],
)
def test_coerce_price(raw: object, expected: float) -> None:
    assert coerce_price(raw) == expected


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Coles RSPCA Chicken Thigh Fillets", "meat"),
        ("Tasmanian Salmon Portions", "seafood"),
        ("Dairy Farmers Full Cream Milk 2L", "dairy"),
        ("Baby Spinach 120g", "vegetables"),
        ("Frozen Mixed Berries", "fruit"),
        ("San Remo Pasta", "pantry"),
        ("Bega Peanut Butter Smooth", "pantry"),
        ("Chicken and Prawn Dumplings", "meat"),
        ("Dishwashing Liquid", "other"),
    ],
)
def test_infer_category(name: str, expected: str) -> None:
    assert infer_category(name) == expected


def test_without_credentials_returns_fallback() -> None:
    adapter = _adapter(None)

    deals = asyncio.run(adapter.fetch_deals())

    assert not adapter.has_credentials
    assert [deal.name for deal in deals] == [
        deal.name for deal in coles_fallback_deals()
    ]
    assert all(deal.api_source == "mock-coles" for deal in deals)
    assert all(deal.valid_until == START + timedelta(days=7) for deal in deals)


def test_maps_remote_products() -> None:
    client = FakePriceApiClient(
        payload={
            "results": [
                {
                    "product_name": "Coles Beef Mince 500g",
                    "current_price": "$7.00",
                    "was_price": "$10.00",
                    "url": "https://www.coles.com.au/product/beef-mince",
                    "product_size": "500g",
                    "product_brand": "Coles",
                },
                {"product_name": "Dishwashing Liquid", "current_price": "n/a"},
                {"current_price": "$1.00"},
            ]
        }
    )
    adapter = _adapter(client)

    deals = asyncio.run(adapter.fetch_deals())

    assert client.queries == ["special"]
    assert len(deals) == 2
    mince, liquid = deals
    assert mince.price == 7.0
    assert mince.original_price == 10.0
    assert mince.discount_percentage == 30
    assert mince.category == "meat"
    assert mince.unit == "500g"
    assert mince.description == "Coles"
    assert mince.product_url == "https://www.coles.com.au/product/beef-mince"
    assert mince.api_source == "real-coles-api"
    assert mince.valid_until == START + timedelta(days=7)
    assert liquid.price == 0.0
    assert liquid.original_price is None
    assert liquid.category == "other"
    assert liquid.product_url == "https://www.coles.com.au/search?q=dishwashing%20liquid"


def test_original_price_dropped_when_not_higher() -> None:
    client = FakePriceApiClient(
        payload=[{"name": "Avocado", "price": 2.0, "originalPrice": 2.0}]
    )
    adapter = _adapter(client, StoreName.WOOLWORTHS)

    (deal,) = asyncio.run(adapter.fetch_deals())

    assert deal.original_price is None
    assert deal.discount_percentage is None
    assert deal.store is StoreName.WOOLWORTHS


@pytest.mark.parametrize(
    "client",
    [
        FakePriceApiClient(error=httpx.ConnectTimeout("timed out")),
        FakePriceApiClient(payload={"message": "quota exceeded"}),
        FakePriceApiClient(payload="<html>"),
        FakePriceApiClient(payload={"results": []}),
    ],
)
def test_remote_failures_return_fallback(client: FakePriceApiClient) -> None:
    adapter = _adapter(client)

    deals = asyncio.run(adapter.fetch_deals())

    assert adapter.has_credentials
    assert [deal.name for deal in deals] == [
        deal.name for deal in coles_fallback_deals()
    ]
