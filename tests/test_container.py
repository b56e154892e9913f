"""Tests for container wiring."""

import asyncio

from smartplate.config import Settings
from smartplate.containers import build_container


def test_build_container_without_keys_uses_fallbacks(settings) -> None:
    container = build_container(settings)

    assert [adapter.store.value for adapter in container.store_adapters] == [
        "coles",
        "woolworths",
    ]
    assert not any(adapter.has_credentials for adapter in container.store_adapters)
    assert not container.recipe_service.has_credentials
    assert container.deal_aggregator.deals
    assert not container.deal_aggregator.is_stale()
    asyncio.run(container.close_resources())


def test_build_container_with_keys_creates_clients() -> None:
    settings = Settings(
        coles_api_key="coles-key",
        woolworths_api_key="woolies-key",
        spoonacular_api_key="spoon-key",
        environment="test",
    )

    container = build_container(settings)

    assert all(adapter.has_credentials for adapter in container.store_adapters)
    assert container.recipe_service.has_credentials
    asyncio.run(container.close_resources())
