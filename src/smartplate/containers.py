"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from smartplate.adapters.price_api_client import HttpxPriceApiClient
from smartplate.adapters.spoonacular_client import HttpxSpoonacularClient
from smartplate.config import Settings
from smartplate.domain.deals import StoreName
from smartplate.services.deals import DealAggregator
from smartplate.services.fallback_data import (
    coles_fallback_deals,
    woolworths_fallback_deals,
)
from smartplate.services.recipes import RecipeService
from smartplate.services.scheduler import DealRefreshScheduler
from smartplate.services.stores import PriceApiStoreAdapter, StoreAdapter


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store_adapters: list[StoreAdapter]
    deal_aggregator: DealAggregator
    recipe_service: RecipeService
    refresh_scheduler: DealRefreshScheduler
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    closers: list[Callable[[], Awaitable[None]]] = []

    coles_client = None
    if resolved_settings.coles_api_key:
        coles_client = HttpxPriceApiClient.create(
            api_key=resolved_settings.coles_api_key,
            base_url=resolved_settings.coles_api_base_url,
            host=resolved_settings.coles_api_host,
            search_path="/coles/product-search/",
            timeout_seconds=resolved_settings.price_api_timeout_seconds,
        )
        closers.append(coles_client.close)
    woolworths_client = None
    if resolved_settings.woolworths_api_key:
        woolworths_client = HttpxPriceApiClient.create(
            api_key=resolved_settings.woolworths_api_key,
            base_url=resolved_settings.woolworths_api_base_url,
            host=resolved_settings.woolworths_api_host,
            search_path="/woolworths/product-search/",
            timeout_seconds=resolved_settings.price_api_timeout_seconds,
        )
        closers.append(woolworths_client.close)
    store_adapters: list[StoreAdapter] = [
        PriceApiStoreAdapter(
            store=StoreName.COLES,
            client=coles_client,
            fallback=coles_fallback_deals,
            query=resolved_settings.deal_search_query,
        ),
        PriceApiStoreAdapter(
            store=StoreName.WOOLWORTHS,
            client=woolworths_client,
            fallback=woolworths_fallback_deals,
            query=resolved_settings.deal_search_query,
        ),
    ]
    deal_aggregator = DealAggregator.with_fallback(store_adapters)

    recipe_client = None
    if resolved_settings.spoonacular_api_key:
        recipe_client = HttpxSpoonacularClient.create(
            api_key=resolved_settings.spoonacular_api_key,
            base_url=resolved_settings.spoonacular_base_url,
            timeout_seconds=resolved_settings.recipe_api_timeout_seconds,
        )
        closers.append(recipe_client.close)
    recipe_service = RecipeService(client=recipe_client)

    refresh_scheduler = DealRefreshScheduler(
        aggregator=deal_aggregator,
        hour=resolved_settings.deal_refresh_hour,
    )

    async def close_resources() -> None:
        for close in closers:
            await close()

    return AppContainer(
        settings=resolved_settings,
        store_adapters=store_adapters,
        deal_aggregator=deal_aggregator,
        recipe_service=recipe_service,
        refresh_scheduler=refresh_scheduler,
        close_resources=close_resources,
    )
