"""Deal API endpoints."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status
from fastapi.responses import JSONResponse

from smartplate.domain.deals import Deal  # noqa: TC001

if TYPE_CHECKING:
    from smartplate.containers import AppContainer

router = APIRouter(prefix="/api/deals", tags=["deals"])

_logger = logging.getLogger(__name__)


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _timestamp() -> str:
    return datetime.now(tz=UTC).isoformat()


@router.get("/current")
async def current_deals(request: Request) -> list[Deal]:
    """Return the cached deals, refreshing them when stale."""
    deals = await _container(request).deal_aggregator.get_current_deals()
    _logger.info("Serving %s current deals", len(deals))
    return deals


@router.post("/refresh", response_model=None)
async def refresh_deals(request: Request) -> dict[str, str] | JSONResponse:
    """Force a refresh from every store adapter."""
    _logger.info("Manual deal refresh requested")
    try:
        deals = await _container(request).deal_aggregator.update_all_deals()
    except Exception as exc:
        _logger.exception("Manual deal refresh failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Failed to update deals",
                "message": str(exc),
                "timestamp": _timestamp(),
            },
        )
    _logger.info("Deal refresh completed with %s deals", len(deals))
    return {"message": "Deals updated successfully", "timestamp": _timestamp()}


@router.get("/store/{store_name}")
async def deals_by_store(store_name: str, request: Request) -> list[Deal]:
    """Return cached deals for one store."""
    return _container(request).deal_aggregator.get_deals_by_store(store_name)


@router.get("/category/{category}")
async def deals_by_category(category: str, request: Request) -> list[Deal]:
    """Return cached deals whose category contains the given text."""
    return _container(request).deal_aggregator.get_deals_by_category(category)


@router.get("/health")
async def deals_health(request: Request) -> dict[str, object]:
    """Report which store APIs are configured."""
    container = _container(request)
    api_keys = {
        adapter.store.value: "configured" if adapter.has_credentials else "missing"
        for adapter in container.store_adapters
    }
    features = {
        f"{adapter.store.value}API": (
            "available" if adapter.has_credentials else "disabled"
        )
        for adapter in container.store_adapters
    }
    return {
        "status": "OK",
        "service": "deals",
        "timestamp": _timestamp(),
        "apiKeys": api_keys,
        "features": {"mockData": "available", **features},
    }


@router.get("/debug/status")
async def deals_debug_status(request: Request) -> dict[str, object]:
    """Describe the deal cache and where its data came from."""
    container = _container(request)
    summary = container.deal_aggregator.status()
    sources = summary["apiSources"]
    live = isinstance(sources, list) and any(
        str(source).startswith("real-") for source in sources
    )
    return {
        "timestamp": _timestamp(),
        "environment": container.settings.environment,
        "dealsSummary": summary,
        "likelySource": "Real API" if live else "Mock Data",
        "scheduledRefresh": container.settings.refresh_schedule_active,
    }


@router.get("/debug/{store_name}")
async def deals_debug_store(store_name: str, request: Request) -> dict[str, object]:
    """Call one store adapter directly and report where its deals came from."""
    container = _container(request)
    wanted = store_name.strip().lower()
    adapter = next(
        (item for item in container.store_adapters if item.store.value == wanted),
        None,
    )
    if adapter is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Unknown store"
        )
    _logger.info("Live %s adapter test requested", adapter.store.value)
    try:
        deals = await adapter.fetch_deals()
    except Exception as exc:
        _logger.exception("Live %s adapter test failed", adapter.store.value)
        return {
            "status": "ERROR",
            "store": adapter.store.value,
            "message": str(exc),
            "usingMockData": True,
            "timestamp": _timestamp(),
        }
    sources = sorted({deal.api_source for deal in deals})
    live = any(source.startswith("real-") for source in sources)
    sample = deals[0].model_dump(mode="json", by_alias=True) if deals else None
    return {
        "status": "API_KEY_CONFIGURED" if adapter.has_credentials else "NO_API_KEY",
        "store": adapter.store.value,
        "dealsFound": len(deals),
        "isRealData": live,
        "usingMockData": not live,
        "sampleDeal": sample,
        "apiSources": sources,
        "timestamp": _timestamp(),
    }
