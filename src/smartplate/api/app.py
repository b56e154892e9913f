"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from smartplate.api.deals import router as deals_router
from smartplate.api.recipes import router as recipes_router
from smartplate.api.users import router as users_router
from smartplate.app_logging import configure_logging
from smartplate.config import parse_cors_origins
from smartplate.containers import AppContainer

API_VERSION = "1.0.0"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    settings = container.settings
    configure_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        if state_container.settings.refresh_schedule_active:
            state_container.refresh_scheduler.start()
            logger.info(
                "Scheduled daily deal refresh at %02d:00 UTC",
                state_container.settings.deal_refresh_hour,
            )
        yield
        await state_container.refresh_scheduler.stop()
        await state_container.close_resources()

    app = FastAPI(title="SmartPlate API", version=API_VERSION, lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(settings.cors_origins),
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(deals_router)
    app.include_router(recipes_router)
    app.include_router(users_router)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail, "path": request.url.path},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def server_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error", extra={"path": request.url.path}, exc_info=exc
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "timestamp": datetime.now(tz=UTC).isoformat(),
            },
        )

    @app.get("/")
    async def root() -> dict[str, object]:
        """Describe the API."""
        return {
            "message": "SmartPlate API",
            "version": API_VERSION,
            "status": "running",
            "endpoints": {
                "health": "/health",
                "deals": "/api/deals/current",
                "recipes": "/api/recipes/suggestions",
                "recipeHealth": "/api/recipes/health",
            },
        }

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {
            "status": "OK",
            "timestamp": datetime.now(tz=UTC).isoformat(),
            "message": "SmartPlate API is running",
            "version": API_VERSION,
        }

    return app
