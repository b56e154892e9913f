"""Command-line entrypoint running the API with uvicorn."""

import uvicorn

from smartplate.config import Settings


def main() -> None:
    """Serve the SmartPlate API on the configured port."""
    settings = Settings()
    print(f"SmartPlate API starting on port {settings.port} ({settings.environment})")
    uvicorn.run(
        "smartplate.api.asgi:app",
        host="0.0.0.0",  # noqa: S104
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
