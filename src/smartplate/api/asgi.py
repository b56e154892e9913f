"""ASGI entrypoint for the SmartPlate API."""

from smartplate.api.app import create_app
from smartplate.containers import build_container

app = create_app(build_container())
