"""ASGI entrypoint for the Calorik API."""

from calorik.api.app import create_app
from calorik.containers import build_container

app = create_app(build_container())
