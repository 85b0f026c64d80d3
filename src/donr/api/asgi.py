"""ASGI entrypoint for the Donr API."""

from donr.api.app import create_app
from donr.containers import build_container

app = create_app(build_container())
