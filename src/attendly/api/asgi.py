"""ASGI entrypoint for the Attendly API."""

from attendly.api.app import create_app
from attendly.containers import build_container

app = create_app(build_container())
