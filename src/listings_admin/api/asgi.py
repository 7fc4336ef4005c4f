"""ASGI entrypoint for the listings admin API."""

from listings_admin.api.app import create_app
from listings_admin.containers import build_container

app = create_app(build_container())
