"""ASGI entrypoint for the energy balance API."""

from energy_balance.api.app import create_app
from energy_balance.containers import build_container

app = create_app(build_container())
