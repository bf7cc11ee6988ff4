"""ASGI entrypoint for the keto planner API."""

from keto_planner.api.app import create_app
from keto_planner.containers import build_container

app = create_app(build_container())
