"""ASGI entrypoint for the FootyGuess API."""

from footyguess.api.app import create_app
from footyguess.containers import build_container

app = create_app(build_container())
