"""ASGI entry point: ``uvicorn loginapp.asgi:app``."""

from loginapp.presentation.api.app import create_app

app = create_app()
