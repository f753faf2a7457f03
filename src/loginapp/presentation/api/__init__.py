"""FastAPI application for Login App."""

from loginapp.presentation.api.app import create_app

__all__ = ["create_app"]
