"""API configuration adapter.

Bridges the centralized loginapp_config settings with the API layer. The
settings an app was created with live on ``app.state.settings``.
"""

from fastapi import Request

from loginapp_config.settings import Settings


def get_api_settings(request: Request) -> Settings:
    """Get the settings the running application was created with."""
    return request.app.state.settings
