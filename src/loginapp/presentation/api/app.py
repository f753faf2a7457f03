"""FastAPI application factory.

Creates and configures the FastAPI application with the auth router,
middleware and exception handlers. All endpoints live under /api.
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine

from loginapp.presentation.api.dependencies import (
    create_engine_for,
    create_session_maker,
)
from loginapp.presentation.api.exception_handlers import setup_exception_handlers
from loginapp.presentation.api.routers import auth_router
from loginapp.presentation.api.schemas import HealthResponse
from loginapp_config.settings import Settings, get_settings
from loginapp_identity.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
)

API_VERSION = "1.0.0"
API_PREFIX = "/api"


@lru_cache(maxsize=1)
def _configure_logging(log_level_name: str) -> None:
    """Configure application logging.

    Console output with timestamps and module names; WARNING for noisy
    third-party libraries.
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in ("loginapp", "loginapp_auth", "loginapp_identity"):
        logging.getLogger(name).setLevel(log_level)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Account registration, login and password reset.

**Sessions:**
- Stateless HS256 session tokens, 7 days (30 with "remember me")
- Send as `Authorization: Bearer <token>`

**Password reset:**
- Single-use links valid for 1 hour
- Requesting a new link invalidates the previous one
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    engine: AsyncEngine = app.state.engine

    logger.info("Starting %s API v%s...", app.state.settings.app_name, API_VERSION)
    await create_tables(engine)
    yield

    logger.info("Shutting down API...")
    await engine.dispose()
    logger.info("Database connections closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Account registration, login and password reset.",
        version=API_VERSION,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )

    app.state.settings = settings
    app.state.engine = create_engine_for(settings)
    app.state.session_maker = create_session_maker(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(
        auth_router,
        prefix=f"{API_PREFIX}/auth",
        tags=["Authentication"],
    )

    @app.get(f"{API_PREFIX}/health", tags=["Health"])
    async def health_check() -> HealthResponse:
        """Health check endpoint."""
        return HealthResponse(status="healthy", version=API_VERSION)

    return app
