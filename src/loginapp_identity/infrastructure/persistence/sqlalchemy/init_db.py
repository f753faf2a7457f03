"""Database initialization utilities."""

import asyncio
import logging
import sys

from sqlalchemy.ext.asyncio import AsyncEngine

# Import models to register with IdentityBase.metadata
import loginapp_identity.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from loginapp_config.settings import get_settings
from loginapp_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase
from loginapp_identity.infrastructure.persistence.sqlalchemy.engine import (
    create_engine_from_url,
)

logger = logging.getLogger(__name__)


def _get_engine() -> AsyncEngine:
    settings = get_settings()
    return create_engine_from_url(settings.database_url)


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables (idempotent).

    Only missing tables are created; existing tables and their data are
    left alone. An engine passed in by the caller is not disposed.
    """
    own_engine = engine is None
    engine = engine or _get_engine()
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.create_all)

    if own_engine:
        await engine.dispose()
    logger.info("Database schema is up to date")


async def drop_tables(engine: AsyncEngine | None = None) -> None:
    """Drop all database tables (USE WITH CAUTION!)."""
    own_engine = engine is None
    engine = engine or _get_engine()
    logger.warning("Dropping all database tables...")

    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.drop_all)

    if own_engine:
        await engine.dispose()
    logger.info("Database tables dropped successfully")


async def _reset_database() -> None:
    await drop_tables()
    await create_tables()


COMMANDS = {
    "init": create_tables,
    "drop": drop_tables,
    "reset": _reset_database,
}


def main() -> None:
    """Entry point for ``loginapp-db init|drop|reset``."""
    logging.basicConfig(level=logging.INFO)

    command = sys.argv[1] if len(sys.argv) > 1 else "init"
    if command not in COMMANDS:
        print(f"Usage: loginapp-db [{'|'.join(COMMANDS)}]")  # noqa: T201
        sys.exit(2)

    logger.info("Database URL: %s", get_settings().database_url)
    asyncio.run(COMMANDS[command]())


if __name__ == "__main__":
    main()
