"""Fixtures for identity integration tests on a SQLite file database."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from loginapp_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
)
from loginapp_identity.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
)


@pytest.fixture
async def db_engine(tmp_path):
    """A fresh SQLite database file with all identity tables."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'identity.db'}",
        echo=False,
    )
    await create_tables(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def user_repo(db_session) -> UserRepositorySQLAlchemy:
    return UserRepositorySQLAlchemy(db_session)
