"""Engine construction shared by the API and the ``loginapp-db`` command."""

from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine


def prepare_database_url(url: str) -> str:
    """Ensure the data directory exists for file-based SQLite URLs."""
    if url.startswith("sqlite") and ":memory:" not in url:
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return url


def create_engine_from_url(url: str, **kwargs) -> AsyncEngine:
    return create_async_engine(prepare_database_url(url), echo=False, **kwargs)
