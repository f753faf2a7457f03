"""Integration tests for the database init helpers and CLI."""

import sqlite3
import sys

import pytest
from sqlalchemy import inspect

from loginapp_identity.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
    drop_tables,
    main,
)

pytestmark = pytest.mark.integration


async def _table_names(engine) -> list[str]:
    async with engine.connect() as conn:
        return await conn.run_sync(lambda c: inspect(c).get_table_names())


@pytest.mark.asyncio
async def test_create_tables_is_idempotent(db_engine):
    await create_tables(db_engine)

    assert "users" in await _table_names(db_engine)


@pytest.mark.asyncio
async def test_drop_tables(db_engine):
    await drop_tables(db_engine)

    assert await _table_names(db_engine) == []


class TestCli:
    def test_init_command(self, tmp_path, monkeypatch, jwt_secret):
        db_file = tmp_path / "cli.db"
        monkeypatch.setenv("JWT_SECRET_KEY", jwt_secret)
        monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_file}")
        monkeypatch.setattr(sys, "argv", ["loginapp-db", "init"])

        main()

        with sqlite3.connect(db_file) as conn:
            tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master")}
        assert "users" in tables

    def test_init_with_default_url_creates_data_directory(
        self, tmp_path, monkeypatch, jwt_secret
    ):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.setenv("JWT_SECRET_KEY", jwt_secret)
        monkeypatch.setattr(sys, "argv", ["loginapp-db", "init"])

        main()

        db_file = tmp_path / "data" / "loginapp.db"
        assert db_file.is_file()
        with sqlite3.connect(db_file) as conn:
            tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master")}
        assert "users" in tables

    def test_unknown_command_exits(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["loginapp-db", "explode"])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 2
        assert "Usage" in capsys.readouterr().out
