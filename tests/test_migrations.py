"""Migrations: the alembic history builds exactly the schema the models declare.

Tests cover:
    - upgrade head runs through the async env on SQLite
    - no table, column, index or unique drift between migration and models
    - the status CHECK constraint exists in the migrated schema
"""

import sqlite3
from pathlib import Path

import pytest
from alembic import command
from alembic.autogenerate import compare_metadata
from alembic.config import Config
from alembic.migration import MigrationContext
from sqlalchemy import create_engine

from locallibrary.db.base import Base
import locallibrary.models  # noqa: F401

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def migrated_db(tmp_path, monkeypatch):
    db_path = tmp_path / "migrated.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    cfg = Config(str(ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(ROOT / "alembic"))
    command.upgrade(cfg, "head")
    return db_path


def test_migration_matches_models(migrated_db):
    engine = create_engine(f"sqlite:///{migrated_db}")
    try:
        with engine.connect() as conn:
            context = MigrationContext.configure(conn, opts={"compare_type": False})
            diff = compare_metadata(context, Base.metadata)
    finally:
        engine.dispose()
    assert diff == []


def test_migrated_schema_rejects_unknown_status(migrated_db):
    conn = sqlite3.connect(migrated_db)
    try:
        with pytest.raises(sqlite3.IntegrityError):
            conn.execute(
                "INSERT INTO book_instances (id, book_id, imprint, status) "
                "VALUES ('a', 'b', 'X', 'Lost')",
            )
    finally:
        conn.close()
