import logging

from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from app.db import bootstrap


def _memory_engine():
    return create_engine("sqlite+pysqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)


def test_schema_bootstrap_creates_missing_tables():
    engine = _memory_engine()

    bootstrap.ensure_schema(engine, auto_create=True)

    assert bootstrap.find_schema_gaps(engine) == ([], {})


def test_schema_bootstrap_warns_when_auto_create_is_off(caplog):
    engine = _memory_engine()

    with caplog.at_level(logging.WARNING, logger="app.db.bootstrap"):
        bootstrap.ensure_schema(engine, auto_create=False)

    missing_tables, _ = bootstrap.find_schema_gaps(engine)
    assert set(missing_tables) == set(bootstrap.REQUIRED_COLUMNS)
    assert "alembic upgrade head" in caplog.text


def test_schema_gaps_report_missing_columns(monkeypatch):
    engine = _memory_engine()
    with engine.begin() as connection:
        connection.execute(text("CREATE TABLE rooms (id VARCHAR(36) PRIMARY KEY, branch_id VARCHAR(36))"))
    monkeypatch.setattr(bootstrap, "REQUIRED_COLUMNS", {"rooms": bootstrap.REQUIRED_COLUMNS["rooms"]})

    missing_tables, missing_columns = bootstrap.find_schema_gaps(engine)

    assert missing_tables == []
    assert missing_columns == {"rooms": ["capacity", "is_active", "room_number"]}
