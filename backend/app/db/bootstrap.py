from __future__ import annotations

import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from app.db.base import Base
import app.models  # noqa: F401

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS: dict[str, set[str]] = {
    "time_slots": {"id", "branch_id", "start_time", "end_time", "sort_order", "is_active"},
    "rooms": {"id", "branch_id", "room_number", "capacity", "is_active"},
    "timetable_entries": {
        "id",
        "academic_year_id",
        "course_id",
        "teacher_id",
        "time_slot_id",
        "room_id",
        "day_of_week",
        "is_active",
    },
    "working_days_configs": {
        "id",
        "branch_id",
        "academic_year_id",
        "grade_level_id",
        "total_days",
        "start_date",
        "end_date",
        "is_active",
    },
}


def find_schema_gaps(engine: Engine) -> tuple[list[str], dict[str, list[str]]]:
    missing_tables: list[str] = []
    missing_columns: dict[str, list[str]] = {}
    with engine.connect() as connection:
        inspector = inspect(connection)
        table_names = set(inspector.get_table_names())
        for table_name, columns in REQUIRED_COLUMNS.items():
            if table_name not in table_names:
                missing_tables.append(table_name)
                continue
            existing = {item["name"] for item in inspector.get_columns(table_name)}
            missing = sorted(columns - existing)
            if missing:
                missing_columns[table_name] = missing
    return missing_tables, missing_columns


def ensure_schema(engine: Engine, *, auto_create: bool) -> None:
    if auto_create:
        Base.metadata.create_all(bind=engine)
    missing_tables, missing_columns = find_schema_gaps(engine)
    if missing_tables or missing_columns:
        logger.warning(
            "Database schema is behind the models (missing tables: %s, missing columns: %s); "
            "run `alembic upgrade head`",
            missing_tables,
            missing_columns,
        )
