import uuid
from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.db.base import Base

TEACHER_SLOT_CONSTRAINT = "uq_timetable_entries_teacher_slot"
ROOM_SLOT_CONSTRAINT = "uq_timetable_entries_room_slot"


class TimetableEntry(Base):
    __tablename__ = "timetable_entries"
    __table_args__ = (
        # NULL teacher_id / room_id never collide, so unassigned meetings are unconstrained.
        UniqueConstraint(
            "academic_year_id",
            "teacher_id",
            "day_of_week",
            "time_slot_id",
            name=TEACHER_SLOT_CONSTRAINT,
        ),
        UniqueConstraint(
            "academic_year_id",
            "room_id",
            "day_of_week",
            "time_slot_id",
            name=ROOM_SLOT_CONSTRAINT,
        ),
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_timetable_entries_day_of_week"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    academic_year_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    course_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    # copy of Course.teacher_id, refreshed for the whole cell on every write into it
    # so the teacher/slot constraint sees current assignments
    teacher_id: Mapped[str | None] = mapped_column(String(36), index=True, nullable=True)
    time_slot_id: Mapped[str] = mapped_column(String(36), nullable=False)
    room_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    day_of_week: Mapped[int] = mapped_column(Integer, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())
