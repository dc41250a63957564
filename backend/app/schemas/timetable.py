from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.room import RoomOut
from app.schemas.time_slot import TimeSlotOut

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


class TimetableEntryCreate(BaseModel):
    academic_year_id: str = Field(min_length=1, max_length=36)
    course_id: str = Field(min_length=1, max_length=36)
    time_slot_id: str = Field(min_length=1, max_length=36)
    room_id: str | None = Field(default=None, min_length=1, max_length=36)
    day_of_week: int = Field(ge=0, le=6)


class TimetableEntryUpdate(BaseModel):
    """Only the placement of an entry can change; course and academic year are fixed."""

    model_config = ConfigDict(extra="forbid")

    time_slot_id: str | None = Field(default=None, min_length=1, max_length=36)
    room_id: str | None = Field(default=None, min_length=1, max_length=36)
    day_of_week: int | None = Field(default=None, ge=0, le=6)


class SubjectOut(BaseModel):
    id: str
    name: str
    code: str | None = None

    model_config = {"from_attributes": True}


class GradeLevelOut(BaseModel):
    id: str
    name: str
    code: str | None = None

    model_config = {"from_attributes": True}


class TeacherOut(BaseModel):
    id: str
    first_name: str
    last_name: str
    email: str | None = None

    model_config = {"from_attributes": True}


class CourseSummary(BaseModel):
    id: str
    course_name: str
    course_code: str | None = None
    teacher_id: str | None = None
    subject: SubjectOut | None = None
    grade_level: GradeLevelOut | None = None
    teacher: TeacherOut | None = None


class TimetableEntryOut(BaseModel):
    id: str
    academic_year_id: str
    course_id: str
    time_slot_id: str
    room_id: str | None
    day_of_week: int
    day_name: str
    is_active: bool
    course: CourseSummary | None = None
    time_slot: TimeSlotOut | None = None
    room: RoomOut | None = None
