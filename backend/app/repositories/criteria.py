from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SlotQuery:
    """One (academic year, day, time slot) cell, optionally ignoring an entry being moved."""

    academic_year_id: str
    day_of_week: int
    time_slot_id: str
    exclude_entry_id: str | None = None


@dataclass(frozen=True)
class CourseScope:
    course_id: str


@dataclass(frozen=True)
class TeacherScope:
    teacher_id: str


@dataclass(frozen=True)
class CourseSetScope:
    course_ids: frozenset[str]


@dataclass(frozen=True)
class AcademicYearScope:
    academic_year_id: str


@dataclass(frozen=True)
class EntryIdScope:
    entry_id: str


EntryScope = CourseScope | TeacherScope | CourseSetScope | AcademicYearScope | EntryIdScope


@dataclass(frozen=True)
class ConfigKey:
    """Natural key of a working-days config; None is a real key component."""

    branch_id: str
    academic_year_id: str | None = None
    grade_level_id: str | None = None


@dataclass(frozen=True)
class ConfigLookup:
    """Active-config lookup; None means "any" rather than "unscoped"."""

    branch_id: str
    academic_year_id: str | None = None
    grade_level_id: str | None = None
