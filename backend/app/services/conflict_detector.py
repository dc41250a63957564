"""Point-in-time validation of one proposed timetable placement.

The detector does not search for free slots. It answers a single question: is
the course's teacher, or the requested room, already committed at this day and
time slot within the same academic year?
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from app.core.exceptions import ResourceNotFoundError, SchedulingConflictError
from app.repositories.criteria import SlotQuery
from app.repositories.directory import CourseDirectory, CourseRef
from app.repositories.timetable_entries import Booking, TimetableEntryRepository

logger = logging.getLogger(__name__)


class ConflictKind(str, Enum):
    teacher = "teacher"
    room = "room"


@dataclass(frozen=True)
class SlotCandidate:
    academic_year_id: str
    course_id: str
    time_slot_id: str
    day_of_week: int
    room_id: str | None = None
    exclude_entry_id: str | None = None

    def slot_query(self) -> SlotQuery:
        return SlotQuery(
            academic_year_id=self.academic_year_id,
            day_of_week=self.day_of_week,
            time_slot_id=self.time_slot_id,
            exclude_entry_id=self.exclude_entry_id,
        )


@dataclass(frozen=True)
class Conflict:
    kind: ConflictKind
    occupying_entry_id: str | None
    occupying_course_id: str | None
    occupying_course_name: str | None

    @property
    def message(self) -> str:
        name = self.occupying_course_name or "another course"
        if self.kind is ConflictKind.teacher:
            return f"Teacher conflict: Already teaching {name} at this time"
        return f"Room conflict: Room is already booked for {name}"

    @classmethod
    def from_booking(cls, kind: ConflictKind, booking: Booking) -> "Conflict":
        return cls(
            kind=kind,
            occupying_entry_id=booking.entry_id,
            occupying_course_id=booking.course_id,
            occupying_course_name=booking.course_name,
        )

    def to_error(self) -> SchedulingConflictError:
        return SchedulingConflictError(
            self.message,
            kind=self.kind.value,
            occupying_course_id=self.occupying_course_id,
        )


@dataclass(frozen=True)
class ConflictCheck:
    course: CourseRef
    conflict: Conflict | None

    @property
    def clear(self) -> bool:
        return self.conflict is None


class ConflictDetector:
    def __init__(self, entries: TimetableEntryRepository, courses: CourseDirectory) -> None:
        self.entries = entries
        self.courses = courses

    def check(self, candidate: SlotCandidate) -> ConflictCheck:
        """Teacher check first; the room check only runs when the teacher is free."""
        course = self.courses.get_course(candidate.course_id)
        if course is None:
            raise ResourceNotFoundError("Course", candidate.course_id)

        slot = candidate.slot_query()
        if course.teacher_id is not None:
            booking = self.entries.find_teacher_booking(slot, course.teacher_id)
            if booking is not None:
                return ConflictCheck(course=course, conflict=Conflict.from_booking(ConflictKind.teacher, booking))

        if candidate.room_id is not None:
            booking = self.entries.find_room_booking(slot, candidate.room_id)
            if booking is not None:
                return ConflictCheck(course=course, conflict=Conflict.from_booking(ConflictKind.room, booking))

        return ConflictCheck(course=course, conflict=None)

    def ensure_available(self, candidate: SlotCandidate) -> CourseRef:
        result = self.check(candidate)
        if result.conflict is not None:
            logger.info(
                "Rejected placement of course %s on day %d slot %s: %s",
                candidate.course_id,
                candidate.day_of_week,
                candidate.time_slot_id,
                result.conflict.message,
            )
            raise result.conflict.to_error()
        return result.course
