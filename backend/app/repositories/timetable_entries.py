from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import select

from app.models.course import Course, GradeLevel, Subject
from app.models.room import Room
from app.models.teacher import Teacher
from app.models.time_slot import TimeSlot
from app.models.timetable_entry import TimetableEntry
from app.repositories.base import SqlRepository
from app.repositories.criteria import (
    AcademicYearScope,
    CourseScope,
    CourseSetScope,
    EntryIdScope,
    EntryScope,
    SlotQuery,
    TeacherScope,
)


@dataclass(frozen=True)
class Booking:
    entry_id: str
    course_id: str
    course_name: str | None


@dataclass(frozen=True)
class EntryRow:
    entry: TimetableEntry
    time_slot: TimeSlot | None
    room: Room | None
    course: Course | None
    subject: Subject | None
    grade_level: GradeLevel | None
    teacher: Teacher | None


class TimetableEntryRepository(SqlRepository):
    def get(self, entry_id: str) -> TimetableEntry | None:
        return self.session.get(TimetableEntry, entry_id)

    def add(self, entry: TimetableEntry) -> TimetableEntry:
        self.session.add(entry)
        self.session.flush()
        return entry

    def delete(self, entry: TimetableEntry) -> None:
        self.session.delete(entry)
        self.session.flush()

    def find_teacher_booking(self, slot: SlotQuery, teacher_id: str) -> Booking | None:
        query = (
            select(TimetableEntry.id, TimetableEntry.course_id, Course.course_name)
            .outerjoin(Course, Course.id == TimetableEntry.course_id)
            .where(Course.teacher_id == teacher_id, *self._slot_filters(slot))
            .order_by(TimetableEntry.created_at.asc())
            .limit(1)
        )
        return self._first_booking(query)

    def sync_slot_teachers(self, slot: SlotQuery) -> int:
        """Copy each course's current teacher onto the entries in one (year, day, slot) cell.

        Returns the number of rows rewritten. When a reassignment has left two courses
        in the cell with the same teacher, only the earliest entry keeps the teacher id.
        """
        query = (
            select(TimetableEntry, Course.teacher_id)
            .outerjoin(Course, Course.id == TimetableEntry.course_id)
            .where(
                TimetableEntry.academic_year_id == slot.academic_year_id,
                TimetableEntry.day_of_week == slot.day_of_week,
                TimetableEntry.time_slot_id == slot.time_slot_id,
            )
            .order_by(TimetableEntry.created_at.asc(), TimetableEntry.id.asc())
        )
        taken: set[str] = set()
        stale: list[tuple[TimetableEntry, str | None]] = []
        for entry, current_teacher_id in self.session.execute(query).all():
            if current_teacher_id in taken:
                current_teacher_id = None
            if current_teacher_id is not None:
                taken.add(current_teacher_id)
            if entry.teacher_id != current_teacher_id:
                stale.append((entry, current_teacher_id))
        if not stale:
            return 0

        # clear first so swapped teachers never collide mid-flush
        for entry, _ in stale:
            entry.teacher_id = None
        self.session.flush()
        for entry, current_teacher_id in stale:
            entry.teacher_id = current_teacher_id
        self.session.flush()
        return len(stale)

    def find_room_booking(self, slot: SlotQuery, room_id: str) -> Booking | None:
        query = (
            select(TimetableEntry.id, TimetableEntry.course_id, Course.course_name)
            .outerjoin(Course, Course.id == TimetableEntry.course_id)
            .where(TimetableEntry.room_id == room_id, *self._slot_filters(slot))
            .order_by(TimetableEntry.created_at.asc())
            .limit(1)
        )
        return self._first_booking(query)

    def list_rows(self, scope: EntryScope) -> list[EntryRow]:
        if isinstance(scope, CourseSetScope) and not scope.course_ids:
            return []

        query = (
            select(TimetableEntry, TimeSlot, Room, Course, Subject, GradeLevel, Teacher)
            .outerjoin(TimeSlot, TimeSlot.id == TimetableEntry.time_slot_id)
            .outerjoin(Room, Room.id == TimetableEntry.room_id)
            .outerjoin(Course, Course.id == TimetableEntry.course_id)
            .outerjoin(Subject, Subject.id == Course.subject_id)
            .outerjoin(GradeLevel, GradeLevel.id == Course.grade_level_id)
            .outerjoin(Teacher, Teacher.id == Course.teacher_id)
            .where(TimetableEntry.is_active.is_(True), self._scope_filter(scope))
            .order_by(
                TimetableEntry.day_of_week.asc(),
                TimeSlot.sort_order.asc(),
                TimeSlot.start_time.asc(),
            )
        )
        return [EntryRow(*row) for row in self.session.execute(query).all()]

    @staticmethod
    def _slot_filters(slot: SlotQuery) -> list:
        filters = [
            TimetableEntry.academic_year_id == slot.academic_year_id,
            TimetableEntry.day_of_week == slot.day_of_week,
            TimetableEntry.time_slot_id == slot.time_slot_id,
            TimetableEntry.is_active.is_(True),
        ]
        if slot.exclude_entry_id is not None:
            filters.append(TimetableEntry.id != slot.exclude_entry_id)
        return filters

    @staticmethod
    def _scope_filter(scope: EntryScope):
        if isinstance(scope, CourseScope):
            return TimetableEntry.course_id == scope.course_id
        if isinstance(scope, TeacherScope):
            return Course.teacher_id == scope.teacher_id
        if isinstance(scope, CourseSetScope):
            return TimetableEntry.course_id.in_(sorted(scope.course_ids))
        if isinstance(scope, AcademicYearScope):
            return TimetableEntry.academic_year_id == scope.academic_year_id
        if isinstance(scope, EntryIdScope):
            return TimetableEntry.id == scope.entry_id
        raise TypeError(f"Unsupported entry scope: {scope!r}")

    def _first_booking(self, query) -> Booking | None:
        row = self.session.execute(query).first()
        if row is None:
            return None
        return Booking(entry_id=row[0], course_id=row[1], course_name=row[2])
