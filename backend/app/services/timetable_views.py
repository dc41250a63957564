from __future__ import annotations

import logging

from app.core.exceptions import ResourceNotFoundError
from app.repositories.criteria import (
    AcademicYearScope,
    CourseScope,
    CourseSetScope,
    EntryIdScope,
    EntryScope,
    TeacherScope,
)
from app.repositories.directory import EnrollmentDirectory
from app.repositories.timetable_entries import EntryRow, TimetableEntryRepository
from app.schemas.room import RoomOut
from app.schemas.time_slot import TimeSlotOut
from app.schemas.timetable import (
    DAY_NAMES,
    CourseSummary,
    GradeLevelOut,
    SubjectOut,
    TeacherOut,
    TimetableEntryOut,
)
from app.services.result import ServiceResult, service_operation
from app.services.validation import require_identifier

logger = logging.getLogger(__name__)


def project_entry(
    row: EntryRow,
    *,
    with_subject: bool = False,
    with_grade_level: bool = False,
    with_teacher: bool = False,
) -> TimetableEntryOut:
    entry = row.entry
    course = None
    if row.course is not None:
        course = CourseSummary(
            id=row.course.id,
            course_name=row.course.course_name,
            course_code=row.course.course_code,
            teacher_id=row.course.teacher_id,
            subject=SubjectOut.model_validate(row.subject) if with_subject and row.subject else None,
            grade_level=(
                GradeLevelOut.model_validate(row.grade_level) if with_grade_level and row.grade_level else None
            ),
            teacher=TeacherOut.model_validate(row.teacher) if with_teacher and row.teacher else None,
        )
    return TimetableEntryOut(
        id=entry.id,
        academic_year_id=entry.academic_year_id,
        course_id=entry.course_id,
        time_slot_id=entry.time_slot_id,
        room_id=entry.room_id,
        day_of_week=entry.day_of_week,
        day_name=DAY_NAMES[entry.day_of_week],
        is_active=entry.is_active,
        course=course,
        time_slot=TimeSlotOut.model_validate(row.time_slot) if row.time_slot is not None else None,
        room=RoomOut.model_validate(row.room) if row.room is not None else None,
    )


class TimetableViews:
    """Read-only projections of committed entries, ordered by day then period."""

    def __init__(self, entries: TimetableEntryRepository, enrollments: EnrollmentDirectory) -> None:
        self.entries = entries
        self.enrollments = enrollments

    def _rollback(self) -> None:
        self.entries.rollback()

    def _compose(self, scope: EntryScope, **include: bool) -> list[TimetableEntryOut]:
        rows = self.entries.list_rows(scope)
        logger.debug("Composed %d timetable entries for %r", len(rows), scope)
        return [project_entry(row, **include) for row in rows]

    def entry_detail(self, entry_id: str) -> TimetableEntryOut:
        rows = self.entries.list_rows(EntryIdScope(entry_id))
        if not rows:
            raise ResourceNotFoundError("Timetable entry", entry_id)
        return project_entry(rows[0])

    @service_operation("Failed to fetch course timetable")
    def by_course(self, course_id: str | None) -> ServiceResult[list[TimetableEntryOut]]:
        scope = CourseScope(require_identifier(course_id, "Course ID"))
        return ServiceResult.ok("Course timetable fetched successfully", self._compose(scope))

    @service_operation("Failed to fetch teacher timetable")
    def by_teacher(self, teacher_id: str | None) -> ServiceResult[list[TimetableEntryOut]]:
        scope = TeacherScope(require_identifier(teacher_id, "Teacher ID"))
        entries = self._compose(scope, with_subject=True, with_grade_level=True)
        return ServiceResult.ok("Teacher timetable fetched successfully", entries)

    @service_operation("Failed to fetch student timetable")
    def by_student(self, student_id: str | None) -> ServiceResult[list[TimetableEntryOut]]:
        course_ids = self.enrollments.enrolled_course_ids(require_identifier(student_id, "Student ID"))
        entries = self._compose(CourseSetScope(frozenset(course_ids)), with_subject=True, with_teacher=True)
        return ServiceResult.ok("Student timetable fetched successfully", entries)

    @service_operation("Failed to fetch branch timetable")
    def by_branch_year(self, academic_year_id: str | None) -> ServiceResult[list[TimetableEntryOut]]:
        scope = AcademicYearScope(require_identifier(academic_year_id, "Academic year ID"))
        entries = self._compose(scope, with_subject=True, with_grade_level=True, with_teacher=True)
        return ServiceResult.ok("Branch timetable fetched successfully", entries)
