"""Read-only lookups into records owned by the course and enrollment modules."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.course import Course
from app.models.enrollment import EnrollmentStatus, StudentEnrollment


@dataclass(frozen=True)
class CourseRef:
    course_id: str
    course_name: str
    teacher_id: str | None


class CourseDirectory(Protocol):
    def get_course(self, course_id: str) -> CourseRef | None:
        raise NotImplementedError


class EnrollmentDirectory(Protocol):
    def enrolled_course_ids(self, student_id: str) -> set[str]:
        raise NotImplementedError


class SqlCourseDirectory:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_course(self, course_id: str) -> CourseRef | None:
        course = self.session.get(Course, course_id)
        if course is None:
            return None
        return CourseRef(course_id=course.id, course_name=course.course_name, teacher_id=course.teacher_id)


class SqlEnrollmentDirectory:
    def __init__(self, session: Session) -> None:
        self.session = session

    def enrolled_course_ids(self, student_id: str) -> set[str]:
        query = select(StudentEnrollment.course_id).where(
            StudentEnrollment.student_id == student_id,
            StudentEnrollment.status == EnrollmentStatus.enrolled,
        )
        return set(self.session.execute(query).scalars())
