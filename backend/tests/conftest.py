import os

# keep the app-level engine off the filesystem during tests
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite://")

import uuid

import pytest
from fastapi.testclient import TestClient #fake http client that calls the routes without running a server
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.db.base import Base
from app.main import app
from app.models import (
    Course,
    EnrollmentStatus,
    GradeLevel,
    Room,
    StudentEnrollment,
    Subject,
    Teacher,
    TimeSlot,
)
from app.repositories.directory import SqlCourseDirectory, SqlEnrollmentDirectory
from app.repositories.inventory import RoomRepository, TimeSlotRepository
from app.repositories.timetable_entries import TimetableEntryRepository
from app.services.conflict_detector import ConflictDetector
from app.services.timetable_entries import TimetableEntryStore
from app.services.timetable_views import TimetableViews

BRANCH_ID = "branch-1"
ACADEMIC_YEAR_ID = "ay-2024"


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


class Seeder:
    """Writes collaborator and inventory rows directly, returning their ids."""

    def __init__(self, db):
        self.db = db

    def _add(self, instance):
        instance.id = str(uuid.uuid4())
        self.db.add(instance)
        self.db.commit()
        return instance.id

    def teacher(self, first_name="Ada", last_name="Lovelace"):
        return self._add(Teacher(first_name=first_name, last_name=last_name))

    def subject(self, name="Mathematics"):
        return self._add(Subject(name=name))

    def grade_level(self, name="Grade 7"):
        return self._add(GradeLevel(name=name))

    def course(self, name, teacher_id=None, subject_id=None, grade_level_id=None):
        return self._add(
            Course(
                course_name=name,
                branch_id=BRANCH_ID,
                teacher_id=teacher_id,
                subject_id=subject_id,
                grade_level_id=grade_level_id,
            )
        )

    def enrollment(self, student_id, course_id, status=EnrollmentStatus.enrolled):
        return self._add(StudentEnrollment(student_id=student_id, course_id=course_id, status=status))

    def time_slot(self, name="Period 1", start="08:00", end="08:45", sort_order=0, is_active=True):
        return self._add(
            TimeSlot(
                branch_id=BRANCH_ID,
                slot_name=name,
                start_time=start,
                end_time=end,
                sort_order=sort_order,
                is_active=is_active,
            )
        )

    def room(self, number="101", is_active=True):
        return self._add(Room(branch_id=BRANCH_ID, room_number=number, capacity=30, facilities=[], is_active=is_active))


@pytest.fixture()
def seed(db_session):
    return Seeder(db_session)


def build_entry_store(db, detector_cls=ConflictDetector):
    entries = TimetableEntryRepository(db)
    return TimetableEntryStore(
        entries=entries,
        time_slots=TimeSlotRepository(db),
        rooms=RoomRepository(db),
        detector=detector_cls(entries, SqlCourseDirectory(db)),
        views=TimetableViews(entries, SqlEnrollmentDirectory(db)),
    )


@pytest.fixture()
def entry_store(db_session):
    return build_entry_store(db_session)


@pytest.fixture()
def views(db_session):
    return TimetableViews(TimetableEntryRepository(db_session), SqlEnrollmentDirectory(db_session))
