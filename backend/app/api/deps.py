from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.db.session import SessionLocal
from app.repositories.directory import SqlCourseDirectory, SqlEnrollmentDirectory
from app.repositories.inventory import RoomRepository, TimeSlotRepository
from app.repositories.timetable_entries import TimetableEntryRepository
from app.repositories.working_days import WorkingDaysConfigRepository
from app.services.conflict_detector import ConflictDetector
from app.services.inventory import RoomRegistry, TimeSlotRegistry
from app.services.timetable_entries import TimetableEntryStore
from app.services.timetable_views import TimetableViews
from app.services.working_days import WorkingDaysService


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_time_slot_registry(db: Session = Depends(get_db)) -> TimeSlotRegistry:
    return TimeSlotRegistry(TimeSlotRepository(db))


def get_room_registry(db: Session = Depends(get_db)) -> RoomRegistry:
    return RoomRegistry(RoomRepository(db), get_settings())


def get_timetable_views(db: Session = Depends(get_db)) -> TimetableViews:
    return TimetableViews(TimetableEntryRepository(db), SqlEnrollmentDirectory(db))


def get_timetable_store(db: Session = Depends(get_db)) -> TimetableEntryStore:
    entries = TimetableEntryRepository(db)
    return TimetableEntryStore(
        entries=entries,
        time_slots=TimeSlotRepository(db),
        rooms=RoomRepository(db),
        detector=ConflictDetector(entries, SqlCourseDirectory(db)),
        views=TimetableViews(entries, SqlEnrollmentDirectory(db)),
    )


def get_working_days_service(db: Session = Depends(get_db)) -> WorkingDaysService:
    return WorkingDaysService(WorkingDaysConfigRepository(db), get_settings())
