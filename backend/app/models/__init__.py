from app.models.course import Course, GradeLevel, Subject  # noqa: F401
from app.models.enrollment import EnrollmentStatus, StudentEnrollment  # noqa: F401
from app.models.room import Room, RoomType  # noqa: F401
from app.models.teacher import Teacher  # noqa: F401
from app.models.time_slot import SlotType, TimeSlot  # noqa: F401
from app.models.timetable_entry import TimetableEntry  # noqa: F401
from app.models.working_days_config import WorkingDaysConfig  # noqa: F401
