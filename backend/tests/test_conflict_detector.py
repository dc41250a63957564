import pytest

from app.core.exceptions import ResourceNotFoundError, SchedulingConflictError
from app.repositories.directory import CourseRef
from app.repositories.timetable_entries import Booking
from app.services.conflict_detector import ConflictDetector, ConflictKind, SlotCandidate


class FakeCourses:
    def __init__(self, courses):
        self.courses = {course.course_id: course for course in courses}

    def get_course(self, course_id):
        return self.courses.get(course_id)


class FakeEntries:
    def __init__(self, teacher_booking=None, room_booking=None):
        self.teacher_booking = teacher_booking
        self.room_booking = room_booking
        self.calls = []

    def find_teacher_booking(self, slot, teacher_id):
        self.calls.append(("teacher", slot, teacher_id))
        return self.teacher_booking

    def find_room_booking(self, slot, room_id):
        self.calls.append(("room", slot, room_id))
        return self.room_booking


@pytest.fixture
def courses():
    return FakeCourses(
        [
            CourseRef(course_id="c-math", course_name="Algebra", teacher_id="t-1"),
            CourseRef(course_id="c-free", course_name="Study Hall", teacher_id=None),
        ]
    )


def candidate(**overrides):
    values = {
        "academic_year_id": "ay-1",
        "course_id": "c-math",
        "time_slot_id": "slot-1",
        "day_of_week": 1,
        "room_id": "room-1",
    }
    values.update(overrides)
    return SlotCandidate(**values)


def test_clear_slot_runs_teacher_then_room_check(courses):
    entries = FakeEntries()
    detector = ConflictDetector(entries, courses)

    result = detector.check(candidate())

    assert result.clear
    assert result.course.teacher_id == "t-1"
    assert [call[0] for call in entries.calls] == ["teacher", "room"]
    slot = entries.calls[0][1]
    assert (slot.academic_year_id, slot.day_of_week, slot.time_slot_id) == ("ay-1", 1, "slot-1")


def test_teacher_conflict_short_circuits_room_check(courses):
    entries = FakeEntries(
        teacher_booking=Booking(entry_id="e-1", course_id="c-geo", course_name="Geometry"),
        room_booking=Booking(entry_id="e-2", course_id="c-art", course_name="Art"),
    )
    detector = ConflictDetector(entries, courses)

    result = detector.check(candidate())

    assert result.conflict.kind is ConflictKind.teacher
    assert result.conflict.message == "Teacher conflict: Already teaching Geometry at this time"
    assert [call[0] for call in entries.calls] == ["teacher"]


def test_room_conflict_names_occupying_course(courses):
    entries = FakeEntries(room_booking=Booking(entry_id="e-2", course_id="c-art", course_name="Art"))
    detector = ConflictDetector(entries, courses)

    result = detector.check(candidate())

    assert result.conflict.kind is ConflictKind.room
    assert result.conflict.message == "Room conflict: Room is already booked for Art"
    assert result.conflict.occupying_course_id == "c-art"


def test_room_check_skipped_without_room(courses):
    entries = FakeEntries(room_booking=Booking(entry_id="e-2", course_id="c-art", course_name="Art"))
    detector = ConflictDetector(entries, courses)

    assert detector.check(candidate(room_id=None)).clear
    assert [call[0] for call in entries.calls] == ["teacher"]


def test_course_without_teacher_only_checks_room(courses):
    entries = FakeEntries(teacher_booking=Booking(entry_id="e-1", course_id="c-geo", course_name="Geometry"))
    detector = ConflictDetector(entries, courses)

    assert detector.check(candidate(course_id="c-free")).clear
    assert [call[0] for call in entries.calls] == ["room"]


def test_unknown_course_is_a_precondition_failure(courses):
    detector = ConflictDetector(FakeEntries(), courses)

    with pytest.raises(ResourceNotFoundError) as excinfo:
        detector.check(candidate(course_id="missing"))
    assert excinfo.value.message == "Course not found"


def test_ensure_available_raises_conflict_error(courses):
    entries = FakeEntries(teacher_booking=Booking(entry_id="e-1", course_id="c-geo", course_name="Geometry"))
    detector = ConflictDetector(entries, courses)

    with pytest.raises(SchedulingConflictError) as excinfo:
        detector.ensure_available(candidate())
    assert excinfo.value.kind == "teacher"
    assert excinfo.value.status_code == 409
    assert excinfo.value.details["occupying_course_id"] == "c-geo"


def test_excluded_entry_is_passed_to_queries(courses):
    entries = FakeEntries()
    detector = ConflictDetector(entries, courses)

    detector.check(candidate(exclude_entry_id="e-self"))

    assert all(call[1].exclude_entry_id == "e-self" for call in entries.calls)
