import pytest

from app.models.enrollment import EnrollmentStatus
from app.schemas.timetable import TimetableEntryCreate
from app.services.result import ErrorKind
from conftest import ACADEMIC_YEAR_ID


@pytest.fixture
def week(seed, entry_store):
    """Two teachers, three courses and a handful of placements across the week."""
    math = seed.subject("Mathematics")
    science = seed.subject("Science")
    grade = seed.grade_level("Grade 7")
    tom = seed.teacher("Tom", "Teach")
    olga = seed.teacher("Olga", "Other")
    algebra = seed.course("Algebra", teacher_id=tom, subject_id=math, grade_level_id=grade)
    biology = seed.course("Biology", teacher_id=olga, subject_id=science, grade_level_id=grade)
    drama = seed.course("Drama", teacher_id=olga)
    first = seed.time_slot("Period 1", "08:00", "08:45", 0)
    second = seed.time_slot("Period 2", "08:50", "09:35", 1)
    room = seed.room("101")

    def place(course_id, slot_id, day, academic_year_id=ACADEMIC_YEAR_ID):
        result = entry_store.create_entry(
            TimetableEntryCreate(
                academic_year_id=academic_year_id,
                course_id=course_id,
                time_slot_id=slot_id,
                day_of_week=day,
                room_id=room if academic_year_id == ACADEMIC_YEAR_ID and day == 1 and slot_id == first else None,
            )
        )
        assert result.success, result.message
        return result.data.id

    place(algebra, second, 3)
    place(algebra, second, 1)
    place(algebra, first, 1)
    place(biology, second, 2)
    place(drama, first, 5)
    place(biology, first, 4, academic_year_id="ay-2025")

    return {
        "tom": tom,
        "olga": olga,
        "algebra": algebra,
        "biology": biology,
        "drama": drama,
    }


def _placements(entries):
    return [(entry.day_of_week, entry.time_slot.slot_name) for entry in entries]


def test_course_view_orders_by_day_then_period(views, week):
    result = views.by_course(week["algebra"])

    assert result.success
    assert result.message == "Course timetable fetched successfully"
    assert _placements(result.data) == [(1, "Period 1"), (1, "Period 2"), (3, "Period 2")]
    first = result.data[0]
    assert first.day_name == "Monday"
    assert first.room.room_number == "101"
    assert first.course.course_name == "Algebra"
    assert first.course.subject is None


def test_teacher_view_includes_subject_and_grade_level(views, week):
    result = views.by_teacher(week["olga"])

    assert result.message == "Teacher timetable fetched successfully"
    assert [entry.course.course_name for entry in result.data] == ["Biology", "Biology", "Drama"]
    biology = result.data[0]
    assert biology.course.subject.name == "Science"
    assert biology.course.grade_level.name == "Grade 7"
    assert biology.course.teacher is None
    assert result.data[2].course.subject is None


def test_student_view_only_shows_enrolled_courses(views, week, seed):
    seed.enrollment("student-1", week["algebra"])
    seed.enrollment("student-1", week["biology"])
    seed.enrollment("student-1", week["drama"], status=EnrollmentStatus.dropped)

    result = views.by_student("student-1")

    assert result.message == "Student timetable fetched successfully"
    names = {entry.course.course_name for entry in result.data}
    assert names == {"Algebra", "Biology"}
    algebra = next(entry for entry in result.data if entry.course.course_name == "Algebra")
    assert algebra.course.teacher.first_name == "Tom"
    assert algebra.course.subject.name == "Mathematics"
    assert algebra.course.grade_level is None


def test_student_without_enrollments_gets_empty_timetable(views, week):
    result = views.by_student("nobody")

    assert result.success
    assert result.data == []


def test_branch_view_is_scoped_to_academic_year(views, week):
    result = views.by_branch_year(ACADEMIC_YEAR_ID)

    assert result.message == "Branch timetable fetched successfully"
    assert len(result.data) == 5
    assert [entry.day_of_week for entry in result.data] == sorted(entry.day_of_week for entry in result.data)
    entry = result.data[0]
    assert entry.course.subject is not None
    assert entry.course.grade_level is not None
    assert entry.course.teacher is not None

    next_year = views.by_branch_year("ay-2025")
    assert [entry.course.course_name for entry in next_year.data] == ["Biology"]


def test_views_require_identifiers(views):
    result = views.by_teacher(" ")

    assert not result.success
    assert result.error is ErrorKind.validation
    assert result.message == "Teacher ID is required"


def test_view_endpoints(client, seed):
    teacher = seed.teacher()
    course = seed.course("Algebra", teacher_id=teacher)
    slot = seed.time_slot()
    client.post(
        "/api/timetable/entries",
        json={"academic_year_id": ACADEMIC_YEAR_ID, "course_id": course, "time_slot_id": slot, "day_of_week": 2},
    )
    seed.enrollment("student-1", course)

    for path in (
        f"/api/timetable/course/{course}",
        f"/api/timetable/teacher/{teacher}",
        "/api/timetable/student/student-1",
        f"/api/timetable/branch/{ACADEMIC_YEAR_ID}",
    ):
        response = client.get(path)
        assert response.status_code == 200, path
        body = response.json()
        assert body["success"] is True
        assert [entry["day_name"] for entry in body["data"]] == ["Tuesday"]

    assert client.get("/api/timetable/course/unknown").json()["data"] == []
