from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from app.core.config import Settings
from app.models.working_days_config import WorkingDaysConfig
from app.repositories.working_days import WorkingDaysConfigRepository
from app.schemas.working_days import WorkingDaysCalculateRequest, WorkingDaysConfigUpsert
from app.services.result import ErrorKind
from app.services.working_days import WorkingDaysService, calculate_working_days, day_index
from conftest import BRANCH_ID


@pytest.fixture
def service(db_session):
    return WorkingDaysService(WorkingDaysConfigRepository(db_session), Settings(max_page_limit=2))


def _upsert(service, total_days=180, **overrides):
    payload = {
        "branch_id": BRANCH_ID,
        "academic_year_id": "ay-2024",
        "total_days": total_days,
        "start_date": date(2024, 9, 1),
        "end_date": date(2025, 6, 30),
    }
    payload.update(overrides)
    return service.upsert_config(WorkingDaysConfigUpsert(**payload))


def test_day_index_starts_on_sunday():
    assert day_index(date(2024, 1, 7)) == 0
    assert day_index(date(2024, 1, 1)) == 1
    assert day_index(date(2024, 1, 6)) == 6


@pytest.mark.parametrize(
    ("start", "end", "expected"),
    [
        (date(2024, 1, 1), date(2024, 1, 7), 5),
        (date(2024, 1, 3), date(2024, 1, 3), 1),
        (date(2024, 1, 6), date(2024, 1, 6), 0),
        (date(2024, 1, 7), date(2024, 1, 1), 0),
        (date(2024, 1, 1), date(2024, 1, 31), 23),
    ],
)
def test_calculate_working_days(start, end, expected):
    assert calculate_working_days(start, end) == expected


def test_calculate_working_days_with_custom_weekend():
    # Friday/Saturday weekend
    assert calculate_working_days(date(2024, 1, 1), date(2024, 1, 7), weekend_days=[5, 6]) == 5
    assert calculate_working_days(date(2024, 1, 5), date(2024, 1, 5), weekend_days=[5, 6]) == 0


def test_upsert_creates_then_updates_same_key(service):
    created = _upsert(service, total_days=180)
    updated = _upsert(service, total_days=175, end_date=date(2025, 6, 20))

    assert created.created is True
    assert created.message == "Working days config created successfully"
    assert updated.created is False
    assert updated.message == "Working days config updated successfully"
    assert updated.data.id == created.data.id
    assert updated.data.total_days == 175
    assert updated.data.end_date == date(2025, 6, 20)

    listed = service.get_all_configs(BRANCH_ID)
    assert listed.pagination.total == 1


def test_upsert_treats_missing_scope_as_its_own_key(service):
    scoped = _upsert(service)
    branch_wide = _upsert(service, academic_year_id=None)
    grade_scoped = _upsert(service, grade_level_id="grade-7")
    branch_wide_again = _upsert(service, academic_year_id="", total_days=150)

    assert len({scoped.data.id, branch_wide.data.id, grade_scoped.data.id}) == 3
    assert branch_wide_again.data.id == branch_wide.data.id
    assert branch_wide_again.data.academic_year_id is None


def test_upsert_rejects_inverted_range():
    with pytest.raises(ValueError):
        WorkingDaysConfigUpsert(
            branch_id=BRANCH_ID,
            total_days=10,
            start_date=date(2024, 9, 1),
            end_date=date(2024, 8, 1),
        )


def test_get_config_filters(service):
    _upsert(service, academic_year_id="ay-2024", total_days=180)
    _upsert(service, academic_year_id="ay-2025", total_days=170)

    year = service.get_config(BRANCH_ID, "ay-2025")
    missing = service.get_config(BRANCH_ID, "ay-2030")
    other_branch = service.get_config("branch-2")

    assert year.success
    assert year.message == "Working days config fetched successfully"
    assert year.data.total_days == 170
    assert missing.success
    assert missing.message == "No working days config found"
    assert missing.data is None
    assert other_branch.data is None


def test_get_config_requires_branch(service):
    result = service.get_config(None)

    assert result.error is ErrorKind.validation
    assert result.message == "Branch ID is required"


def test_get_all_configs_paginates_and_clamps_limit(service):
    for year in ("ay-2022", "ay-2023", "ay-2024"):
        _upsert(service, academic_year_id=year)

    first_page = service.get_all_configs(BRANCH_ID, page=1, limit=50)
    last_page = service.get_all_configs(BRANCH_ID, page=2, limit=2)

    assert first_page.pagination.limit == 2
    assert first_page.pagination.total == 3
    assert first_page.pagination.pages == 2
    assert len(first_page.data) == 2
    assert len(last_page.data) == 1
    assert service.get_all_configs(BRANCH_ID, page=0).error is ErrorKind.validation


def test_delete_config(service):
    config_id = _upsert(service).data.id

    deleted = service.delete_config(config_id)
    missing = service.delete_config(config_id)

    assert deleted.message == "Working days config deleted successfully"
    assert missing.error is ErrorKind.not_found
    assert missing.message == "Working days config not found"


def test_calculate_requires_all_inputs(service):
    result = service.calculate(WorkingDaysCalculateRequest(start_date=date(2024, 1, 1), branch_id=BRANCH_ID))

    assert result.error is ErrorKind.validation
    assert result.message == "Start date, end date, and branch ID are required"


def test_working_days_endpoints(client):
    payload = {
        "branch_id": BRANCH_ID,
        "academic_year_id": "ay-2024",
        "total_days": 180,
        "start_date": "2024-09-01",
        "end_date": "2025-06-30",
    }

    created = client.post("/api/working-days", json=payload)
    updated = client.put("/api/working-days", json={**payload, "total_days": 178})

    assert created.status_code == 201
    assert updated.status_code == 200
    assert updated.json()["data"]["total_days"] == 178

    fetched = client.get("/api/working-days", params={"branch_id": BRANCH_ID, "academic_year_id": "ay-2024"})
    assert fetched.json()["data"]["id"] == created.json()["data"]["id"]

    empty = client.get("/api/working-days", params={"branch_id": "branch-2"})
    assert empty.status_code == 200
    assert empty.json() == {"success": True, "message": "No working days config found"}

    listed = client.get("/api/working-days/all", params={"branch_id": BRANCH_ID})
    assert listed.json()["pagination"] == {"page": 1, "limit": 20, "total": 1, "pages": 1}

    config_id = created.json()["data"]["id"]
    assert client.delete(f"/api/working-days/{config_id}").status_code == 200
    assert client.delete(f"/api/working-days/{config_id}").status_code == 404


def test_calculate_endpoint(client):
    response = client.post(
        "/api/working-days/calculate",
        json={"start_date": "2024-01-01", "end_date": "2024-01-07", "branch_id": BRANCH_ID},
    )
    incomplete = client.post("/api/working-days/calculate", json={"start_date": "2024-01-01"})

    assert response.status_code == 200
    assert response.json()["data"] == {"workingDays": 5}
    assert incomplete.status_code == 400
    assert incomplete.json() == {
        "success": False,
        "message": "Start date, end date, and branch ID are required",
    }


def test_calculate_working_days_at_the_end_of_the_calendar():
    # 9999-12-27 is a Monday and 9999-12-31 the last representable date
    assert calculate_working_days(date(9999, 12, 27), date.max) == 5


def test_calculate_working_days_over_a_full_year():
    assert calculate_working_days(date(2024, 1, 1), date(2024, 12, 31)) == 262


def test_get_all_configs_rejects_page_past_the_maximum(service):
    result = service.get_all_configs(BRANCH_ID, page=10**20, limit=10)

    assert result.error is ErrorKind.validation
    assert result.message == "page must not exceed 10000"


def test_calendar_edges_stay_inside_the_envelope(client):
    calculated = client.post(
        "/api/working-days/calculate",
        json={"start_date": "9999-12-27", "end_date": "9999-12-31", "branch_id": BRANCH_ID},
    )
    deep_page = client.get("/api/working-days/all", params={"branch_id": BRANCH_ID, "page": 10**20})

    assert calculated.status_code == 200
    assert calculated.json()["data"] == {"workingDays": 5}
    assert deep_page.status_code == 400
    assert deep_page.json() == {"success": False, "message": "page must not exceed 10000"}


def test_calculate_body_uses_snake_case_keys(client):
    response = client.post(
        "/api/working-days/calculate",
        json={"startDate": "2024-01-01", "endDate": "2024-01-07", "branchId": BRANCH_ID},
    )

    assert response.status_code == 400


def test_upsert_that_loses_an_insert_race_updates_the_winner(db_session, monkeypatch):
    repository = WorkingDaysConfigRepository(db_session)
    service = WorkingDaysService(repository, Settings())
    winner = _upsert(service, total_days=180)

    real_find_by_key = repository.find_by_key
    lookups = []

    def stale_then_real(key):
        lookups.append(key)
        return None if len(lookups) == 1 else real_find_by_key(key)

    monkeypatch.setattr(repository, "find_by_key", stale_then_real)

    result = _upsert(service, total_days=160)

    assert result.success, result.message
    assert result.created is False
    assert result.data.id == winner.data.id
    assert result.data.total_days == 160
    assert repository.count(BRANCH_ID) == 1


def test_config_key_is_unique_in_the_database(db_session):
    for _ in range(2):
        db_session.add(
            WorkingDaysConfig(
                branch_id=BRANCH_ID,
                academic_year_id=None,
                grade_level_id=None,
                total_days=100,
                start_date=date(2024, 9, 1),
                end_date=date(2025, 6, 30),
            )
        )
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()
