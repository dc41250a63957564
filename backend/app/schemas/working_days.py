from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator


class WorkingDaysConfigUpsert(BaseModel):
    branch_id: str = Field(min_length=1, max_length=36)
    academic_year_id: str | None = Field(default=None, max_length=36)
    grade_level_id: str | None = Field(default=None, max_length=36)
    total_days: int = Field(ge=0, le=366)
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def validate_range(self) -> "WorkingDaysConfigUpsert":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        # empty strings from query-string style clients mean "no scope"
        self.academic_year_id = self.academic_year_id or None
        self.grade_level_id = self.grade_level_id or None
        return self


class WorkingDaysConfigOut(BaseModel):
    id: str
    branch_id: str
    academic_year_id: str | None
    grade_level_id: str | None
    total_days: int
    start_date: date
    end_date: date
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}


class WorkingDaysCalculateRequest(BaseModel):
    start_date: date | None = None
    end_date: date | None = None
    branch_id: str | None = None


class WorkingDaysCount(BaseModel):
    """The one camelCase key in the API; existing clients read ``workingDays``."""

    workingDays: int
