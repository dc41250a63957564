from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.models.time_slot import SlotType
from app.schemas.common import TIME_PATTERN, parse_time_to_minutes


class TimeSlotBase(BaseModel):
    slot_name: str = Field(min_length=1, max_length=100)
    start_time: str
    end_time: str
    slot_type: SlotType = SlotType.class_period

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, value: str) -> str:
        if not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM 24-hour format")
        return value


class TimeSlotCreate(TimeSlotBase):
    branch_id: str = Field(min_length=1, max_length=36)
    sort_order: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def validate_order(self) -> "TimeSlotCreate":
        if parse_time_to_minutes(self.end_time) <= parse_time_to_minutes(self.start_time):
            raise ValueError("end_time must be after start_time")
        return self


class TimeSlotUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    slot_name: str | None = Field(default=None, min_length=1, max_length=100)
    start_time: str | None = None
    end_time: str | None = None
    slot_type: SlotType | None = None
    sort_order: int | None = Field(default=None, ge=0)

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_time_format(cls, value: str | None) -> str | None:
        if value is not None and not TIME_PATTERN.match(value):
            raise ValueError("Time must be in HH:MM 24-hour format")
        return value


class TimeSlotOut(TimeSlotBase):
    id: str
    branch_id: str
    sort_order: int
    is_active: bool

    model_config = {"from_attributes": True}
