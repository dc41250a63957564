from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.room import RoomType


def _clean_facilities(value: list[str] | None) -> list[str] | None:
    if value is None:
        return None
    cleaned: list[str] = []
    for item in value:
        tag = item.strip()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


class RoomBase(BaseModel):
    room_number: str = Field(min_length=1, max_length=50)
    room_name: str | None = Field(default=None, max_length=200)
    building: str | None = Field(default=None, max_length=200)
    floor: str | None = Field(default=None, max_length=50)
    room_type: RoomType = RoomType.classroom
    facilities: list[str] = Field(default_factory=list, max_length=50)

    @field_validator("facilities")
    @classmethod
    def validate_facilities(cls, value: list[str]) -> list[str]:
        return _clean_facilities(value)


class RoomCreate(RoomBase):
    branch_id: str = Field(min_length=1, max_length=36)
    capacity: int | None = Field(default=None, ge=1, le=5000)


class RoomUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    room_number: str | None = Field(default=None, min_length=1, max_length=50)
    room_name: str | None = Field(default=None, max_length=200)
    building: str | None = Field(default=None, max_length=200)
    floor: str | None = Field(default=None, max_length=50)
    capacity: int | None = Field(default=None, ge=1, le=5000)
    room_type: RoomType | None = None
    facilities: list[str] | None = Field(default=None, max_length=50)

    @field_validator("facilities")
    @classmethod
    def validate_facilities(cls, value: list[str] | None) -> list[str] | None:
        return _clean_facilities(value)


class RoomOut(RoomBase):
    id: str
    branch_id: str
    capacity: int
    is_active: bool

    model_config = {"from_attributes": True}
