from __future__ import annotations

import re
from typing import Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def parse_time_to_minutes(value: str) -> int:
    if not TIME_PATTERN.match(value):
        raise ValueError("Time must be in HH:MM 24-hour format")
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class ApiResponse(BaseModel, Generic[T]):
    success: bool
    message: str
    data: T | None = None
    pagination: Pagination | None = None


class MessageResponse(BaseModel):
    success: bool
    message: str
