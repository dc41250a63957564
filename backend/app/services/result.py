from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import wraps
from typing import Any, Callable, Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import (
    AppError,
    ResourceNotFoundError,
    SchedulingConflictError,
    ValidationFailure,
)
from app.schemas.common import Pagination

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorKind(str, Enum):
    validation = "validation"
    not_found = "not_found"
    conflict = "conflict"
    persistence = "persistence"


@dataclass
class ServiceResult(Generic[T]):
    success: bool
    message: str
    data: T | None = None
    pagination: Pagination | None = None
    error: ErrorKind | None = None
    created: bool = False

    @classmethod
    def ok(
        cls,
        message: str,
        data: T | None = None,
        *,
        pagination: Pagination | None = None,
        created: bool = False,
    ) -> "ServiceResult[T]":
        return cls(success=True, message=message, data=data, pagination=pagination, created=created)

    @classmethod
    def fail(cls, message: str, error: ErrorKind) -> "ServiceResult[T]":
        return cls(success=False, message=message, error=error)

    @classmethod
    def from_error(cls, exc: AppError) -> "ServiceResult[T]":
        if isinstance(exc, ValidationFailure):
            kind = ErrorKind.validation
        elif isinstance(exc, ResourceNotFoundError):
            kind = ErrorKind.not_found
        elif isinstance(exc, SchedulingConflictError):
            kind = ErrorKind.conflict
        else:
            kind = ErrorKind.persistence
        return cls.fail(exc.message, kind)


def store_error_message(exc: SQLAlchemyError, fallback: str) -> str:
    original = getattr(exc, "orig", None)
    message = str(original if original is not None else exc).strip()
    return message or fallback


def service_operation(failure_message: str) -> Callable:
    """Turns exceptions raised inside a service method into failed ServiceResults.

    The wrapped method's owner must expose ``_rollback()``.
    """

    def decorator(func: Callable[..., ServiceResult[Any]]) -> Callable[..., ServiceResult[Any]]:
        @wraps(func)
        def wrapper(self, *args, **kwargs) -> ServiceResult[Any]:
            try:
                return func(self, *args, **kwargs)
            except AppError as exc:
                self._rollback()
                return ServiceResult.from_error(exc)
            except SQLAlchemyError as exc:
                self._rollback()
                logger.exception("%s", failure_message)
                return ServiceResult.fail(store_error_message(exc, failure_message), ErrorKind.persistence)

        return wrapper

    return decorator
