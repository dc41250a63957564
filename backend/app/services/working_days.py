from __future__ import annotations

import logging
import math
from datetime import date
from typing import Iterable

from sqlalchemy.exc import IntegrityError

from app.core.config import Settings, get_settings
from app.core.exceptions import ResourceNotFoundError, ValidationFailure
from app.models.working_days_config import WorkingDaysConfig
from app.repositories.criteria import ConfigKey, ConfigLookup
from app.repositories.working_days import WorkingDaysConfigRepository
from app.schemas.common import Pagination
from app.schemas.working_days import (
    WorkingDaysCalculateRequest,
    WorkingDaysConfigOut,
    WorkingDaysConfigUpsert,
    WorkingDaysCount,
)
from app.services.result import ServiceResult, service_operation
from app.services.validation import require_identifier

logger = logging.getLogger(__name__)

DEFAULT_WEEKEND_DAYS = (0, 6)


def day_index(value: date) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return (value.weekday() + 1) % 7


def calculate_working_days(start: date, end: date, weekend_days: Iterable[int] = DEFAULT_WEEKEND_DAYS) -> int:
    """Count the days in ``[start, end]`` that are not weekend days.

    Public holidays are not subtracted.
    """
    weekend = set(weekend_days) & set(range(7))
    span = (end - start).days + 1
    if span <= 0:
        return 0
    full_weeks, remainder = divmod(span, 7)
    first = day_index(start)
    tail = sum(1 for offset in range(remainder) if (first + offset) % 7 not in weekend)
    return full_weeks * (7 - len(weekend)) + tail


class WorkingDaysService:
    def __init__(self, configs: WorkingDaysConfigRepository, settings: Settings | None = None) -> None:
        self.configs = configs
        self.settings = settings or get_settings()

    def _rollback(self) -> None:
        self.configs.rollback()

    @service_operation("Failed to fetch working days config")
    def get_config(
        self,
        branch_id: str | None,
        academic_year_id: str | None = None,
        grade_level_id: str | None = None,
    ) -> ServiceResult[WorkingDaysConfigOut]:
        lookup = ConfigLookup(
            branch_id=require_identifier(branch_id, "Branch ID"),
            academic_year_id=academic_year_id or None,
            grade_level_id=grade_level_id or None,
        )
        config = self.configs.find_active(lookup)
        if config is None:
            return ServiceResult.ok("No working days config found")
        return ServiceResult.ok("Working days config fetched successfully", WorkingDaysConfigOut.model_validate(config))

    @service_operation("Failed to fetch working days configs")
    def get_all_configs(
        self,
        branch_id: str | None,
        page: int = 1,
        limit: int | None = None,
    ) -> ServiceResult[list[WorkingDaysConfigOut]]:
        branch_id = require_identifier(branch_id, "Branch ID")
        if limit is None:
            limit = self.settings.default_page_limit
        if page < 1 or limit < 1:
            raise ValidationFailure("page and limit must be positive integers")
        if page > self.settings.max_page_number:
            raise ValidationFailure(f"page must not exceed {self.settings.max_page_number}")
        limit = min(limit, self.settings.max_page_limit)

        configs = self.configs.list_page(branch_id, offset=(page - 1) * limit, limit=limit)
        total = self.configs.count(branch_id)
        pagination = Pagination(page=page, limit=limit, total=total, pages=math.ceil(total / limit))
        return ServiceResult.ok(
            "Working days configs fetched successfully",
            [WorkingDaysConfigOut.model_validate(config) for config in configs],
            pagination=pagination,
        )

    @service_operation("Failed to save working days config")
    def upsert_config(self, payload: WorkingDaysConfigUpsert) -> ServiceResult[WorkingDaysConfigOut]:
        key = ConfigKey(
            branch_id=require_identifier(payload.branch_id, "Branch ID"),
            academic_year_id=payload.academic_year_id,
            grade_level_id=payload.grade_level_id,
        )
        config = self.configs.find_by_key(key)
        created = config is None
        if created:
            try:
                config = self.configs.add(
                    WorkingDaysConfig(
                        branch_id=key.branch_id,
                        academic_year_id=key.academic_year_id,
                        grade_level_id=key.grade_level_id,
                        total_days=payload.total_days,
                        start_date=payload.start_date,
                        end_date=payload.end_date,
                        is_active=True,
                    )
                )
            except IntegrityError:
                # a concurrent upsert inserted the same key first; update its row instead
                self.configs.rollback()
                config = self.configs.find_by_key(key)
                if config is None:
                    raise
                created = False
                logger.info("Working days config key %s was inserted concurrently, updating", key)
        if not created:
            config.total_days = payload.total_days
            config.start_date = payload.start_date
            config.end_date = payload.end_date
            config.is_active = True
        self.configs.commit()
        self.configs.refresh(config)

        action = "created" if created else "updated"
        logger.info("Working days config %s %s for %s", config.id, action, key)
        return ServiceResult.ok(
            f"Working days config {action} successfully",
            WorkingDaysConfigOut.model_validate(config),
            created=created,
        )

    @service_operation("Failed to delete working days config")
    def delete_config(self, config_id: str) -> ServiceResult[None]:
        config = self.configs.get(config_id)
        if config is None:
            raise ResourceNotFoundError("Working days config", config_id)
        self.configs.delete(config)
        self.configs.commit()
        logger.info("Deleted working days config %s", config_id)
        return ServiceResult.ok("Working days config deleted successfully")

    @service_operation("Failed to calculate working days")
    def calculate(self, request: WorkingDaysCalculateRequest) -> ServiceResult[WorkingDaysCount]:
        if request.start_date is None or request.end_date is None or not (request.branch_id or "").strip():
            raise ValidationFailure("Start date, end date, and branch ID are required")
        # branch-specific weekends and holidays are not modelled yet; settings apply to every branch
        total = calculate_working_days(request.start_date, request.end_date, self.settings.weekend_days)
        return ServiceResult.ok("Working days calculated successfully", WorkingDaysCount(workingDays=total))
