from __future__ import annotations

from sqlalchemy import func, select

from app.models.working_days_config import WorkingDaysConfig
from app.repositories.base import SqlRepository
from app.repositories.criteria import ConfigKey, ConfigLookup


def _key_filter(column, value: str | None):
    return column.is_(None) if value is None else column == value


class WorkingDaysConfigRepository(SqlRepository):
    def get(self, config_id: str) -> WorkingDaysConfig | None:
        return self.session.get(WorkingDaysConfig, config_id)

    def find_active(self, lookup: ConfigLookup) -> WorkingDaysConfig | None:
        query = select(WorkingDaysConfig).where(
            WorkingDaysConfig.branch_id == lookup.branch_id,
            WorkingDaysConfig.is_active.is_(True),
        )
        if lookup.academic_year_id:
            query = query.where(WorkingDaysConfig.academic_year_id == lookup.academic_year_id)
        if lookup.grade_level_id:
            query = query.where(WorkingDaysConfig.grade_level_id == lookup.grade_level_id)
        query = query.order_by(WorkingDaysConfig.created_at.desc()).limit(1)
        return self.session.execute(query).scalars().first()

    def find_by_key(self, key: ConfigKey) -> WorkingDaysConfig | None:
        query = select(WorkingDaysConfig).where(
            WorkingDaysConfig.branch_id == key.branch_id,
            _key_filter(WorkingDaysConfig.academic_year_id, key.academic_year_id),
            _key_filter(WorkingDaysConfig.grade_level_id, key.grade_level_id),
        )
        return self.session.execute(query.limit(1)).scalars().first()

    def list_page(self, branch_id: str, *, offset: int, limit: int) -> list[WorkingDaysConfig]:
        query = (
            select(WorkingDaysConfig)
            .where(WorkingDaysConfig.branch_id == branch_id)
            .order_by(WorkingDaysConfig.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(self.session.execute(query).scalars())

    def count(self, branch_id: str) -> int:
        return self.session.execute(
            select(func.count()).select_from(WorkingDaysConfig).where(WorkingDaysConfig.branch_id == branch_id)
        ).scalar_one()

    def add(self, config: WorkingDaysConfig) -> WorkingDaysConfig:
        self.session.add(config)
        self.session.flush()
        return config

    def delete(self, config: WorkingDaysConfig) -> None:
        self.session.delete(config)
        self.session.flush()
