import uuid
from datetime import date, datetime

from sqlalchemy import Boolean, Date, DateTime, Index, Integer, String, literal_column
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.db.base import Base


class WorkingDaysConfig(Base):
    __tablename__ = "working_days_configs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    branch_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    academic_year_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    grade_level_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    total_days: Mapped[int] = mapped_column(Integer, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), onupdate=func.now())


WORKING_DAYS_KEY_INDEX = "uq_working_days_configs_key"

# NULL scopes are part of the key, so they are folded to '' for uniqueness
Index(
    WORKING_DAYS_KEY_INDEX,
    WorkingDaysConfig.branch_id,
    func.coalesce(WorkingDaysConfig.academic_year_id, literal_column("''")),
    func.coalesce(WorkingDaysConfig.grade_level_id, literal_column("''")),
    unique=True,
)
