"""create scheduling tables

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    slot_type = sa.Enum("class", "break", "lunch", name="slot_type")
    room_type = sa.Enum("classroom", "lab", "auditorium", "library", name="room_type")
    enrollment_status = sa.Enum("enrolled", "dropped", "completed", name="enrollment_status")

    op.create_table(
        "teachers",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "subjects",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=True),
    )

    op.create_table(
        "grade_levels",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("code", sa.String(length=50), nullable=True),
    )

    op.create_table(
        "courses",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("course_name", sa.String(length=200), nullable=False),
        sa.Column("course_code", sa.String(length=50), nullable=True),
        sa.Column("branch_id", sa.String(length=36), nullable=True),
        sa.Column("subject_id", sa.String(length=36), nullable=True),
        sa.Column("grade_level_id", sa.String(length=36), nullable=True),
        sa.Column("teacher_id", sa.String(length=36), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_courses_teacher_id", "courses", ["teacher_id"])

    op.create_table(
        "student_enrollments",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("student_id", sa.String(length=36), nullable=False),
        sa.Column("course_id", sa.String(length=36), nullable=False),
        sa.Column("status", enrollment_status, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_student_enrollments_student_id", "student_enrollments", ["student_id"])

    op.create_table(
        "time_slots",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("branch_id", sa.String(length=36), nullable=False),
        sa.Column("slot_name", sa.String(length=100), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("slot_type", slot_type, nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_time_slots_branch_id", "time_slots", ["branch_id"])

    op.create_table(
        "rooms",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("branch_id", sa.String(length=36), nullable=False),
        sa.Column("room_number", sa.String(length=50), nullable=False),
        sa.Column("room_name", sa.String(length=200), nullable=True),
        sa.Column("building", sa.String(length=200), nullable=True),
        sa.Column("floor", sa.String(length=50), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=False, server_default="40"),
        sa.Column("room_type", room_type, nullable=False),
        sa.Column("facilities", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_rooms_branch_id", "rooms", ["branch_id"])

    op.create_table(
        "timetable_entries",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("academic_year_id", sa.String(length=36), nullable=False),
        sa.Column("course_id", sa.String(length=36), nullable=False),
        sa.Column("teacher_id", sa.String(length=36), nullable=True),
        sa.Column("time_slot_id", sa.String(length=36), nullable=False),
        sa.Column("room_id", sa.String(length=36), nullable=True),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint(
            "academic_year_id",
            "teacher_id",
            "day_of_week",
            "time_slot_id",
            name="uq_timetable_entries_teacher_slot",
        ),
        sa.UniqueConstraint(
            "academic_year_id",
            "room_id",
            "day_of_week",
            "time_slot_id",
            name="uq_timetable_entries_room_slot",
        ),
        sa.CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_timetable_entries_day_of_week"),
    )
    op.create_index("ix_timetable_entries_academic_year_id", "timetable_entries", ["academic_year_id"])
    op.create_index("ix_timetable_entries_course_id", "timetable_entries", ["course_id"])
    op.create_index("ix_timetable_entries_teacher_id", "timetable_entries", ["teacher_id"])

    op.create_table(
        "working_days_configs",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("branch_id", sa.String(length=36), nullable=False),
        sa.Column("academic_year_id", sa.String(length=36), nullable=True),
        sa.Column("grade_level_id", sa.String(length=36), nullable=True),
        sa.Column("total_days", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_working_days_configs_branch_id", "working_days_configs", ["branch_id"])


def downgrade() -> None:
    op.drop_index("ix_working_days_configs_branch_id", table_name="working_days_configs")
    op.drop_table("working_days_configs")
    op.drop_index("ix_timetable_entries_teacher_id", table_name="timetable_entries")
    op.drop_index("ix_timetable_entries_course_id", table_name="timetable_entries")
    op.drop_index("ix_timetable_entries_academic_year_id", table_name="timetable_entries")
    op.drop_table("timetable_entries")
    op.drop_index("ix_rooms_branch_id", table_name="rooms")
    op.drop_table("rooms")
    op.drop_index("ix_time_slots_branch_id", table_name="time_slots")
    op.drop_table("time_slots")
    op.drop_index("ix_student_enrollments_student_id", table_name="student_enrollments")
    op.drop_table("student_enrollments")
    op.drop_index("ix_courses_teacher_id", table_name="courses")
    op.drop_table("courses")
    op.drop_table("grade_levels")
    op.drop_table("subjects")
    op.drop_table("teachers")
    sa.Enum(name="enrollment_status").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="room_type").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="slot_type").drop(op.get_bind(), checkfirst=True)
