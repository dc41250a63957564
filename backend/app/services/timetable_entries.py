"""Committed timetable entries.

Every write goes through the ConflictDetector first. The read-then-write pair is
not atomic on its own, so the teacher/slot and room/slot unique constraints on
``timetable_entries`` are the final word: a constraint violation at flush time is
reported as the same conflict the detector would have produced.

The stored ``teacher_id`` of every entry in the target cell is refreshed from its
course right before the write, so a teacher reassigned off a course stops holding
that course's cells.
"""
from __future__ import annotations

import logging
from typing import Callable

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import (
    AppError,
    PersistenceError,
    ResourceNotFoundError,
    SchedulingConflictError,
)
from app.models.timetable_entry import (
    ROOM_SLOT_CONSTRAINT,
    TEACHER_SLOT_CONSTRAINT,
    TimetableEntry,
)
from app.repositories.inventory import RoomRepository, TimeSlotRepository
from app.repositories.timetable_entries import TimetableEntryRepository
from app.schemas.timetable import TimetableEntryCreate, TimetableEntryOut, TimetableEntryUpdate
from app.services.conflict_detector import ConflictDetector, ConflictKind, SlotCandidate
from app.services.result import ServiceResult, service_operation, store_error_message
from app.services.timetable_views import TimetableViews
from app.services.validation import reject_null_fields

logger = logging.getLogger(__name__)

PLACEMENT_FIELDS = ("time_slot_id", "room_id", "day_of_week")

_CONSTRAINT_MARKERS = {
    ConflictKind.teacher: (TEACHER_SLOT_CONSTRAINT, "timetable_entries.teacher_id"),
    ConflictKind.room: (ROOM_SLOT_CONSTRAINT, "timetable_entries.room_id"),
}

_FALLBACK_MESSAGES = {
    ConflictKind.teacher: "Teacher conflict: Teacher is already booked at this time",
    ConflictKind.room: "Room conflict: Room is already booked at this time",
}


def violated_slot_constraint(exc: IntegrityError) -> ConflictKind | None:
    text = str(exc.orig if exc.orig is not None else exc)
    for kind, markers in _CONSTRAINT_MARKERS.items():
        if any(marker in text for marker in markers):
            return kind
    return None


class TimetableEntryStore:
    def __init__(
        self,
        entries: TimetableEntryRepository,
        time_slots: TimeSlotRepository,
        rooms: RoomRepository,
        detector: ConflictDetector,
        views: TimetableViews,
    ) -> None:
        self.entries = entries
        self.time_slots = time_slots
        self.rooms = rooms
        self.detector = detector
        self.views = views

    def _rollback(self) -> None:
        self.entries.rollback()

    def _require_inventory(self, time_slot_id: str | None, room_id: str | None) -> None:
        # retired slots and rooms still resolve, only unknown ids are rejected
        if time_slot_id is not None and self.time_slots.get(time_slot_id) is None:
            raise ResourceNotFoundError("Time slot", time_slot_id)
        if room_id is not None and self.rooms.get(room_id) is None:
            raise ResourceNotFoundError("Room", room_id)

    def _write(self, operation: Callable[[], object], candidate: SlotCandidate | None) -> None:
        try:
            operation()
        except IntegrityError as exc:
            self.entries.rollback()
            raise self._constraint_conflict(exc, candidate) from exc

    def _constraint_conflict(self, exc: IntegrityError, candidate: SlotCandidate | None) -> AppError:
        kind = violated_slot_constraint(exc)
        if kind is None:
            return PersistenceError(store_error_message(exc, "Failed to save timetable entry"))
        logger.warning("Slot constraint %s rejected a write that passed the conflict check", kind.value)
        if candidate is not None:
            # the competing write has committed by now, so the detector can name it
            check = self.detector.check(candidate)
            if check.conflict is not None:
                return check.conflict.to_error()
        return SchedulingConflictError(_FALLBACK_MESSAGES[kind], kind=kind.value)

    @service_operation("Failed to create timetable entry")
    def create_entry(self, payload: TimetableEntryCreate) -> ServiceResult[TimetableEntryOut]:
        self._require_inventory(payload.time_slot_id, payload.room_id)
        candidate = SlotCandidate(
            academic_year_id=payload.academic_year_id,
            course_id=payload.course_id,
            time_slot_id=payload.time_slot_id,
            day_of_week=payload.day_of_week,
            room_id=payload.room_id,
        )
        course = self.detector.ensure_available(candidate)

        entry = TimetableEntry(
            academic_year_id=payload.academic_year_id,
            course_id=payload.course_id,
            teacher_id=course.teacher_id,
            time_slot_id=payload.time_slot_id,
            room_id=payload.room_id,
            day_of_week=payload.day_of_week,
            is_active=True,
        )

        def insert() -> None:
            self.entries.sync_slot_teachers(candidate.slot_query())
            self.entries.add(entry)

        self._write(insert, candidate)
        self.entries.commit()
        logger.info(
            "Scheduled course %s on day %d slot %s (room %s) as entry %s",
            entry.course_id,
            entry.day_of_week,
            entry.time_slot_id,
            entry.room_id,
            entry.id,
        )
        return ServiceResult.ok(
            "Timetable entry created successfully",
            self.views.entry_detail(entry.id),
            created=True,
        )

    @service_operation("Failed to update timetable entry")
    def update_entry(self, entry_id: str, payload: TimetableEntryUpdate) -> ServiceResult[TimetableEntryOut]:
        entry = self.entries.get(entry_id)
        if entry is None:
            raise ResourceNotFoundError("Timetable entry", entry_id)

        data = payload.model_dump(exclude_unset=True)
        reject_null_fields(data, {"time_slot_id", "day_of_week"})
        self._require_inventory(data.get("time_slot_id"), data.get("room_id"))

        candidate = None
        course = None
        if any(key in data and data[key] != getattr(entry, key) for key in PLACEMENT_FIELDS):
            candidate = SlotCandidate(
                academic_year_id=entry.academic_year_id,
                course_id=entry.course_id,
                time_slot_id=data.get("time_slot_id", entry.time_slot_id),
                day_of_week=data.get("day_of_week", entry.day_of_week),
                room_id=data.get("room_id", entry.room_id),
                exclude_entry_id=entry.id,
            )
            course = self.detector.ensure_available(candidate)

        def apply() -> None:
            if candidate is not None:
                self.entries.sync_slot_teachers(candidate.slot_query())
                entry.teacher_id = course.teacher_id
            for key, value in data.items():
                setattr(entry, key, value)
            self.entries.flush()

        self._write(apply, candidate)
        self.entries.commit()
        if data:
            logger.info("Updated timetable entry %s fields %s", entry_id, sorted(data))
        return ServiceResult.ok("Timetable entry updated successfully", self.views.entry_detail(entry_id))

    @service_operation("Failed to delete timetable entry")
    def delete_entry(self, entry_id: str) -> ServiceResult[None]:
        entry = self.entries.get(entry_id)
        if entry is None:
            raise ResourceNotFoundError("Timetable entry", entry_id)
        self.entries.delete(entry)
        self.entries.commit()
        logger.info("Deleted timetable entry %s, slot freed", entry_id)
        return ServiceResult.ok("Timetable entry deleted successfully")
