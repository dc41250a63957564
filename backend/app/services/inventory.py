"""Branch inventory: the daily periods and the rooms that timetable entries point at.

Both registries soft-deactivate instead of deleting, so entries that already
reference a slot or room keep resolving after it is retired.
"""
from __future__ import annotations

import logging

from app.core.config import Settings, get_settings
from app.core.exceptions import ResourceNotFoundError, ValidationFailure
from app.models.room import Room
from app.models.time_slot import TimeSlot
from app.repositories.inventory import RoomRepository, TimeSlotRepository
from app.schemas.common import parse_time_to_minutes
from app.schemas.room import RoomCreate, RoomOut, RoomUpdate
from app.schemas.time_slot import TimeSlotCreate, TimeSlotOut, TimeSlotUpdate
from app.services.result import ServiceResult, service_operation
from app.services.validation import reject_null_fields, require_identifier

logger = logging.getLogger(__name__)

ROOM_REQUIRED_FIELDS = {"room_number", "capacity", "room_type", "facilities"}


def _require_branch(branch_id: str | None) -> str:
    return require_identifier(branch_id, "Branch ID")


class TimeSlotRegistry:
    def __init__(self, time_slots: TimeSlotRepository) -> None:
        self.time_slots = time_slots

    def _rollback(self) -> None:
        self.time_slots.rollback()

    @service_operation("Failed to fetch time slots")
    def list_time_slots(self, branch_id: str | None) -> ServiceResult[list[TimeSlotOut]]:
        slots = self.time_slots.list_active(_require_branch(branch_id))
        return ServiceResult.ok(
            "Time slots fetched successfully",
            [TimeSlotOut.model_validate(slot) for slot in slots],
        )

    @service_operation("Failed to create time slot")
    def create_time_slot(self, payload: TimeSlotCreate) -> ServiceResult[TimeSlotOut]:
        branch_id = _require_branch(payload.branch_id)
        sort_order = payload.sort_order
        if sort_order is None:
            sort_order = self.time_slots.next_sort_order(branch_id)
        slot = self.time_slots.add(
            TimeSlot(
                branch_id=branch_id,
                slot_name=payload.slot_name.strip(),
                start_time=payload.start_time,
                end_time=payload.end_time,
                slot_type=payload.slot_type,
                sort_order=sort_order,
                is_active=True,
            )
        )
        self.time_slots.commit()
        self.time_slots.refresh(slot)
        logger.info("Created time slot %s (%s) for branch %s", slot.id, slot.slot_name, branch_id)
        return ServiceResult.ok("Time slot created successfully", TimeSlotOut.model_validate(slot), created=True)

    @service_operation("Failed to update time slot")
    def update_time_slot(self, time_slot_id: str, payload: TimeSlotUpdate) -> ServiceResult[TimeSlotOut]:
        slot = self.time_slots.get(time_slot_id)
        if slot is None:
            raise ResourceNotFoundError("Time slot", time_slot_id)

        data = payload.model_dump(exclude_unset=True)
        reject_null_fields(data, set(TimeSlotUpdate.model_fields))
        start_time = data.get("start_time", slot.start_time)
        end_time = data.get("end_time", slot.end_time)
        if parse_time_to_minutes(end_time) <= parse_time_to_minutes(start_time):
            raise ValidationFailure("end_time must be after start_time")

        for key, value in data.items():
            setattr(slot, key, value)
        self.time_slots.commit()
        self.time_slots.refresh(slot)
        if data:
            logger.info("Updated time slot %s fields %s", slot.id, sorted(data))
        return ServiceResult.ok("Time slot updated successfully", TimeSlotOut.model_validate(slot))

    @service_operation("Failed to deactivate time slot")
    def deactivate_time_slot(self, time_slot_id: str) -> ServiceResult[None]:
        slot = self.time_slots.get(time_slot_id)
        if slot is None:
            raise ResourceNotFoundError("Time slot", time_slot_id)
        if slot.is_active:
            slot.is_active = False
            self.time_slots.commit()
            logger.info("Deactivated time slot %s", slot.id)
        return ServiceResult.ok("Time slot deactivated successfully")


class RoomRegistry:
    def __init__(self, rooms: RoomRepository, settings: Settings | None = None) -> None:
        self.rooms = rooms
        self.settings = settings or get_settings()

    def _rollback(self) -> None:
        self.rooms.rollback()

    @service_operation("Failed to fetch rooms")
    def list_rooms(self, branch_id: str | None) -> ServiceResult[list[RoomOut]]:
        rooms = self.rooms.list_active(_require_branch(branch_id))
        return ServiceResult.ok("Rooms fetched successfully", [RoomOut.model_validate(room) for room in rooms])

    @service_operation("Failed to create room")
    def create_room(self, payload: RoomCreate) -> ServiceResult[RoomOut]:
        branch_id = _require_branch(payload.branch_id)
        data = payload.model_dump()
        data["branch_id"] = branch_id
        data["room_number"] = payload.room_number.strip()
        if data["capacity"] is None:
            data["capacity"] = self.settings.default_room_capacity
        room = self.rooms.add(Room(**data, is_active=True))
        self.rooms.commit()
        self.rooms.refresh(room)
        logger.info("Created room %s (%s) for branch %s", room.id, room.room_number, branch_id)
        return ServiceResult.ok("Room created successfully", RoomOut.model_validate(room), created=True)

    @service_operation("Failed to update room")
    def update_room(self, room_id: str, payload: RoomUpdate) -> ServiceResult[RoomOut]:
        room = self.rooms.get(room_id)
        if room is None:
            raise ResourceNotFoundError("Room", room_id)

        data = payload.model_dump(exclude_unset=True)
        reject_null_fields(data, ROOM_REQUIRED_FIELDS)
        for key, value in data.items():
            setattr(room, key, value)
        self.rooms.commit()
        self.rooms.refresh(room)
        if data:
            logger.info("Updated room %s fields %s", room.id, sorted(data))
        return ServiceResult.ok("Room updated successfully", RoomOut.model_validate(room))

    @service_operation("Failed to deactivate room")
    def deactivate_room(self, room_id: str) -> ServiceResult[None]:
        room = self.rooms.get(room_id)
        if room is None:
            raise ResourceNotFoundError("Room", room_id)
        if room.is_active:
            room.is_active = False
            self.rooms.commit()
            logger.info("Deactivated room %s", room.id)
        return ServiceResult.ok("Room deactivated successfully")
