from __future__ import annotations

from sqlalchemy import func, select

from app.models.room import Room
from app.models.time_slot import TimeSlot
from app.repositories.base import SqlRepository


class TimeSlotRepository(SqlRepository):
    def list_active(self, branch_id: str) -> list[TimeSlot]:
        query = (
            select(TimeSlot)
            .where(TimeSlot.branch_id == branch_id, TimeSlot.is_active.is_(True))
            .order_by(TimeSlot.sort_order.asc(), TimeSlot.start_time.asc())
        )
        return list(self.session.execute(query).scalars())

    def get(self, time_slot_id: str) -> TimeSlot | None:
        return self.session.get(TimeSlot, time_slot_id)

    def next_sort_order(self, branch_id: str) -> int:
        current = self.session.execute(
            select(func.max(TimeSlot.sort_order)).where(TimeSlot.branch_id == branch_id)
        ).scalar_one_or_none()
        return 0 if current is None else current + 1

    def add(self, time_slot: TimeSlot) -> TimeSlot:
        self.session.add(time_slot)
        self.session.flush()
        return time_slot


class RoomRepository(SqlRepository):
    def list_active(self, branch_id: str) -> list[Room]:
        query = (
            select(Room)
            .where(Room.branch_id == branch_id, Room.is_active.is_(True))
            .order_by(Room.room_number.asc())
        )
        return list(self.session.execute(query).scalars())

    def get(self, room_id: str) -> Room | None:
        return self.session.get(Room, room_id)

    def add(self, room: Room) -> Room:
        self.session.add(room)
        self.session.flush()
        return room
