from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from app.api.deps import (
    get_room_registry,
    get_time_slot_registry,
    get_timetable_store,
    get_timetable_views,
)
from app.api.responses import render
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.room import RoomCreate, RoomOut, RoomUpdate
from app.schemas.time_slot import TimeSlotCreate, TimeSlotOut, TimeSlotUpdate
from app.schemas.timetable import TimetableEntryCreate, TimetableEntryOut, TimetableEntryUpdate
from app.services.inventory import RoomRegistry, TimeSlotRegistry
from app.services.timetable_entries import TimetableEntryStore
from app.services.timetable_views import TimetableViews

router = APIRouter()


# time slots

@router.get("/time-slots", response_model=ApiResponse[list[TimeSlotOut]])
def list_time_slots(
    branch_id: str | None = Query(default=None),
    registry: TimeSlotRegistry = Depends(get_time_slot_registry),
) -> JSONResponse:
    return render(registry.list_time_slots(branch_id))


@router.post("/time-slots", response_model=ApiResponse[TimeSlotOut], status_code=status.HTTP_201_CREATED)
def create_time_slot(
    payload: TimeSlotCreate,
    registry: TimeSlotRegistry = Depends(get_time_slot_registry),
) -> JSONResponse:
    return render(registry.create_time_slot(payload))


@router.patch("/time-slots/{time_slot_id}", response_model=ApiResponse[TimeSlotOut])
def update_time_slot(
    time_slot_id: str,
    payload: TimeSlotUpdate,
    registry: TimeSlotRegistry = Depends(get_time_slot_registry),
) -> JSONResponse:
    return render(registry.update_time_slot(time_slot_id, payload))


@router.delete("/time-slots/{time_slot_id}", response_model=MessageResponse)
def deactivate_time_slot(
    time_slot_id: str,
    registry: TimeSlotRegistry = Depends(get_time_slot_registry),
) -> JSONResponse:
    return render(registry.deactivate_time_slot(time_slot_id))


# rooms

@router.get("/rooms", response_model=ApiResponse[list[RoomOut]])
def list_rooms(
    branch_id: str | None = Query(default=None),
    registry: RoomRegistry = Depends(get_room_registry),
) -> JSONResponse:
    return render(registry.list_rooms(branch_id))


@router.post("/rooms", response_model=ApiResponse[RoomOut], status_code=status.HTTP_201_CREATED)
def create_room(payload: RoomCreate, registry: RoomRegistry = Depends(get_room_registry)) -> JSONResponse:
    return render(registry.create_room(payload))


@router.patch("/rooms/{room_id}", response_model=ApiResponse[RoomOut])
def update_room(
    room_id: str,
    payload: RoomUpdate,
    registry: RoomRegistry = Depends(get_room_registry),
) -> JSONResponse:
    return render(registry.update_room(room_id, payload))


@router.delete("/rooms/{room_id}", response_model=MessageResponse)
def deactivate_room(room_id: str, registry: RoomRegistry = Depends(get_room_registry)) -> JSONResponse:
    return render(registry.deactivate_room(room_id))


# views

@router.get("/course/{course_id}", response_model=ApiResponse[list[TimetableEntryOut]])
def course_timetable(course_id: str, views: TimetableViews = Depends(get_timetable_views)) -> JSONResponse:
    return render(views.by_course(course_id))


@router.get("/teacher/{teacher_id}", response_model=ApiResponse[list[TimetableEntryOut]])
def teacher_timetable(teacher_id: str, views: TimetableViews = Depends(get_timetable_views)) -> JSONResponse:
    return render(views.by_teacher(teacher_id))


@router.get("/student/{student_id}", response_model=ApiResponse[list[TimetableEntryOut]])
def student_timetable(student_id: str, views: TimetableViews = Depends(get_timetable_views)) -> JSONResponse:
    return render(views.by_student(student_id))


@router.get("/branch/{academic_year_id}", response_model=ApiResponse[list[TimetableEntryOut]])
def branch_timetable(
    academic_year_id: str,
    views: TimetableViews = Depends(get_timetable_views),
) -> JSONResponse:
    return render(views.by_branch_year(academic_year_id))


# entries

@router.post("/entries", response_model=ApiResponse[TimetableEntryOut], status_code=status.HTTP_201_CREATED)
def create_entry(
    payload: TimetableEntryCreate,
    store: TimetableEntryStore = Depends(get_timetable_store),
) -> JSONResponse:
    return render(store.create_entry(payload))


@router.patch("/entries/{entry_id}", response_model=ApiResponse[TimetableEntryOut])
def update_entry(
    entry_id: str,
    payload: TimetableEntryUpdate,
    store: TimetableEntryStore = Depends(get_timetable_store),
) -> JSONResponse:
    return render(store.update_entry(entry_id, payload))


@router.delete("/entries/{entry_id}", response_model=MessageResponse)
def delete_entry(entry_id: str, store: TimetableEntryStore = Depends(get_timetable_store)) -> JSONResponse:
    return render(store.delete_entry(entry_id))
