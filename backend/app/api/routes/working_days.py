from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from app.api.deps import get_working_days_service
from app.api.responses import render
from app.schemas.common import ApiResponse, MessageResponse
from app.schemas.working_days import (
    WorkingDaysCalculateRequest,
    WorkingDaysConfigOut,
    WorkingDaysConfigUpsert,
    WorkingDaysCount,
)
from app.services.working_days import WorkingDaysService

router = APIRouter()


@router.get("", response_model=ApiResponse[WorkingDaysConfigOut])
def get_config(
    branch_id: str | None = Query(default=None),
    academic_year_id: str | None = Query(default=None),
    grade_level_id: str | None = Query(default=None),
    service: WorkingDaysService = Depends(get_working_days_service),
) -> JSONResponse:
    return render(service.get_config(branch_id, academic_year_id, grade_level_id))


@router.get("/all", response_model=ApiResponse[list[WorkingDaysConfigOut]])
def list_configs(
    branch_id: str | None = Query(default=None),
    page: int = Query(default=1),
    limit: int | None = Query(default=None),
    service: WorkingDaysService = Depends(get_working_days_service),
) -> JSONResponse:
    return render(service.get_all_configs(branch_id, page, limit))


@router.post("", response_model=ApiResponse[WorkingDaysConfigOut], status_code=status.HTTP_201_CREATED)
def upsert_config(
    payload: WorkingDaysConfigUpsert,
    service: WorkingDaysService = Depends(get_working_days_service),
) -> JSONResponse:
    return render(service.upsert_config(payload))


@router.put("", response_model=ApiResponse[WorkingDaysConfigOut])
def replace_config(
    payload: WorkingDaysConfigUpsert,
    service: WorkingDaysService = Depends(get_working_days_service),
) -> JSONResponse:
    return render(service.upsert_config(payload))


@router.post("/calculate", response_model=ApiResponse[WorkingDaysCount])
def calculate_working_days(
    payload: WorkingDaysCalculateRequest,
    service: WorkingDaysService = Depends(get_working_days_service),
) -> JSONResponse:
    return render(service.calculate(payload))


@router.delete("/{config_id}", response_model=MessageResponse)
def delete_config(config_id: str, service: WorkingDaysService = Depends(get_working_days_service)) -> JSONResponse:
    return render(service.delete_config(config_id))
