from __future__ import annotations

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from app.services.result import ErrorKind, ServiceResult

ERROR_STATUS = {
    ErrorKind.validation: status.HTTP_400_BAD_REQUEST,
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.conflict: status.HTTP_409_CONFLICT,
    ErrorKind.persistence: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def envelope(success: bool, message: str, data=None, pagination=None) -> dict:
    content: dict = {"success": success, "message": message}
    if data is not None:
        content["data"] = jsonable_encoder(data)
    if pagination is not None:
        content["pagination"] = jsonable_encoder(pagination)
    return content


def render(result: ServiceResult) -> JSONResponse:
    if result.success:
        status_code = status.HTTP_201_CREATED if result.created else status.HTTP_200_OK
    else:
        status_code = ERROR_STATUS.get(result.error, status.HTTP_400_BAD_REQUEST)
    return JSONResponse(
        status_code=status_code,
        content=envelope(result.success, result.message, result.data, result.pagination),
    )
