from __future__ import annotations

from http import HTTPStatus
from typing import Any

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from starlette.exceptions import HTTPException as StarletteHTTPException


class ErrorEnvelope(JSONResponse):
    def __init__(
        self,
        *,
        status_code: int,
        code: str,
        message: str,
        details: Any | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        payload: dict[str, Any] = {"code": code, "message": message}
        if details is not None:
            payload["details"] = details
        super().__init__(payload, status_code=status_code, headers=headers)


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    message = detail if isinstance(detail, str) else _reason(exc.status_code)
    details = detail if isinstance(detail, dict) else None
    code = "not_found" if exc.status_code == status.HTTP_404_NOT_FOUND else "http_error"
    return ErrorEnvelope(
        status_code=exc.status_code,
        code=code,
        message=message,
        details=details,
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return ErrorEnvelope(
        status_code=422,
        code="validation_error",
        message="Validation failed",
        details={"errors": jsonable_encoder(exc.errors())},
    )
