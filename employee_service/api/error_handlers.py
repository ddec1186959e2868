"""
전역 예외 핸들러. 모든 에러를 {success: false, ...} envelope로 바꾼다.

- EmployeeServiceError: 에러 종류별로 400 / 404 / 500
- RequestValidationError: 바디가 JSON 객체가 아닌 경우 등 -> 400
- HTTPException: 라우트 없음(404), 메서드 불일치(405) 등
- Exception: 나머지 전부 500, 상세 메시지는 development에서만 노출
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from employee_service.core.config import Settings
from employee_service.core.errors import (
    EmployeeServiceError,
    InfrastructureFault,
    MalformedId,
    NotFound,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

HIDDEN_DETAIL = "Something went wrong"


def error_response(exc: EmployeeServiceError, expose_detail: bool) -> tuple[int, dict]:
    match exc:
        case ValidationFailed(errors=errors):
            return status.HTTP_400_BAD_REQUEST, {
                "success": False,
                "message": "Validation Error",
                "errors": errors,
            }
        case MalformedId():
            return status.HTTP_400_BAD_REQUEST, {
                "success": False,
                "message": "Invalid employee ID format",
            }
        case NotFound():
            return status.HTTP_404_NOT_FOUND, {
                "success": False,
                "message": "Employee not found",
            }
        case InfrastructureFault(detail=detail):
            return status.HTTP_500_INTERNAL_SERVER_ERROR, {
                "success": False,
                "message": "Server Error",
                "error": detail if expose_detail else HIDDEN_DETAIL,
            }
        case _:
            return status.HTTP_500_INTERNAL_SERVER_ERROR, {
                "success": False,
                "message": "Server Error",
                "error": str(exc) if expose_detail else HIDDEN_DETAIL,
            }


def register_error_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(EmployeeServiceError)
    async def employee_service_error_handler(
        request: Request, exc: EmployeeServiceError
    ):
        status_code, content = error_response(exc, settings.is_development)
        if status_code >= 500:
            logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        else:
            logger.warning("%s on %s: %s", type(exc).__name__, request.url.path, exc)
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "message": "Validation Error",
                "errors": [
                    f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
                    for e in exc.errors()
                ],
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error("Unhandled error on %s: %s", request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "message": "Internal server error",
                "error": str(exc) if settings.is_development else HIDDEN_DETAIL,
            },
        )
