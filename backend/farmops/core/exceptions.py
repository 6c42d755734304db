# backend/farmops/core/exceptions.py

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from farmops.core.logger import logger
from farmops.core.responses import error_body


class DomainError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "INTERNAL_ERROR"

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


HTTP_ERROR_CODES = {
    400: "VALIDATION_ERROR",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
}


def _log_error(request: Request, message: str, code: str, status_code: int):
    logger.error(
        "API Error",
        extra={
            "request_id": request.scope.get("request_id"),
            "path": request.url.path,
            "error_message": message,
            "code": code,
            "status_code": status_code,
        },
    )


async def domain_error_handler(request: Request, exc: DomainError):
    _log_error(request, exc.message, exc.code, exc.status_code)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.code))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    code = HTTP_ERROR_CODES.get(exc.status_code, "INTERNAL_ERROR")
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
        message = "Route not found"
    _log_error(request, message, code, exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message, code),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", "Invalid input"))
    message = ", ".join(messages) or "Invalid input"
    _log_error(request, message, "VALIDATION_ERROR", status.HTTP_400_BAD_REQUEST)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(message, "VALIDATION_ERROR"),
    )


async def persistence_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(
        "Persistence failure",
        extra={"request_id": request.scope.get("request_id"), "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", "INTERNAL_ERROR"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", "INTERNAL_ERROR"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, persistence_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
