"""Mapping of service errors to HTTP responses.

This is the only place where error kinds become status codes.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from autoscale_webapp.dto import ErrorResponse
from autoscale_webapp.errors import (
    BadInputError,
    ConflictError,
    NotFoundError,
    ServiceError,
    StoreUnavailableError,
)

STATUS_BY_ERROR: dict[type[ServiceError], int] = {
    BadInputError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    StoreUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(code=code, message=message).model_dump(),
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Translate a ServiceError into its status code and error body."""
    status_code = STATUS_BY_ERROR.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error(
            "{} {} failed: {} (cause: {!r})",
            request.method,
            request.url.path,
            exc.message,
            exc.cause,
        )
    return _error_response(status_code, exc.code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies and parameters as 400 bad_input."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        BadInputError.code,
        f"Malformed request: {details}",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error mappers to ``app``."""
    app.add_exception_handler(ServiceError, service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
