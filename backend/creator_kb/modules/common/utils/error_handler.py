"""Utility functions for mapping domain exceptions to HTTP exceptions."""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ....infrastructure.logging import get_logger
from ..constants import EXCEPTION_MAPPING
from ..exceptions import DomainError, ValidationError

logger = get_logger(__name__)


def map_exception(error: DomainError) -> HTTPException:
    """Map a domain exception to a corresponding HTTP exception."""
    for exception_class, mapper in EXCEPTION_MAPPING.items():
        if isinstance(error, exception_class):
            return mapper(str(error))

    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"An unexpected error occurred: {str(error)}"
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers for domain exceptions."""

    @app.exception_handler(DomainError)
    async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
        """Convert domain exceptions to ``{"detail", "kind"}`` responses."""
        http_exception = map_exception(exc)
        if http_exception.status_code >= 500:
            logger.error(f"{exc.kind}: {exc}", extra={"path": request.url.path})
        else:
            logger.info(f"Request rejected: {exc.kind}", extra={"path": request.url.path})
        return JSONResponse(
            status_code=http_exception.status_code,
            content={"detail": http_exception.detail, "kind": exc.kind},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Answer malformed JSON bodies with a 400; other validation errors keep FastAPI's 422."""
        if any(error.get("type") == "json_invalid" for error in exc.errors()):
            return await domain_exception_handler(request, ValidationError("Invalid request body"))
        return await request_validation_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error: {type(exc).__name__}", exc_info=exc, extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error", "kind": "internal_error"},
        )

