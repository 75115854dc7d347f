"""
Application exceptions and their JSON error handlers.
"""
from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from typing import Any, Dict
import logging

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""

    error_code = "ERR_INTERNAL"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: Dict[str, Any] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(AppException):
    """Raised when submitted form data fails a validation rule."""

    error_code = "ERR_VALIDATION"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppException):
    """Raised when a requested row does not exist."""

    error_code = "ERR_NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str, resource_id: Any = None, message: str = None):
        if message is None:
            message = f"{resource} not found"
        super().__init__(message, details={"resource": resource, "id": resource_id})


class PermissionDeniedError(AppException):
    """Raised when the user may not perform an action on a resource."""

    error_code = "ERR_FORBIDDEN"
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(AppException):
    """Raised when a write collides with an existing row."""

    error_code = "ERR_CONFLICT"
    status_code = status.HTTP_409_CONFLICT


class ExternalServiceError(AppException):
    """Raised when an upstream HTTP API fails."""

    error_code = "ERR_UPSTREAM"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render application exceptions in the standard error format."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details
        }
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render HTTPException with the same envelope as AppException."""
    error_code_map = {
        400: "ERR_BAD_REQUEST",
        401: "ERR_UNAUTHORIZED",
        403: "ERR_FORBIDDEN",
        404: "ERR_NOT_FOUND",
        409: "ERR_CONFLICT",
        413: "ERR_TOO_LARGE",
    }
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": error_code_map.get(exc.status_code, "ERR_UNKNOWN"),
            "message": exc.detail,
            "details": {}
        },
        headers=getattr(exc, "headers", None)
    )
