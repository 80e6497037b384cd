"""Builds structured `{success, ...}` responses from service results and errors."""

from fastapi import status
from fastapi.responses import JSONResponse

from app.core.exceptions import (
    InvalidTenderError,
    LLMInvocationError,
    LLMNotConfiguredError,
    MonitorBaseException,
    NotFoundError,
    UpstreamDataError,
)
from app.schemas import ErrorResponse


def error_response(status_code: int, message: str) -> JSONResponse:
    """Well-formed unsuccessful result instead of partial data."""
    body = ErrorResponse(error=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def status_for(exc: MonitorBaseException) -> int:
    """HTTP status for a domain exception."""
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, LLMNotConfiguredError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    if isinstance(exc, (UpstreamDataError, LLMInvocationError)):
        return status.HTTP_502_BAD_GATEWAY
    if isinstance(exc, InvalidTenderError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def exception_response(exc: MonitorBaseException) -> JSONResponse:
    return error_response(status_for(exc), exc.message)
