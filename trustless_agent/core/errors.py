"""
Centralized error types and JSON error rendering.

Every failure raised by the pricing pipeline or the wallet adapter derives
from AgentPayError. The FastAPI exception handlers registered in main.py turn
those (and any unexpected exception) into a JSON body with an ``error`` field,
logging the full error server-side.
"""
import logging
import traceback
from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.requests import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ErrorResponse(BaseModel):
    """Standardized error response model."""
    error: str
    detail: str | None = None
    details: Any = None


class AgentPayError(Exception):
    """Base exception for application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize the error.

        Args:
            message: Error message
            details: Optional additional error details
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(AgentPayError):
    """A required credential or identifier is missing or invalid."""

    pass


class TransportError(AgentPayError):
    """An upstream collaborator returned an error status or was unreachable."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: Any = None,
    ):
        """
        Initialize the transport error.

        Args:
            message: Error message
            status_code: Upstream HTTP status, None for network failures
            details: Upstream response body when available
        """
        super().__init__(message)
        self.upstream_status = status_code
        self.details = details
        if status_code is not None and status_code >= 400:
            self.status_code = status_code
        else:
            self.status_code = status.HTTP_502_BAD_GATEWAY


class ModelOutputInvalidError(AgentPayError):
    """No decision could be recovered from the model output."""

    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, preview: str, truncated: bool = False):
        self.preview = preview
        self.truncated = truncated
        suffix = "..." if truncated else ""
        super().__init__(
            f"Model output was not valid JSON. Raw preview:\n{preview}{suffix}",
            details={"preview": preview},
        )


class TokenNotFoundError(AgentPayError):
    """The paying wallet holds no USDC token on the configured blockchain."""

    pass


def create_error_response(
    status_code: int,
    message: str,
    detail: str | None = None,
    details: Any = None,
) -> JSONResponse:
    """
    Create a standardized JSON error response.

    Args:
        status_code: HTTP status code
        message: Main error message
        detail: Optional diagnostic string
        details: Optional structured upstream details

    Returns:
        JSONResponse with error information
    """
    error_response = ErrorResponse(error=message, detail=detail, details=details)
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(exclude_none=True),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render HTTPException as ``{"error": detail}``."""
    logger.error(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {exc.detail}")
    return create_error_response(status_code=exc.status_code, message=str(exc.detail))


async def agent_pay_exception_handler(request: Request, exc: AgentPayError) -> JSONResponse:
    """
    Render application errors with their own status code.

    Args:
        request: The request that caused the exception
        exc: The application error

    Returns:
        JSONResponse with the error message and any upstream details
    """
    logger.error(
        f"SERVER ERROR ({request.url.path}): {type(exc).__name__}: {exc.message}",
        exc_info=exc.status_code >= 500 and not isinstance(exc, TransportError),
    )
    if isinstance(exc, ModelOutputInvalidError):
        return create_error_response(exc.status_code, exc.message, detail=exc.preview)
    return create_error_response(
        status_code=exc.status_code,
        message=exc.message,
        details=exc.details or None,
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all other exceptions globally.

    The diagnostic string carries the exception type and message; debug mode
    outside production adds the full traceback.
    """
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)

    settings = getattr(request.app.state, "settings", None)
    if settings is not None and settings.debug and not settings.is_production:
        detail = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    else:
        detail = f"{type(exc).__name__}: {exc}"

    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message="Internal server error",
        detail=detail,
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures with an ``error`` field."""
    logger.error(f"Invalid request body on {request.url.path}: {exc.errors()}")
    return create_error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        message="Invalid request body",
        details=jsonable_encoder(exc.errors()),
    )
