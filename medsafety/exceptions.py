"""
Global exception handlers and engine exception classes.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging

# Set up logging
logger = logging.getLogger(__name__)

class AppException(Exception):
    """
    Base exception class for engine-specific exceptions.
    """
    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class ValidationException(AppException):
    """Exception raised when a required field is missing or invalid."""
    def __init__(self, detail: str = "Invalid input"):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class ResourceNotFoundException(AppException):
    """Exception raised when a medication, alert or report id is unknown."""
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ScheduleUndefinedException(AppException):
    """Exception raised when compliance is requested for an unscheduled medication."""
    def __init__(self, detail: str = "Medication has no active schedule"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class InfrastructureException(AppException):
    """Exception raised on persistence failures and timeouts. Safe to retry."""
    retryable = True

    def __init__(self, detail: str = "Storage unavailable"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for engine-specific exceptions.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: Standardized error response
    """
    content = {"detail": exc.detail}
    if isinstance(exc, InfrastructureException):
        logger.error(f"Infrastructure error: {exc.detail}")
        content["retryable"] = exc.retryable
    else:
        logger.info(f"Request rejected ({exc.status_code}): {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.

    Args:
        request: The request that caused the exception
        exc: The validation exception instance

    Returns:
        JSONResponse: Standardized error response with validation details
    """
    logger.error(f"Validation error: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Validation error",
            "errors": jsonable_errors(exc.errors())
        }
    )


def jsonable_errors(errors):
    """Strip non-serializable context (e.g. raised ValueErrors) from pydantic errors."""
    return [
        {key: value for key, value in error.items() if key in ("loc", "msg", "type")}
        for error in errors
    ]


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
