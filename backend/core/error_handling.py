# backend/core/error_handling.py

"""
Error taxonomy and error handling utilities for API routes.

Services raise the exceptions defined here; routes translate them into HTTP
responses with the ``handle_api_errors`` decorator, and the app-level
handlers registered by ``register_exception_handlers`` catch anything that
slips past a route.
"""

from typing import Callable, Dict, Any, Optional
from decimal import Decimal
from functools import wraps
import logging
import inspect
import traceback

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from pydantic import ValidationError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials"


class APIError(Exception):
    """Base exception for API errors"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(APIError):
    """Resource not found error"""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            message=f"{resource} with identifier {identifier} not found",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "identifier": str(identifier)},
        )


class APIValidationError(APIError):
    """Input validation error - named to avoid the Pydantic collision"""

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"validation_errors": errors} if errors else {},
        )


class InsufficientPointsError(APIError):
    """Requested points exceed the available balance"""

    def __init__(
        self,
        available: Optional[Decimal],
        requested: Decimal,
        message: str = "Not enough points available",
    ):
        self.available = available
        self.requested = requested
        super().__init__(
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details={
                "available": str(available) if available is not None else None,
                "requested": str(requested),
            },
        )


class PersistenceError(APIError):
    """A read or write against the database failed"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=details,
        )


class OrderPersistenceError(PersistenceError):
    """Checkout could not be stored; nothing was committed"""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            "Your order could not be saved. Please try again.", details=details
        )


class AuthenticationError(APIError):
    """Bad admin credentials. The message never says which part was wrong."""

    def __init__(self, message: str = INVALID_CREDENTIALS_MESSAGE):
        super().__init__(message=message, status_code=status.HTTP_401_UNAUTHORIZED)


class NotificationError(Exception):
    """Best-effort side channel failed. Never surfaced to API callers."""


def _error_body(exc: APIError) -> Dict[str, Any]:
    return {"message": exc.message, "details": exc.details}


def handle_api_errors(func: Callable) -> Callable:
    """
    Decorator to handle common API errors with proper status codes and messages.
    Handles both async and sync route functions.

    Usage:
        @router.get("/items/{item_id}")
        @handle_api_errors
        async def get_item(item_id: int, db: Session = Depends(get_db)):
            ...
    """

    def handle_exception(e: Exception, func_name: str) -> None:
        if isinstance(e, HTTPException):
            raise e

        if isinstance(e, APIError):
            logger.warning(
                f"API Error in {func_name}: {e.message}",
                extra={"status_code": e.status_code, "details": e.details},
            )
            headers = None
            if isinstance(e, AuthenticationError):
                headers = {"WWW-Authenticate": "Bearer"}
            raise HTTPException(
                status_code=e.status_code, detail=_error_body(e), headers=headers
            )

        if isinstance(e, ValidationError):
            logger.warning(f"Pydantic validation error in {func_name}: {e.errors()}")
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail={"message": "Request validation failed", "errors": e.errors()},
            )

        if isinstance(e, ValueError):
            logger.warning(f"Validation error in {func_name}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail={"message": str(e)}
            )

        if isinstance(e, IntegrityError):
            logger.error(f"Database integrity error in {func_name}: {str(e.orig)}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail={
                    "message": "Database constraint violation",
                    "type": "integrity_error",
                },
            )

        if isinstance(e, OperationalError):
            logger.error(f"Database operational error in {func_name}: {str(e.orig)}")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail={
                    "message": "Database service temporarily unavailable",
                    "type": "operational_error",
                },
            )

        logger.error(
            f"Unexpected error in {func_name}: {str(e)}\n{traceback.format_exc()}"
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "An unexpected error occurred"},
        )

    if inspect.iscoroutinefunction(func):

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                handle_exception(e, func.__name__)

        return async_wrapper

    @wraps(func)
    def sync_wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            handle_exception(e, func.__name__)

    return sync_wrapper


async def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API errors raised outside decorated routes"""
    logger.warning(f"{type(exc).__name__} at {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": _error_body(exc), "path": str(request.url.path)},
    )


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Convert unhandled database errors to a retry prompt"""
    logger.error(f"Database error at {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "detail": {"message": "Database service temporarily unavailable"},
            "path": str(request.url.path),
        },
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app"""
    app.add_exception_handler(APIError, handle_api_error)
    app.add_exception_handler(SQLAlchemyError, handle_database_error)
