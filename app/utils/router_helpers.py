# app/utils/router_helpers.py

from fastapi import HTTPException, status
from typing import Callable, Any
from functools import wraps
import inspect
import logging

from ..services.exceptions import (
    ServiceError,
    AuthenticationError,
    PermissionDeniedError,
    NotFoundError,
    ConflictError,
    BusinessRuleViolationError,
)

logger = logging.getLogger(__name__)


def error_detail(error: str, message: str) -> dict:
    """Detail payload rendered by the app-level HTTPException handler"""
    return {"error": error, "message": message}


def to_http_exception(e: Exception, func_name: str) -> HTTPException:
    """Map a service-layer exception to the HTTPException the client sees"""

    # Missing/invalid credentials -> 401 Unauthorized
    if isinstance(e, AuthenticationError):
        logger.warning(f"Authentication failed: {e.message}")
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=error_detail(e.error, e.message),
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Permission/Access Errors -> 403 Forbidden
    if isinstance(e, PermissionDeniedError):
        logger.warning(f"Permission denied: {e.message}")
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=error_detail(e.error, e.message),
        )

    if isinstance(e, NotFoundError):
        logger.warning(f"Resource not found: {e.message}")
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=error_detail(e.error, e.message),
        )

    # Duplicates and exhausted inventory -> 409 Conflict
    if isinstance(e, ConflictError):
        logger.warning(f"Conflict: {e.message}")
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=error_detail(e.error, e.message),
        )

    # Business Rule Violations -> 400 Bad Request
    if isinstance(e, BusinessRuleViolationError):
        logger.warning(f"Business rule violation: {e.message}")
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_detail(e.error, e.message),
        )

    # General Service Errors -> 400 Bad Request
    if isinstance(e, ServiceError):
        logger.warning(f"Service error: {e.message}")
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_detail(e.error, e.message),
        )

    # Validation Errors -> 400 Bad Request
    if isinstance(e, ValueError):
        logger.warning(f"Validation error: {str(e)}")
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_detail("Validation failed", str(e)),
        )

    # Unexpected errors -> 500 Internal Server Error
    logger.error(f"Unexpected error in {func_name}: {str(e)}", exc_info=e)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error_detail("Internal server error", "An unexpected error occurred"),
    )


def handle_service_errors(func: Callable) -> Callable:
    """
    Decorator to standardize service error handling in routers.

    Works on both `async def` and plain `def` handlers; FastAPI runs the
    plain ones in its threadpool.
    """

    if inspect.iscoroutinefunction(func):

        @wraps(func)
        async def async_wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except Exception as e:
                raise to_http_exception(e, func.__name__) from e

        return async_wrapper

    @wraps(func)
    def sync_wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except HTTPException:
            raise
        except Exception as e:
            raise to_http_exception(e, func.__name__) from e

    return sync_wrapper


class RouterResponse:
    """Helper class for creating standardized API responses"""

    @staticmethod
    def success(data: Any = None, message: str = "Success") -> dict:
        """Create success response"""
        response = {"success": True, "message": message}
        if data is not None:
            response["data"] = data
        return response

    @staticmethod
    def created(data: Any, message: str = "Resource created successfully") -> dict:
        """Create resource creation response"""
        return {"success": True, "message": message, "data": data}

    @staticmethod
    def updated(
        data: Any = None, message: str = "Resource updated successfully"
    ) -> dict:
        """Create resource update response"""
        response = {"success": True, "message": message}
        if data is not None:
            response["data"] = data
        return response

    @staticmethod
    def deleted(message: str = "Resource deleted successfully") -> dict:
        """Create resource deletion response"""
        return {"success": True, "message": message}
