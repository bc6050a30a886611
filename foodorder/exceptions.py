"""
Error types raised by the food ordering service.

Each error carries the HTTP status it maps to and a message that is safe to
show to the client. Errors log themselves when created so that every denial
and failure leaves a trace.

Usage:
    from .exceptions import NotFoundError, ForbiddenError

    raise NotFoundError("Food item", 42)
    raise ForbiddenError("manage food items", role=caller.role)
"""
import logging
from typing import Any, Optional

from fastapi import status

logger = logging.getLogger(__name__)


class FoodOrderError(Exception):
    """
    Base class for all service errors.

    Attributes:
        message: Client-facing description
        status_code: HTTP status the error maps to
        extra: Additional fields included in the response body
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    log_level = logging.WARNING

    def __init__(self, message: str, extra: Optional[dict] = None, **log_context: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra or {}
        logger.log(self.log_level, f"{type(self).__name__}: {message} {log_context or ''}".rstrip())


class ValidationError(FoodOrderError):
    """Malformed or missing input (400)."""
    status_code = status.HTTP_400_BAD_REQUEST


class Unauthenticated(FoodOrderError):
    """Missing, invalid or expired token (401)."""
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Invalid or expired token", **log_context: Any):
        super().__init__(message, **log_context)


class InvalidCredentials(Unauthenticated):
    """Login failure; the same message whether the email or the password was wrong (401)."""

    def __init__(self, **log_context: Any):
        super().__init__("Invalid email or password", **log_context)


class ForbiddenError(FoodOrderError):
    """Role or location policy denial (403)."""
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, action: Optional[str] = None, message: Optional[str] = None,
                 extra: Optional[dict] = None, **log_context: Any):
        if message is None:
            message = f"Access denied. Not authorized to {action}." if action else "Access denied. Insufficient permissions."
        super().__init__(message, extra=extra, action=action, **log_context)


class NotFoundError(FoodOrderError):
    """
    Missing resource, or a resource outside the caller's visibility scope (404).

    Usage:
        raise NotFoundError("Food item", 7)
        raise NotFoundError(message="Order not found or access denied")
    """
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: Optional[str] = None, entity_id: Any = None,
                 message: Optional[str] = None, **log_context: Any):
        if message is None:
            if entity_id is not None:
                message = f"{entity} {entity_id} not found"
            else:
                message = f"{entity or 'Resource'} not found"
        super().__init__(message, entity=entity, entity_id=entity_id, **log_context)


class ConflictError(FoodOrderError):
    """Duplicate unique key (409)."""
    status_code = status.HTTP_409_CONFLICT


class StorageError(FoodOrderError):
    """
    Unexpected persistence failure (500).

    The message is generic; the driver's error text is kept in `detail` and
    only exposed outside production.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    log_level = logging.ERROR

    def __init__(self, message: str = "Database error", detail: Optional[str] = None, **log_context: Any):
        self.detail = detail
        super().__init__(message, detail=detail, **log_context)
