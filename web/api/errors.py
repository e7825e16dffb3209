"""API errors - map governance failures to transport-neutral responses."""

from collections.abc import Callable
from functools import wraps

from loguru import logger
from pydantic import BaseModel

from app.errors import (
    ConcurrencyConflict,
    ConstitutionalViolation,
    DependencyFailure,
    EligibilityError,
    GovernanceError,
    InsufficientBalance,
    InsufficientReputation,
    InvalidParameter,
    NotFoundError,
    RollbackWindowExpired,
    StateError,
    ValidationError,
)

# First match wins, so subclasses come before their bases
STATUS_CODES: list[tuple[type[GovernanceError], int]] = [
    (ValidationError, 400),
    (EligibilityError, 403),
    (ConstitutionalViolation, 403),
    (NotFoundError, 404),
    (ConcurrencyConflict, 409),
    (StateError, 409),
    (DependencyFailure, 503),
]

# Pagination bounds for list endpoints
MAX_LIMIT = 200


class ErrorResponse(BaseModel):
    """Error body returned instead of the normal response."""

    error: str
    message: str
    status: int
    retryable: bool = False
    details: dict | None = None


def status_for(exc: GovernanceError) -> int:
    for cls, status in STATUS_CODES:
        if isinstance(exc, cls):
            return status
    return 500


def _details(exc: GovernanceError) -> dict | None:
    if isinstance(exc, InvalidParameter):
        return {"parameter": exc.name, "errors": exc.errors}
    if isinstance(exc, ConstitutionalViolation):
        return {"violations": exc.violations}
    if isinstance(exc, InsufficientBalance):
        return {"token": exc.token, "required": exc.required, "available": exc.available}
    if isinstance(exc, InsufficientReputation):
        return {"required": exc.required, "actual": exc.actual}
    if isinstance(exc, RollbackWindowExpired):
        return {"action_id": exc.action_id, "expired_at": exc.expired_at.isoformat()}
    if isinstance(exc, NotFoundError):
        return {"entity": exc.entity, "key": str(exc.key)}
    return None


def error_response(exc: GovernanceError) -> ErrorResponse:
    return ErrorResponse(
        error=type(exc).__name__,
        message=exc.message,
        status=status_for(exc),
        retryable=exc.retryable,
        details=_details(exc),
    )


def handle_errors(fn: Callable) -> Callable:
    """Return an ErrorResponse for any GovernanceError raised by a view."""

    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except GovernanceError as exc:
            response = error_response(exc)
            if response.status >= 500:
                logger.error("{} failed: {}", fn.__name__, exc.message)
            else:
                logger.info("{} rejected ({}): {}", fn.__name__, response.error, exc.message)
            return response

    return wrapper


def validate_page(limit: int, offset: int) -> None:
    """Validate list pagination."""
    if not 1 <= limit <= MAX_LIMIT:
        raise ValidationError(f"Invalid limit: {limit}. Must be between 1 and {MAX_LIMIT}")
    if offset < 0:
        raise ValidationError(f"Invalid offset: {offset}. Must not be negative")
