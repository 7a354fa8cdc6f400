"""Service layer — error taxonomy shared by managers, services and the API."""

from enum import Enum


class StatusCode(str, Enum):
    """Stable, machine-readable error codes carried by every ServiceError."""

    INTERNAL_ERROR = "internal_error"
    RESOURCE_NOT_FOUND = "resource_not_found"
    VALIDATION_FAILED = "validation_failed"


class ServiceError(Exception):
    """Base service exception."""

    code: StatusCode = StatusCode.INTERNAL_ERROR


class NotFoundError(ServiceError):
    """No live (non-deleted) entity matches the lookup (-> HTTP 404)."""

    code = StatusCode.RESOURCE_NOT_FOUND


class ValidationError(ServiceError):
    """Request data failed validation (-> HTTP 422)."""

    code = StatusCode.VALIDATION_FAILED
