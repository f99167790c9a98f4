from __future__ import annotations

from typing import Any


class LogiTrackError(RuntimeError):
    status_code = 500
    code = "INTERNAL_ERROR"
    default_message = "Internal Server Error"

    def __init__(self, message: str | None = None, **extra: Any) -> None:
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def to_payload(self) -> dict[str, Any]:
        return {"success": False, "message": self.message, "code": self.code, **self.extra}


class ValidationError(LogiTrackError):
    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Validation error"


class InvalidDriverId(ValidationError):
    code = "INVALID_DRIVER_ID"
    default_message = "Invalid driver ID"


class InvalidOrNonDriverUser(ValidationError):
    code = "INVALID_OR_NON_DRIVER_USER"
    default_message = "Invalid or Non-driver User"


class InvalidStatus(ValidationError):
    code = "INVALID_STATUS"
    default_message = "Invalid or missing status"


class GeofenceViolation(ValidationError):
    code = "COORDINATES_OUT_OF_REGION"
    default_message = "Coordinates must be within the service region"


class NotFoundError(LogiTrackError):
    status_code = 404
    code = "NOT_FOUND"
    default_message = "Not Found"


class JobNotFound(NotFoundError):
    code = "JOB_NOT_FOUND"
    default_message = "Job not found"


class AuthenticationError(LogiTrackError):
    status_code = 401
    code = "AUTHENTICATION_FAILED"
    default_message = "No token, authorization denied"


class AuthorizationError(LogiTrackError):
    status_code = 403
    code = "FORBIDDEN"
    default_message = "Access denied: insufficient permissions"


class StoreError(LogiTrackError):
    code = "STORE_ERROR"
