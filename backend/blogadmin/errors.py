"""
Structured error classes for the admin data layer.

Repositories and services raise these; the API layer maps them to HTTP
responses via their ``http_status`` (see ``blogadmin.api.errors``).
"""

from typing import Optional

from fastapi import status


class AdminError(Exception):
    """Base exception for admin data layer errors."""

    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "admin_error"

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON response."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(AdminError):
    """Referenced primary key does not resolve."""

    http_status = status.HTTP_404_NOT_FOUND
    code = "not_found"

    def __init__(self, entity: str, record_id: Optional[str] = None):
        self.entity = entity
        self.record_id = record_id
        super().__init__(
            f"{entity}NotFound",
            details={"entity": entity, "id": record_id},
        )


class ValidationError(AdminError):
    """
    Malformed input or a named business-rule violation.

    ``message`` is a stable message key (e.g. ``errors.validation.uuid``);
    ``field`` names the offending filter or payload field when known.
    """

    http_status = status.HTTP_400_BAD_REQUEST
    code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None, value=None):
        self.field = field
        details = {}
        if field is not None:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, details=details)


class ForbiddenError(AdminError):
    """Actor lacks the role required for a privileged mutation."""

    http_status = status.HTTP_403_FORBIDDEN
    code = "forbidden"

    def __init__(self, action: str, role: Optional[str] = None):
        self.action = action
        self.role = role
        super().__init__(
            "errors.forbidden.message",
            details={"action": action},
        )
