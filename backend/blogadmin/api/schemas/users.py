"""Pydantic schemas for the read-only Users API."""

from typing import Optional

from blogadmin.api.schemas.common import RecordResponse


class UserResponse(RecordResponse):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
