"""Pydantic schemas for tags and categories (name-only entities)."""

from typing import Optional

from pydantic import BaseModel, Field

from blogadmin.api.schemas.common import RecordResponse


class NamedInput(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    import_hash: Optional[str] = Field(None, max_length=255)


class NamedResponse(RecordResponse):
    name: Optional[str] = None
