"""
Shared Pydantic schemas for the CRUD API.

Request bodies follow the admin frontend's envelope convention:
create sends {"data": {...}}, update sends {"id": ..., "data": {...}}.
"""

from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


# =============================================================================
# Envelopes
# =============================================================================

class DataEnvelope(BaseModel, Generic[T]):
    """Request body wrapping the payload in ``data``."""

    data: T


class UpdateEnvelope(BaseModel, Generic[T]):
    """Update body; ``id`` is informational, the path id is authoritative."""

    id: Optional[str] = None
    data: T


class ListResponse(BaseModel, Generic[T]):
    rows: List[T]
    count: int = Field(..., ge=0, description="Total matches, not page size")


class AutocompleteItem(BaseModel):
    id: str
    label: Optional[str] = None


class BulkImportResponse(BaseModel):
    created: int
    skipped: int


# =============================================================================
# Records
# =============================================================================

class RecordResponse(BaseModel):
    """Columns every record carries."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    import_hash: Optional[str] = None
    created_by_id: Optional[str] = None
    updated_by_id: Optional[str] = None
    deleted_by_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None


class FileInput(BaseModel):
    """Attachment descriptor. Entries with an existing id are kept as-is."""

    id: Optional[str] = None
    name: Optional[str] = Field(None, max_length=2083)
    size_in_bytes: Optional[int] = Field(None, ge=0)
    private_url: Optional[str] = None
    public_url: Optional[str] = None


class FileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    size_in_bytes: Optional[int] = None
    private_url: Optional[str] = None
    public_url: Optional[str] = None
    created_at: Optional[datetime] = None


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class NamedSummary(BaseModel):
    """Tags and categories as attached to an article."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: Optional[str] = None
