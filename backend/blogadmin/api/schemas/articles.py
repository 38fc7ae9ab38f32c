"""Pydantic schemas for the Articles API."""

from typing import List, Optional

from pydantic import BaseModel, Field

from blogadmin.api.schemas.common import (
    RecordResponse,
    FileInput,
    FileResponse,
    UserSummary,
    NamedSummary,
)


class ArticleInput(BaseModel):
    """Create/update payload. Omitted relations are cleared."""

    id: Optional[str] = None
    title: Optional[str] = None
    body: Optional[str] = None
    featured: Optional[bool] = None
    author: Optional[str] = Field(None, description="User id")
    category: Optional[str] = Field(None, description="Category id")
    tags: Optional[List[str]] = Field(None, description="Tag ids")
    images: Optional[List[FileInput]] = None
    import_hash: Optional[str] = Field(None, max_length=255)


class ArticleResponse(RecordResponse):
    title: Optional[str] = None
    body: Optional[str] = None
    featured: bool = False
    author_id: Optional[str] = None
    category_id: Optional[str] = None
    author: Optional[UserSummary] = None
    category: Optional[NamedSummary] = None
    tags: List[NamedSummary] = []
    images: List[FileResponse] = []
