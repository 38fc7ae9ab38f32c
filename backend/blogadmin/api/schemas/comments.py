"""Pydantic schemas for the Comments API."""

from typing import Optional

from pydantic import BaseModel, Field

from blogadmin.api.schemas.common import RecordResponse, UserSummary


class ArticleSummary(BaseModel):
    id: str
    title: Optional[str] = None


class CommentInput(BaseModel):
    id: Optional[str] = None
    text: Optional[str] = None
    moderated: Optional[bool] = None
    author: Optional[str] = Field(None, description="User id")
    article: Optional[str] = Field(None, description="Article id")
    import_hash: Optional[str] = Field(None, max_length=255)


class CommentResponse(RecordResponse):
    text: Optional[str] = None
    moderated: bool = False
    author_id: Optional[str] = None
    article_id: Optional[str] = None
    author: Optional[UserSummary] = None
    article: Optional[ArticleSummary] = None
