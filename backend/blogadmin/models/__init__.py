"""
Database models for the blog admin.

All content models carry timestamps, actor attribution, a soft-delete
tombstone and an optional import_hash.
"""

from blogadmin.models.base import (
    TimestampMixin,
    AuditMixin,
    SoftDeleteMixin,
    ImportHashMixin,
    generate_uuid,
)
from blogadmin.models.user import User
from blogadmin.models.category import Category
from blogadmin.models.tag import Tag
from blogadmin.models.file import File, AttachmentOwner
from blogadmin.models.article import Article, articles_tags
from blogadmin.models.comment import Comment

__all__ = [
    "TimestampMixin",
    "AuditMixin",
    "SoftDeleteMixin",
    "ImportHashMixin",
    "generate_uuid",
    "User",
    "Category",
    "Tag",
    "File",
    "AttachmentOwner",
    "Article",
    "articles_tags",
    "Comment",
]
