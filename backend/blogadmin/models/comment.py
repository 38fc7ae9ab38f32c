"""Comment model - reader comments on articles, subject to moderation."""

from sqlalchemy import Column, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from blogadmin.db_base import Base
from blogadmin.models.base import (
    TimestampMixin,
    AuditMixin,
    SoftDeleteMixin,
    ImportHashMixin,
    generate_uuid,
)


class Comment(Base, TimestampMixin, AuditMixin, SoftDeleteMixin, ImportHashMixin):
    __tablename__ = "comments"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    text = Column(Text, nullable=True)

    moderated = Column(Boolean, nullable=False, default=False)

    author_id = Column(
        String(36),
        ForeignKey("users.id"),
        nullable=True,
        index=True,
    )

    article_id = Column(
        String(36),
        ForeignKey("articles.id"),
        nullable=True,
        index=True,
    )

    # Relationships
    author = relationship("User", foreign_keys=[author_id])

    article = relationship("Article", foreign_keys=[article_id])

    def __repr__(self) -> str:
        return f"<Comment(id={self.id}, article_id={self.article_id})>"
