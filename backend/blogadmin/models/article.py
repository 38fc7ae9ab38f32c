"""
Article model.

Relations:
- author: many-to-one User
- category: many-to-one Category
- tags: many-to-many Tag through articles_tags
- images: polymorphic File attachments scoped to (articles, images)
"""

from sqlalchemy import (
    Column, String, Text, Boolean, ForeignKey, Table, and_,
)
from sqlalchemy.orm import relationship, foreign

from blogadmin.db_base import Base
from blogadmin.models.base import (
    TimestampMixin,
    AuditMixin,
    SoftDeleteMixin,
    ImportHashMixin,
    generate_uuid,
)
from blogadmin.models.file import File


articles_tags = Table(
    "articles_tags",
    Base.metadata,
    Column("article_id", String(36), ForeignKey("articles.id"), primary_key=True),
    Column("tag_id", String(36), ForeignKey("tags.id"), primary_key=True),
)


class Article(Base, TimestampMixin, AuditMixin, SoftDeleteMixin, ImportHashMixin):
    __tablename__ = "articles"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    title = Column(Text, nullable=True)

    body = Column(Text, nullable=True)

    featured = Column(Boolean, nullable=False, default=False)

    author_id = Column(
        String(36),
        ForeignKey("users.id"),
        nullable=True,
        index=True,
    )

    category_id = Column(
        String(36),
        ForeignKey("categories.id"),
        nullable=True,
        index=True,
    )

    # Relationships
    author = relationship("User", foreign_keys=[author_id])

    category = relationship("Category", foreign_keys=[category_id])

    tags = relationship(
        "Tag",
        secondary=articles_tags,
        order_by="Tag.name",
    )

    images = relationship(
        "File",
        primaryjoin=lambda: and_(
            foreign(File.owner_id) == Article.id,
            File.owner_type == Article.__tablename__,
            File.owner_field == "images",
            File.deleted_at.is_(None),
        ),
        viewonly=True,
        order_by=lambda: File.created_at,
    )

    def __repr__(self) -> str:
        return f"<Article(id={self.id}, title={self.title!r})>"
