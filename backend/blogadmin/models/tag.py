"""Tag model - free-form labels attached to articles (many-to-many)."""

from sqlalchemy import Column, String, Text

from blogadmin.db_base import Base
from blogadmin.models.base import (
    TimestampMixin,
    AuditMixin,
    SoftDeleteMixin,
    ImportHashMixin,
    generate_uuid,
)


class Tag(Base, TimestampMixin, AuditMixin, SoftDeleteMixin, ImportHashMixin):
    __tablename__ = "tags"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    name = Column(Text, nullable=True, comment="Display name, autocomplete label")

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name={self.name!r})>"
