"""
File model - polymorphic attachments.

A file belongs to exactly one owner, identified by an explicit owner key
(owner_type, owner_field, owner_id) rather than a dedicated foreign key.
Owner models declare a view-only relationship that scopes File rows by
their table name and the relation name (e.g. articles.images).
"""

from typing import NamedTuple

from sqlalchemy import Column, String, Text, BigInteger, Index

from blogadmin.db_base import Base
from blogadmin.models.base import (
    TimestampMixin,
    AuditMixin,
    SoftDeleteMixin,
    generate_uuid,
)


class AttachmentOwner(NamedTuple):
    """Typed owner key of an attachment set."""

    owner_type: str
    owner_field: str
    owner_id: str


class File(Base, TimestampMixin, AuditMixin, SoftDeleteMixin):
    """Uploaded file metadata. Binary content lives in external storage."""

    __tablename__ = "files"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    owner_type = Column(
        String(64),
        nullable=False,
        comment="Owning table name, e.g. 'articles'"
    )

    owner_field = Column(
        String(64),
        nullable=False,
        comment="Relation name on the owner, e.g. 'images'"
    )

    owner_id = Column(
        String(36),
        nullable=False,
        comment="Primary key of the owning record"
    )

    name = Column(String(2083), nullable=False)

    size_in_bytes = Column(BigInteger, nullable=True)

    private_url = Column(Text, nullable=True)

    public_url = Column(Text, nullable=True)

    __table_args__ = (
        Index("idx_files_owner", "owner_type", "owner_field", "owner_id"),
    )

    @property
    def owner(self) -> AttachmentOwner:
        return AttachmentOwner(self.owner_type, self.owner_field, self.owner_id)

    def __repr__(self) -> str:
        return (
            f"<File(id={self.id}, name={self.name!r}, "
            f"owner={self.owner_type}.{self.owner_field}:{self.owner_id})>"
        )
