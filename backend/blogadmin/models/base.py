"""
Base mixins for database models.

Provides common functionality:
- TimestampMixin: created_at, updated_at timestamps
- AuditMixin: created_by_id, updated_by_id, deleted_by_id attribution
- SoftDeleteMixin: deleted_at tombstone (paranoid delete)
- ImportHashMixin: unique import_hash for idempotent bulk import
- generate_uuid: UUID generation for primary keys
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime


def generate_uuid() -> str:
    """Generate a UUID4 string for use as a primary key default."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Mixin that adds created_at and updated_at timestamp columns."""

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
        comment="Timestamp when record was created"
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        comment="Timestamp when record was last updated"
    )


class AuditMixin:
    """Mixin that records which actor created, updated and deleted a row."""

    created_by_id = Column(
        String(36),
        nullable=True,
        comment="Actor ID that created the record (NULL when anonymous)"
    )

    updated_by_id = Column(
        String(36),
        nullable=True,
        comment="Actor ID of the last update"
    )

    deleted_by_id = Column(
        String(36),
        nullable=True,
        comment="Actor ID that soft deleted the record"
    )


class SoftDeleteMixin:
    """
    Mixin that adds soft delete functionality to models.

    Rows with a non-null deleted_at are excluded from default queries by
    ``blogadmin.query.scope.active_only`` but stay in the table.
    """

    deleted_at = Column(
        DateTime(timezone=True),
        nullable=True,
        index=True,
        comment="Soft delete timestamp. NULL means the record is live."
    )

    def soft_delete(self, deleted_by_id=None) -> None:
        """Stamp the deleting actor, then mark the record deleted."""
        self.deleted_by_id = deleted_by_id
        self.deleted_at = utcnow()

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


class ImportHashMixin:
    """Mixin that adds a unique import_hash used to dedupe bulk imports."""

    import_hash = Column(
        String(255),
        nullable=True,
        unique=True,
        comment="Deduplication key for bulk import. Unique when present."
    )
