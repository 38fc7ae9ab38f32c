"""
Files Repository - polymorphic attachment sets.

Attachments are owned through an explicit AttachmentOwner key. The owner's
set is always replaced wholesale: the incoming list is diffed against the
live files of the owner, files no longer referenced are soft deleted and
new entries are inserted.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from blogadmin.errors import ValidationError
from blogadmin.models.base import generate_uuid
from blogadmin.models.file import File, AttachmentOwner
from blogadmin.platform.actor import Actor, ANONYMOUS

logger = logging.getLogger(__name__)


def _as_mapping(item: Any) -> Mapping[str, Any]:
    if hasattr(item, "model_dump"):
        return item.model_dump()
    if isinstance(item, Mapping):
        return item
    raise ValidationError("errors.validation.file", field="files", value=item)


class FilesRepository:
    """Repository for File attachments."""

    def __init__(self, db_session: Session):
        self.db = db_session

    def find_for_owner(self, owner: AttachmentOwner) -> List[File]:
        """Live files of an owner, oldest first."""
        stmt = (
            select(File)
            .where(
                File.owner_type == owner.owner_type,
                File.owner_field == owner.owner_field,
                File.owner_id == owner.owner_id,
                File.deleted_at.is_(None),
            )
            .order_by(File.created_at.asc())
        )
        return list(self.db.scalars(stmt).all())

    def replace_relation_files(
        self,
        owner: AttachmentOwner,
        files: Optional[Iterable[Any]],
        actor: Actor = ANONYMOUS,
    ) -> List[File]:
        """
        Make the owner's attachment set equal to ``files``.

        Args:
            owner: Attachment owner key
            files: Incoming file descriptors (mappings or pydantic models)
                with optional ``id`` and ``name``, ``size_in_bytes``,
                ``private_url``, ``public_url``. Entries whose id matches a
                live file of this owner are kept; all others are inserted.
                None or an empty list clears the set.
            actor: Acting identity, stamped on inserts and deletions

        Returns:
            The owner's live files after replacement

        Raises:
            ValidationError: If a new entry has no name
        """
        incoming = [_as_mapping(item) for item in (files or [])]
        existing = {f.id: f for f in self.find_for_owner(owner)}

        keep_ids = {item.get("id") for item in incoming if item.get("id") in existing}

        removed = 0
        for file_id, record in existing.items():
            if file_id not in keep_ids:
                record.soft_delete(actor.id)
                removed += 1

        added = 0
        for item in incoming:
            if item.get("id") in existing:
                continue
            name = item.get("name")
            if not name:
                raise ValidationError("errors.validation.fileName", field=owner.owner_field)
            self.db.add(File(
                id=generate_uuid(),
                owner_type=owner.owner_type,
                owner_field=owner.owner_field,
                owner_id=owner.owner_id,
                name=name,
                size_in_bytes=item.get("size_in_bytes"),
                private_url=item.get("private_url"),
                public_url=item.get("public_url"),
                created_by_id=actor.id,
                updated_by_id=actor.id,
            ))
            added += 1

        self.db.flush()

        logger.info("Attachments replaced", extra={
            "owner_type": owner.owner_type,
            "owner_field": owner.owner_field,
            "owner_id": owner.owner_id,
            "kept": len(keep_ids),
            "added": added,
            "removed": removed,
        })

        return self.find_for_owner(owner)
