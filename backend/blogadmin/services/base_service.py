"""
CRUD Service - transaction boundary and authorization for one entity.

Each mutating call runs in exactly one transaction: commit on success,
rollback and re-raise on any error. Removal is restricted to actors whose
role is listed in admin_settings.yml (``admin_roles``); the check runs
before any write.

Reads delegate straight to the repository on the injected session, so they
observe the writes of an enclosing transaction.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy.orm import Session

from blogadmin.config.admin_settings import get_admin_settings
from blogadmin.database.session import transaction
from blogadmin.errors import ForbiddenError, NotFoundError
from blogadmin.platform.actor import Actor, ANONYMOUS
from blogadmin.repositories.base_repo import CrudRepository

logger = logging.getLogger(__name__)


class CrudService:
    """Service for create/update/remove/find of one entity."""

    repository_class = None

    def __init__(self, db: Session, repository: Optional[CrudRepository] = None):
        self.db = db
        self.repository = repository or self.repository_class(db)

    @property
    def entity(self) -> str:
        return self.repository.descriptor.name

    # =========================================================================
    # Mutations
    # =========================================================================

    def create(self, data: Any, actor: Actor = ANONYMOUS) -> Dict[str, Any]:
        """Create a record with its relations; returns the hydrated record."""
        with transaction(self.db):
            record = self.repository.create(data, actor)
            record_id = record.id

        return self.repository.find_by({"id": record_id})

    def update(self, data: Any, record_id: str, actor: Actor = ANONYMOUS) -> Dict[str, Any]:
        """
        Update a record and replace its relations.

        Raises:
            NotFoundError: If the record does not exist (or is soft deleted)
        """
        with transaction(self.db):
            existing = self.repository.find_by({"id": record_id})
            if not existing:
                raise NotFoundError(self.entity, record_id)

            self.repository.update(record_id, data, actor)

        return self.repository.find_by({"id": record_id})

    def remove(self, record_id: str, actor: Actor = ANONYMOUS) -> None:
        """
        Soft delete a record.

        Raises:
            ForbiddenError: If the actor is not an administrator
            NotFoundError: If the record does not exist
        """
        with transaction(self.db):
            if not actor.has_role(get_admin_settings().admin_roles):
                logger.warning("Remove denied", extra={
                    "entity": self.entity,
                    "record_id": record_id,
                    "actor_id": actor.id,
                    "actor_role": actor.role,
                })
                raise ForbiddenError(f"{self.entity}.remove", actor.role)

            self.repository.remove(record_id, actor)

    def bulk_import(self, rows: Sequence[Any], actor: Actor = ANONYMOUS) -> Dict[str, int]:
        """Idempotent import keyed by import_hash, all-or-nothing."""
        with transaction(self.db):
            return self.repository.bulk_import(rows, actor)

    # =========================================================================
    # Reads
    # =========================================================================

    def find_all(self, filter: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self.repository.find_all(filter)

    def find_by(self, where: Mapping[str, Any], include_deleted: bool = False) -> Optional[Dict[str, Any]]:
        return self.repository.find_by(where, include_deleted=include_deleted)

    def find_all_autocomplete(
        self,
        query: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        return self.repository.find_all_autocomplete(query, limit)
