"""
Base repository implementing the generic list / find / mutate template.

Every entity repository declares an EntityDescriptor; this class turns it
into queries and mutations:

- find_all: filtered, paginated list with eager relations and total count
- find_by: single record hydrated into a plain dict (None when absent)
- create / update: scalar fields + wholesale relation replacement
- remove: soft delete with actor attribution
- find_all_autocomplete: {id, label} pairs for typeahead widgets
- bulk_import: idempotent insert keyed by import_hash

Repositories never commit and never catch store errors; the service layer
owns the transaction boundary.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import delete, func, inspect, select
from sqlalchemy.orm import Session, selectinload
from sqlalchemy.orm.attributes import set_committed_value

from blogadmin.config.admin_settings import get_admin_settings
from blogadmin.errors import NotFoundError, ValidationError
from blogadmin.models.base import generate_uuid
from blogadmin.models.file import AttachmentOwner
from blogadmin.platform.actor import Actor, ANONYMOUS
from blogadmin.query.entity import EntityDescriptor
from blogadmin.query.filters import ListQuery, parse_uuid
from blogadmin.query.predicates import (
    Contains,
    Equals,
    IsNull,
    any_of,
    compile_all,
)
from blogadmin.query.scope import active_only
from blogadmin.repositories.files_repo import FilesRepository

logger = logging.getLogger(__name__)


def plain_columns(record) -> Optional[Dict[str, Any]]:
    """Column attributes of an ORM object as a dict (None passes through)."""
    if record is None:
        return None
    return {
        attr.key: getattr(record, attr.key)
        for attr in inspect(record).mapper.column_attrs
    }


def _as_dict(data: Any) -> Dict[str, Any]:
    if data is None:
        return {}
    if hasattr(data, "model_dump"):
        return data.model_dump()
    return dict(data)


def _reference_id(value: Any, field_name: str) -> Optional[str]:
    """Accept an id string or an object carrying an id; blank means unset."""
    if isinstance(value, Mapping):
        value = value.get("id")
    elif hasattr(value, "id"):
        value = value.id
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_uuid(value, field_name)


class CrudRepository(ABC):
    """
    Base repository for one entity.

    Subclasses only return their EntityDescriptor.
    """

    def __init__(self, db_session: Session):
        """
        Initialize repository.

        Args:
            db_session: SQLAlchemy session (or session inside a transaction)
        """
        self.db_session = db_session
        self.descriptor = self._get_descriptor()
        self._model_class = self.descriptor.model

    @abstractmethod
    def _get_descriptor(self) -> EntityDescriptor:
        """Return the entity descriptor for this repository."""
        pass

    # =========================================================================
    # Query helpers
    # =========================================================================

    def _eager_options(self) -> List[Any]:
        model = self._model_class
        return [selectinload(getattr(model, name)) for name in self.descriptor.relation_names]

    def _scoped_select(self, include_deleted: bool = False):
        stmt = select(self._model_class)
        if not include_deleted:
            stmt = stmt.where(self._model_class.deleted_at.is_(None)).options(active_only())
        return stmt

    def _order_clauses(self, order_by: Sequence) -> List[Any]:
        clauses = []
        for attribute, direction in order_by:
            column = getattr(self._model_class, attribute)
            clauses.append(column.desc() if direction == "desc" else column.asc())
        return clauses

    def to_plain(self, record) -> Optional[Dict[str, Any]]:
        """
        Convert a record and its declared relations into plain dicts.

        Single references become a dict or None; collections become lists.
        """
        if record is None:
            return None
        output = plain_columns(record)
        for name in self.descriptor.relation_names:
            value = getattr(record, name)
            if isinstance(value, list):
                output[name] = [plain_columns(item) for item in value]
            else:
                output[name] = plain_columns(value)
        return output

    # =========================================================================
    # Reads
    # =========================================================================

    def build_list_query(self, filter: Optional[Mapping[str, Any]]) -> ListQuery:
        """Validate a raw filter against the entity's filter schema."""
        return self.descriptor.filters.parse(
            filter,
            max_limit=get_admin_settings().list_max_limit,
        )

    def find_all(self, filter: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """
        Filtered, paginated list.

        Args:
            filter: Raw filter mapping (see blogadmin.query.filters)

        Returns:
            {"rows": [plain records with relations], "count": total matches}

        Raises:
            ValidationError: If any filter value is malformed
        """
        model = self._model_class
        query = self.build_list_query(filter)
        clauses = compile_all((IsNull("deleted_at"),) + query.predicates, model)

        count = self.db_session.scalar(
            select(func.count()).select_from(model).where(*clauses)
        )

        stmt = (
            select(model)
            .where(*clauses)
            .options(active_only(), *self._eager_options())
            .order_by(*self._order_clauses(query.order_by))
            .execution_options(populate_existing=True)
        )
        if query.limit:
            stmt = stmt.limit(query.limit)
        if query.offset:
            stmt = stmt.offset(query.offset)

        rows = self.db_session.scalars(stmt).all()

        return {"rows": [self.to_plain(row) for row in rows], "count": count}

    def find_by(
        self,
        where: Mapping[str, Any],
        include_deleted: bool = False,
    ) -> Optional[Dict[str, Any]]:
        """
        Fetch one record and hydrate every declared relation.

        Args:
            where: Column -> value equality conditions, e.g. {"id": ...}
            include_deleted: Bypass the soft-delete scope (audit lookups)

        Returns:
            Plain dict with relations, or None when nothing matches
        """
        record = self._find_record(where, include_deleted=include_deleted)
        return self.to_plain(record)

    def _find_record(self, where: Mapping[str, Any], include_deleted: bool = False):
        columns = {attr.key for attr in inspect(self._model_class).column_attrs}
        unknown = set(where) - columns
        if unknown:
            raise ValidationError("errors.validation.whereField", field=sorted(unknown)[0])

        predicates = [Equals(key, value) for key, value in where.items()]
        stmt = (
            self._scoped_select(include_deleted)
            .where(*compile_all(predicates, self._model_class))
            .options(*self._eager_options())
            .execution_options(populate_existing=True)
        )
        return self.db_session.scalars(stmt.limit(1)).first()

    def get_record(self, record_id: str, include_deleted: bool = False):
        """
        Load the ORM object for a primary key.

        Raises:
            NotFoundError: If the key does not resolve
        """
        record = self._find_record({"id": record_id}, include_deleted=include_deleted)
        if record is None:
            raise NotFoundError(self.descriptor.name, record_id)
        return record

    def find_all_autocomplete(
        self,
        query: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """
        {id, label} pairs ordered by label, for typeahead widgets.

        A query matches an exact id (when it is a UUID) or a case-insensitive
        substring of the label. An empty query returns an unfiltered page.
        Without a limit every match is returned unless
        ``autocomplete.default_limit`` is configured.
        """
        model = self._model_class
        label_field = self.descriptor.label_field
        label_column = getattr(model, label_field)

        predicates = [IsNull("deleted_at")]
        if query and query.strip():
            alternatives = [Contains(label_field, query.strip())]
            try:
                alternatives.insert(0, Equals("id", parse_uuid(query, "query")))
            except ValidationError:
                pass
            predicates.append(any_of(*alternatives))

        stmt = (
            select(model.id, label_column)
            .where(*compile_all(predicates, model))
            .order_by(label_column.asc())
        )
        effective_limit = get_admin_settings().autocomplete_limit(limit)
        if effective_limit:
            stmt = stmt.limit(effective_limit)

        return [
            {"id": record_id, "label": label}
            for record_id, label in self.db_session.execute(stmt).all()
        ]

    # =========================================================================
    # Mutations
    # =========================================================================

    def create(self, data: Any, actor: Actor = ANONYMOUS):
        """
        Insert a record and set its declared relations.

        Missing scalars use their declared default (None or False). Omitted
        relations are left unset.

        Raises:
            ValidationError: If a supplied id is not a UUID, or the
                import_hash is already taken
            NotFoundError: If a referenced record does not resolve
        """
        data = _as_dict(data)
        record_id = data.get("id")
        record_id = parse_uuid(record_id, "id") if record_id else generate_uuid()

        import_hash = data.get("import_hash") or None
        if import_hash and self._import_hash_taken(import_hash):
            raise ValidationError("errors.validation.importHash", field="import_hash", value=import_hash)

        values = {
            scalar.name: self._scalar_value(data, scalar)
            for scalar in self.descriptor.scalars
        }
        record = self._model_class(
            id=record_id,
            import_hash=import_hash,
            created_by_id=actor.id,
            updated_by_id=actor.id,
            **values,
        )

        self.db_session.add(record)
        self.db_session.flush()

        self._set_relations(record, data, actor)

        logger.info("Record created", extra={
            "entity": self.descriptor.name,
            "record_id": record.id,
            "actor_id": actor.id,
        })

        return record

    def update(self, record_id: str, data: Any, actor: Actor = ANONYMOUS):
        """
        Overwrite scalars and replace every declared relation.

        Raises:
            NotFoundError: If the record does not resolve
        """
        data = _as_dict(data)
        record = self.get_record(record_id)

        for scalar in self.descriptor.scalars:
            setattr(record, scalar.name, self._scalar_value(data, scalar))
        record.updated_by_id = actor.id

        self.db_session.flush()

        self._set_relations(record, data, actor)

        logger.info("Record updated", extra={
            "entity": self.descriptor.name,
            "record_id": record.id,
            "actor_id": actor.id,
        })

        return record

    def remove(self, record_id: str, actor: Actor = ANONYMOUS):
        """
        Soft delete: stamp deleted_by_id, then set deleted_at.

        Raises:
            NotFoundError: If the record does not resolve
        """
        record = self.get_record(record_id)
        record.soft_delete(actor.id)
        self.db_session.flush()

        logger.info("Record removed", extra={
            "entity": self.descriptor.name,
            "record_id": record.id,
            "actor_id": actor.id,
        })

        return record

    def bulk_import(self, rows: Sequence[Any], actor: Actor = ANONYMOUS) -> Dict[str, int]:
        """
        Create rows, skipping any whose import_hash already exists.

        Hashes are checked against every stored row, soft deleted ones
        included, and against earlier rows of the same batch.

        Returns:
            {"created": n, "skipped": m}
        """
        model = self._model_class
        payloads = [_as_dict(row) for row in rows]
        hashes = {p.get("import_hash") for p in payloads if p.get("import_hash")}

        seen = set()
        if hashes:
            seen.update(self.db_session.scalars(
                select(model.import_hash).where(model.import_hash.in_(hashes))
            ).all())

        created = skipped = 0
        for payload in payloads:
            import_hash = payload.get("import_hash")
            if import_hash and import_hash in seen:
                skipped += 1
                continue
            self.create(payload, actor)
            if import_hash:
                seen.add(import_hash)
            created += 1

        logger.info("Bulk import finished", extra={
            "entity": self.descriptor.name,
            "created": created,
            "skipped": skipped,
        })

        return {"created": created, "skipped": skipped}

    # =========================================================================
    # Relation setting
    # =========================================================================

    @staticmethod
    def _scalar_value(data: Mapping[str, Any], scalar) -> Any:
        value = data.get(scalar.name)
        return scalar.default if value is None else value

    def _related_model(self, relation_name: str):
        return inspect(self._model_class).relationships[relation_name].mapper.class_

    def _load_related(self, relation_name: str, ids: Sequence[str]) -> List[Any]:
        """Load live related records by id, preserving the requested order."""
        if not ids:
            return []
        target = self._related_model(relation_name)
        stmt = select(target).where(target.id.in_(ids), target.deleted_at.is_(None))
        found = {item.id: item for item in self.db_session.scalars(stmt).all()}

        missing = [i for i in ids if i not in found]
        if missing:
            raise NotFoundError(target.__tablename__, missing[0])
        return [found[i] for i in ids]

    def _clear_links(self, record, relation_name: str) -> None:
        """
        Delete every join row of record for a many-to-many relation.

        The loaded collection hides links to soft deleted targets, so the
        rows are removed in SQL and the collection is reset to empty.
        """
        mapper = inspect(self._model_class)
        relation = mapper.relationships[relation_name]
        criteria = [
            link_column == getattr(record, mapper.get_property_by_column(parent_column).key)
            for parent_column, link_column in relation.synchronize_pairs
        ]
        self.db_session.execute(delete(relation.secondary).where(*criteria))
        set_committed_value(record, relation_name, [])

    def _import_hash_taken(self, import_hash: str) -> bool:
        """True if any row, soft deleted ones included, holds import_hash."""
        model = self._model_class
        stmt = select(model.id).where(model.import_hash == import_hash).limit(1)
        return self.db_session.scalar(stmt) is not None

    def _set_relations(self, record, data: Mapping[str, Any], actor: Actor) -> None:
        """
        Replace every declared relation from the payload.

        Steps run in order; attachments need the record id from the insert.
        """
        for relation in self.descriptor.belongs_to:
            related_id = _reference_id(data.get(relation.name), relation.name)
            related = self._load_related(relation.name, [related_id])[0] if related_id else None
            setattr(record, relation.name, related)

        for relation in self.descriptor.belongs_to_many:
            ids = []
            for item in data.get(relation.name) or []:
                related_id = _reference_id(item, relation.name)
                if related_id and related_id not in ids:
                    ids.append(related_id)
            related = self._load_related(relation.name, ids)
            self._clear_links(record, relation.name)
            setattr(record, relation.name, related)

        self.db_session.flush()

        files = FilesRepository(self.db_session)
        for relation in self.descriptor.attachments:
            owner = AttachmentOwner(self.descriptor.owner_type, relation.name, record.id)
            files.replace_relation_files(owner, data.get(relation.name), actor)
            self.db_session.expire(record, [relation.name])
