"""
Entity descriptors.

An EntityDescriptor declares, once per entity, everything the generic
repository needs: the mapped model, scalar fields and their defaults, the
relations to set on create/update, the autocomplete label column and the
filter schema used by list queries.
"""

from dataclasses import dataclass
from typing import Any, Tuple

from blogadmin.query.filters import FilterSchema


@dataclass(frozen=True)
class ScalarField:
    """A plain column written from the payload; missing values use default."""
    name: str
    default: Any = None


def text_field(name: str) -> ScalarField:
    return ScalarField(name, None)


def boolean_field(name: str) -> ScalarField:
    return ScalarField(name, False)


@dataclass(frozen=True)
class BelongsTo:
    """Single reference (many-to-one) set from an id in the payload."""
    name: str


@dataclass(frozen=True)
class BelongsToMany:
    """Many-to-many set replaced wholesale from a list of ids."""
    name: str


@dataclass(frozen=True)
class Attachments:
    """Polymorphic file set owned through (table name, relation name, id)."""
    name: str


@dataclass(frozen=True)
class EntityDescriptor:
    name: str
    model: type
    label_field: str
    filters: FilterSchema
    scalars: Tuple[ScalarField, ...] = ()
    belongs_to: Tuple[BelongsTo, ...] = ()
    belongs_to_many: Tuple[BelongsToMany, ...] = ()
    attachments: Tuple[Attachments, ...] = ()

    @property
    def relation_names(self) -> Tuple[str, ...]:
        """Every declared relation, in hydration order."""
        return (
            tuple(r.name for r in self.belongs_to)
            + tuple(r.name for r in self.belongs_to_many)
            + tuple(r.name for r in self.attachments)
        )

    @property
    def owner_type(self) -> str:
        """Owner type recorded on attachments of this entity."""
        return self.model.__tablename__
