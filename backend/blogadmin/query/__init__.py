"""
Query building: typed predicates, per-entity filter schemas and entity
descriptors shared by every repository.
"""

from blogadmin.query.predicates import (
    Predicate,
    Equals,
    IsNull,
    Contains,
    InSet,
    AtLeast,
    AtMost,
    HasAnyRelated,
    AllOf,
    AnyOf,
    all_of,
    any_of,
    compile_all,
)
from blogadmin.query.filters import (
    FilterKind,
    FilterField,
    FilterSchema,
    ListQuery,
    parse_uuid,
    parse_uuid_list,
)
from blogadmin.query.entity import (
    EntityDescriptor,
    ScalarField,
    BelongsTo,
    BelongsToMany,
    Attachments,
)

__all__ = [
    "Predicate",
    "Equals",
    "IsNull",
    "Contains",
    "InSet",
    "AtLeast",
    "AtMost",
    "HasAnyRelated",
    "AllOf",
    "AnyOf",
    "all_of",
    "any_of",
    "compile_all",
    "FilterKind",
    "FilterField",
    "FilterSchema",
    "ListQuery",
    "parse_uuid",
    "parse_uuid_list",
    "EntityDescriptor",
    "ScalarField",
    "BelongsTo",
    "BelongsToMany",
    "Attachments",
]
