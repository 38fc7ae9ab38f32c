"""
Filter schemas: raw list filters -> validated ListQuery.

Each entity declares its filterable fields once. Every field has a kind,
and the kind fixes both how the raw value is validated and which predicate
it contributes:

    ID            "id"                -> Equals(id, <uuid>)
    TEXT          "title"             -> Contains(title, text)
    BOOLEAN       "featured"          -> Equals(featured, bool)
    FOREIGN_KEYS  "author"  "a|b"     -> InSet(author_id, (a, b))
    RELATED_IDS   "tags"    "a|b"     -> HasAnyRelated(tags, (a, b))
    DATE_RANGE    "created_at_range"  -> AtLeast / AtMost on created_at
    SEARCH        "search"            -> AnyOf(Contains(col, text) ...)

Absent or empty values contribute nothing. Malformed values raise
ValidationError before any query is built. Keys the schema does not know
are ignored.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from blogadmin.errors import ValidationError
from blogadmin.query.predicates import (
    Predicate,
    Equals,
    Contains,
    InSet,
    AtLeast,
    AtMost,
    HasAnyRelated,
    any_of,
)

LIST_SEPARATOR = "|"

_datetime_adapter = TypeAdapter(datetime)


class FilterKind(str, Enum):
    ID = "id"
    TEXT = "text"
    BOOLEAN = "boolean"
    FOREIGN_KEYS = "foreign_keys"
    RELATED_IDS = "related_ids"
    DATE_RANGE = "date_range"
    SEARCH = "search"


@dataclass(frozen=True)
class FilterField:
    """
    One filterable field.

    Args:
        name: Key in the raw filter mapping
        kind: Declared type, which fixes the predicate effect
        targets: Model attributes the predicate applies to (column names,
            or a relationship name for RELATED_IDS)
    """
    name: str
    kind: FilterKind
    targets: Tuple[str, ...]


def id_filter(name: str = "id") -> FilterField:
    return FilterField(name, FilterKind.ID, ("id",))


def text_filter(name: str, column: Optional[str] = None) -> FilterField:
    return FilterField(name, FilterKind.TEXT, (column or name,))


def boolean_filter(name: str, column: Optional[str] = None) -> FilterField:
    return FilterField(name, FilterKind.BOOLEAN, (column or name,))


def foreign_keys_filter(name: str, column: Optional[str] = None) -> FilterField:
    return FilterField(name, FilterKind.FOREIGN_KEYS, (column or f"{name}_id",))


def related_ids_filter(name: str, relationship: Optional[str] = None) -> FilterField:
    return FilterField(name, FilterKind.RELATED_IDS, (relationship or name,))


def date_range_filter(name: str = "created_at_range", column: str = "created_at") -> FilterField:
    return FilterField(name, FilterKind.DATE_RANGE, (column,))


def search_filter(columns: Iterable[str], name: str = "search") -> FilterField:
    return FilterField(name, FilterKind.SEARCH, tuple(columns))


# =============================================================================
# Value parsing
# =============================================================================

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def parse_uuid(value: Any, field_name: str) -> str:
    """Parse a UUID token, normalizing to the canonical lowercase string."""
    if isinstance(value, uuid.UUID):
        return str(value)
    if not isinstance(value, str):
        raise ValidationError("errors.validation.uuid", field=field_name, value=value)
    try:
        return str(uuid.UUID(value.strip()))
    except ValueError:
        raise ValidationError("errors.validation.uuid", field=field_name, value=value)


def parse_uuid_list(value: Any, field_name: str) -> Tuple[str, ...]:
    """
    Parse a pipe-delimited string (or a list of strings) into unique UUIDs.

    Order of first appearance is kept. Any unparsable token fails the whole
    value; it never silently matches nothing.
    """
    if isinstance(value, str):
        tokens = value.split(LIST_SEPARATOR)
    elif isinstance(value, (list, tuple)):
        tokens = []
        for item in value:
            if isinstance(item, str):
                tokens.extend(item.split(LIST_SEPARATOR))
            else:
                tokens.append(item)
    else:
        raise ValidationError("errors.validation.idList", field=field_name, value=value)

    ids = []
    for token in tokens:
        parsed = parse_uuid(token, field_name)
        if parsed not in ids:
            ids.append(parsed)
    return tuple(ids)


def parse_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise ValidationError("errors.validation.boolean", field=field_name, value=value)


def parse_datetime(value: Any, field_name: str) -> datetime:
    """Parse an ISO-8601 date/datetime. Naive values are taken as UTC."""
    try:
        parsed = _datetime_adapter.validate_python(value)
    except PydanticValidationError:
        raise ValidationError("errors.validation.date", field=field_name, value=value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _date_range_bounds(value: Any, field_name: str) -> Tuple[Any, Any]:
    if isinstance(value, (list, tuple)):
        if len(value) > 2:
            raise ValidationError("errors.validation.dateRange", field=field_name, value=value)
        padded = list(value) + [None] * (2 - len(value))
        return padded[0], padded[1]
    if isinstance(value, str):
        return value, None
    raise ValidationError("errors.validation.dateRange", field=field_name, value=value)


# =============================================================================
# Pagination and ordering
# =============================================================================

class ListParams(BaseModel):
    """Pagination and sort parameters shared by every list query."""

    page: int = Field(0, ge=0, description="Zero-based page index")
    limit: int = Field(0, ge=0, description="Page size; 0 means no limit")
    field: Optional[str] = Field(None, description="Column to sort by")
    sort: Optional[str] = Field(None, description="Sort direction: asc or desc")

    @field_validator("page", "limit", mode="before")
    @classmethod
    def blank_is_zero(cls, v):
        return 0 if _is_blank(v) else v

    @field_validator("field", "sort", mode="before")
    @classmethod
    def blank_is_none(cls, v):
        return None if _is_blank(v) else v

    @field_validator("sort")
    @classmethod
    def valid_direction(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if v.lower() not in ("asc", "desc"):
            raise ValueError(f"Invalid sort direction '{v}'. Must be 'asc' or 'desc'")
        return v.lower()


@dataclass(frozen=True)
class ListQuery:
    """Validated, store-independent description of one list query."""

    predicates: Tuple[Predicate, ...] = ()
    order_by: Tuple[Tuple[str, str], ...] = (("created_at", "desc"),)
    limit: Optional[int] = None
    offset: Optional[int] = None


@dataclass(frozen=True)
class FilterSchema:
    """
    Declared filters and sortable columns of one entity.

    Args:
        entity: Entity name, used in error details
        fields: Filterable fields
        sortable: Columns accepted as sort ``field``
        max_limit: Upper bound on page size (None = unbounded)
    """
    entity: str
    fields: Tuple[FilterField, ...]
    sortable: Tuple[str, ...] = ("created_at", "updated_at")
    default_order: Tuple[str, str] = ("created_at", "desc")
    max_limit: Optional[int] = None
    _by_name: dict = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_by_name", {f.name: f for f in self.fields})

    @property
    def list_valued(self) -> Tuple[str, ...]:
        """Names whose raw value is a list (repeatable query parameters)."""
        return tuple(f.name for f in self.fields if f.kind == FilterKind.DATE_RANGE)

    def field_for(self, name: str) -> Optional[FilterField]:
        return self._by_name.get(name)

    def predicates(self, raw: Optional[Mapping[str, Any]]) -> Tuple[Predicate, ...]:
        """Validate the filter values in raw and return their predicates."""
        if not raw:
            return ()
        result = []
        for filter_field in self.fields:
            if filter_field.name not in raw:
                continue
            result.extend(self._field_predicates(filter_field, raw[filter_field.name]))
        return tuple(result)

    def parse(
        self,
        raw: Optional[Mapping[str, Any]],
        max_limit: Optional[int] = None,
    ) -> ListQuery:
        """
        Build a ListQuery from a raw filter mapping.

        Raises:
            ValidationError: On any malformed filter, pagination or sort value
        """
        raw = raw or {}
        predicates = self.predicates(raw)

        try:
            params = ListParams(
                page=raw.get("page", 0),
                limit=raw.get("limit", 0),
                field=raw.get("field"),
                sort=raw.get("sort"),
            )
        except PydanticValidationError as e:
            first = e.errors()[0]
            loc = first["loc"][0] if first.get("loc") else None
            raise ValidationError("errors.validation.listParams", field=loc, value=first.get("input"))

        limit = params.limit or None
        cap = max_limit if max_limit is not None else self.max_limit
        if cap:
            limit = min(limit, cap) if limit else cap

        offset = params.page * limit if limit else None

        if params.field and params.sort:
            if params.field not in self.sortable:
                raise ValidationError("errors.validation.sortField", field="field", value=params.field)
            order_by = ((params.field, params.sort),)
        else:
            order_by = (self.default_order,)

        return ListQuery(
            predicates=predicates,
            order_by=order_by,
            limit=limit,
            offset=offset or None,
        )

    def _field_predicates(self, filter_field: FilterField, value: Any) -> Tuple[Predicate, ...]:
        kind = filter_field.kind
        name = filter_field.name

        if kind == FilterKind.DATE_RANGE:
            if _is_blank(value):
                return ()
            start, end = _date_range_bounds(value, name)
            column = filter_field.targets[0]
            bounds = []
            if not _is_blank(start):
                bounds.append(AtLeast(column, parse_datetime(start, name)))
            if not _is_blank(end):
                bounds.append(AtMost(column, parse_datetime(end, name)))
            return tuple(bounds)

        if _is_blank(value) or (isinstance(value, (list, tuple)) and not value):
            return ()

        if kind == FilterKind.ID:
            return (Equals(filter_field.targets[0], parse_uuid(value, name)),)

        if kind == FilterKind.TEXT:
            return (Contains(filter_field.targets[0], str(value)),)

        if kind == FilterKind.BOOLEAN:
            return (Equals(filter_field.targets[0], parse_bool(value, name)),)

        if kind == FilterKind.FOREIGN_KEYS:
            return (InSet(filter_field.targets[0], parse_uuid_list(value, name)),)

        if kind == FilterKind.RELATED_IDS:
            return (HasAnyRelated(filter_field.targets[0], parse_uuid_list(value, name)),)

        if kind == FilterKind.SEARCH:
            text = str(value)
            return (any_of(*(Contains(column, text) for column in filter_field.targets)),)

        raise ValueError(f"Unhandled filter kind: {kind}")
