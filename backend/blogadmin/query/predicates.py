"""
Composable, typed predicates for list queries.

Predicates are plain frozen dataclasses naming model attributes, so a
filter can be built, compared and inspected without a database. They are
compiled against a mapped model class only when the query executes.

Usage:
    from blogadmin.query.predicates import Contains, InSet, compile_all

    predicates = [Contains("title", "python"), InSet("author_id", ("u1", "u2"))]
    stmt = select(Article).where(*compile_all(predicates, Article))
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple

from sqlalchemy import and_, or_, inspect
from sqlalchemy.sql.elements import ColumnElement


LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _column(model, attribute: str):
    try:
        return getattr(model, attribute)
    except AttributeError:
        raise AttributeError(f"{model.__name__} has no attribute '{attribute}'")


class Predicate:
    """Base class. Subclasses compile to a SQLAlchemy boolean expression."""

    def compile(self, model) -> ColumnElement:
        raise NotImplementedError


@dataclass(frozen=True)
class Equals(Predicate):
    attribute: str
    value: Any

    def compile(self, model) -> ColumnElement:
        return _column(model, self.attribute) == self.value


@dataclass(frozen=True)
class IsNull(Predicate):
    attribute: str

    def compile(self, model) -> ColumnElement:
        return _column(model, self.attribute).is_(None)


@dataclass(frozen=True)
class Contains(Predicate):
    """Case-insensitive substring match."""

    attribute: str
    text: str

    def compile(self, model) -> ColumnElement:
        pattern = f"%{escape_like(self.text)}%"
        return _column(model, self.attribute).ilike(pattern, escape=LIKE_ESCAPE)


@dataclass(frozen=True)
class InSet(Predicate):
    attribute: str
    values: Tuple[Any, ...]

    def compile(self, model) -> ColumnElement:
        return _column(model, self.attribute).in_(self.values)


@dataclass(frozen=True)
class AtLeast(Predicate):
    """Inclusive lower bound."""

    attribute: str
    bound: Any

    def compile(self, model) -> ColumnElement:
        return _column(model, self.attribute) >= self.bound


@dataclass(frozen=True)
class AtMost(Predicate):
    """Inclusive upper bound."""

    attribute: str
    bound: Any

    def compile(self, model) -> ColumnElement:
        return _column(model, self.attribute) <= self.bound


@dataclass(frozen=True)
class HasAnyRelated(Predicate):
    """
    Collection relationship contains at least one live row whose id is in ids.

    Compiles to an EXISTS subquery, so the parent row is never duplicated
    and counts stay correct.
    """

    relationship: str
    ids: Tuple[str, ...]

    def compile(self, model) -> ColumnElement:
        rel = _column(model, self.relationship)
        target = inspect(model).relationships[self.relationship].mapper.class_
        criteria = [target.id.in_(self.ids)]
        if hasattr(target, "deleted_at"):
            criteria.append(target.deleted_at.is_(None))
        return rel.any(and_(*criteria))


@dataclass(frozen=True)
class AllOf(Predicate):
    predicates: Tuple[Predicate, ...]

    def compile(self, model) -> ColumnElement:
        return and_(*(p.compile(model) for p in self.predicates))


@dataclass(frozen=True)
class AnyOf(Predicate):
    predicates: Tuple[Predicate, ...]

    def compile(self, model) -> ColumnElement:
        return or_(*(p.compile(model) for p in self.predicates))


def all_of(*predicates: Predicate) -> AllOf:
    """AND predicates together, flattening nested AllOf groups."""
    flat: List[Predicate] = []
    for predicate in predicates:
        if isinstance(predicate, AllOf):
            flat.extend(predicate.predicates)
        else:
            flat.append(predicate)
    return AllOf(tuple(flat))


def any_of(*predicates: Predicate) -> AnyOf:
    return AnyOf(tuple(predicates))


def compile_all(predicates: Iterable[Predicate], model) -> List[ColumnElement]:
    """Compile predicates into WHERE clauses (implicitly ANDed by .where())."""
    return [predicate.compile(model) for predicate in predicates]
