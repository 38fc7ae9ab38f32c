"""
Default soft-delete scope.

``active_only()`` is a loader option that hides tombstoned rows of every
SoftDeleteMixin model reached by a query: eager loads, lazy loads of
objects loaded by that query, and joined relations alike. The root entity
of list/count queries is additionally filtered explicitly with
``IsNull("deleted_at")`` so the count query sees the same scope.
"""

from sqlalchemy.orm import with_loader_criteria

from blogadmin.models.base import SoftDeleteMixin


def active_only():
    return with_loader_criteria(
        SoftDeleteMixin,
        lambda cls: cls.deleted_at.is_(None),
        include_aliases=True,
    )
