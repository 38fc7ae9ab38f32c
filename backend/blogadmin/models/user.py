"""
User model.

Users are the authors referenced by articles and comments. Accounts are
provisioned by the authentication service; this service only reads them
(list, find, autocomplete) and hydrates them into author relations.
"""

from sqlalchemy import Column, String

from blogadmin.db_base import Base
from blogadmin.models.base import (
    TimestampMixin,
    AuditMixin,
    SoftDeleteMixin,
    ImportHashMixin,
    generate_uuid,
)


class User(Base, TimestampMixin, AuditMixin, SoftDeleteMixin, ImportHashMixin):
    """Author / administrator account."""

    __tablename__ = "users"

    id = Column(
        String(36),
        primary_key=True,
        default=generate_uuid,
        comment="Primary key (UUID)"
    )

    first_name = Column(String(255), nullable=True)

    last_name = Column(String(255), nullable=True)

    email = Column(
        String(255),
        nullable=True,
        index=True,
        comment="Login email, used as the autocomplete label"
    )

    role = Column(
        String(50),
        nullable=True,
        comment="Application role, e.g. 'admin' or 'user'"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email!r}, role={self.role})>"
