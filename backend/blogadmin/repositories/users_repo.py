"""
Users Repository.

Users are provisioned by the authentication service. The admin API only
reads them: author pickers use autocomplete, the users screen uses
find_all / find_by.
"""

from blogadmin.models.user import User
from blogadmin.query.entity import EntityDescriptor, text_field
from blogadmin.query.filters import (
    FilterSchema,
    id_filter,
    text_filter,
    date_range_filter,
    search_filter,
)
from blogadmin.repositories.base_repo import CrudRepository


USERS = EntityDescriptor(
    name="users",
    model=User,
    label_field="email",
    scalars=(
        text_field("first_name"),
        text_field("last_name"),
        text_field("email"),
        text_field("role"),
    ),
    filters=FilterSchema(
        entity="users",
        fields=(
            id_filter(),
            text_filter("first_name"),
            text_filter("last_name"),
            text_filter("email"),
            text_filter("role"),
            date_range_filter(),
            search_filter(("first_name", "last_name", "email")),
        ),
        sortable=("created_at", "updated_at", "email", "last_name"),
    ),
)


class UsersRepository(CrudRepository):
    def _get_descriptor(self) -> EntityDescriptor:
        return USERS
