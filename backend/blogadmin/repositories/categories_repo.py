"""Categories Repository."""

from blogadmin.models.category import Category
from blogadmin.query.entity import EntityDescriptor, text_field
from blogadmin.query.filters import (
    FilterSchema,
    id_filter,
    text_filter,
    date_range_filter,
    search_filter,
)
from blogadmin.repositories.base_repo import CrudRepository


CATEGORIES = EntityDescriptor(
    name="categories",
    model=Category,
    label_field="name",
    scalars=(text_field("name"),),
    filters=FilterSchema(
        entity="categories",
        fields=(
            id_filter(),
            text_filter("name"),
            date_range_filter(),
            search_filter(("name",)),
        ),
        sortable=("created_at", "updated_at", "name"),
    ),
)


class CategoriesRepository(CrudRepository):
    def _get_descriptor(self) -> EntityDescriptor:
        return CATEGORIES
