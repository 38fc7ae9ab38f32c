"""
Articles Repository.

Articles carry an author, a category, a tag set and image attachments.
List queries eagerly attach all four.
"""

from blogadmin.models.article import Article
from blogadmin.query.entity import (
    EntityDescriptor,
    BelongsTo,
    BelongsToMany,
    Attachments,
    text_field,
    boolean_field,
)
from blogadmin.query.filters import (
    FilterSchema,
    id_filter,
    text_filter,
    boolean_filter,
    foreign_keys_filter,
    related_ids_filter,
    date_range_filter,
    search_filter,
)
from blogadmin.repositories.base_repo import CrudRepository


ARTICLES = EntityDescriptor(
    name="articles",
    model=Article,
    label_field="title",
    scalars=(
        text_field("title"),
        text_field("body"),
        boolean_field("featured"),
    ),
    belongs_to=(BelongsTo("author"), BelongsTo("category")),
    belongs_to_many=(BelongsToMany("tags"),),
    attachments=(Attachments("images"),),
    filters=FilterSchema(
        entity="articles",
        fields=(
            id_filter(),
            text_filter("title"),
            text_filter("body"),
            boolean_filter("featured"),
            foreign_keys_filter("author"),
            foreign_keys_filter("category"),
            related_ids_filter("tags"),
            date_range_filter(),
            search_filter(("title", "body")),
        ),
        sortable=("created_at", "updated_at", "title", "featured"),
    ),
)


class ArticlesRepository(CrudRepository):
    """Repository for Article records."""

    def _get_descriptor(self) -> EntityDescriptor:
        return ARTICLES
