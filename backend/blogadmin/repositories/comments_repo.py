"""Comments Repository - comments reference an author and an article."""

from blogadmin.models.comment import Comment
from blogadmin.query.entity import (
    EntityDescriptor,
    BelongsTo,
    text_field,
    boolean_field,
)
from blogadmin.query.filters import (
    FilterSchema,
    id_filter,
    text_filter,
    boolean_filter,
    foreign_keys_filter,
    date_range_filter,
    search_filter,
)
from blogadmin.repositories.base_repo import CrudRepository


COMMENTS = EntityDescriptor(
    name="comments",
    model=Comment,
    label_field="text",
    scalars=(
        text_field("text"),
        boolean_field("moderated"),
    ),
    belongs_to=(BelongsTo("author"), BelongsTo("article")),
    filters=FilterSchema(
        entity="comments",
        fields=(
            id_filter(),
            text_filter("text"),
            boolean_filter("moderated"),
            foreign_keys_filter("author"),
            foreign_keys_filter("article"),
            date_range_filter(),
            search_filter(("text",)),
        ),
        sortable=("created_at", "updated_at", "text", "moderated"),
    ),
)


class CommentsRepository(CrudRepository):
    """Repository for Comment records."""

    def _get_descriptor(self) -> EntityDescriptor:
        return COMMENTS
