"""
Comments API - mounted at /api/comments.

Filters: id, text, moderated, author (a|b), article (a|b),
created_at_range, search, page, limit, field, sort.
"""

from blogadmin.api.routes.crud import build_crud_router
from blogadmin.api.schemas.comments import CommentInput, CommentResponse
from blogadmin.services.comments_service import CommentsService

router = build_crud_router(
    entity="comments",
    service_class=CommentsService,
    input_model=CommentInput,
    response_model=CommentResponse,
)
