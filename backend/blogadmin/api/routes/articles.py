"""
Articles API - mounted at /api/articles.

Filters: id, title, body, featured, author (a|b), category (a|b),
tags (a|b), created_at_range (repeat twice: start, end), search,
page, limit, field, sort.
"""

from blogadmin.api.routes.crud import build_crud_router
from blogadmin.api.schemas.articles import ArticleInput, ArticleResponse
from blogadmin.services.articles_service import ArticlesService

router = build_crud_router(
    entity="articles",
    service_class=ArticlesService,
    input_model=ArticleInput,
    response_model=ArticleResponse,
)
