"""
Business logic services.
"""

from blogadmin.services.base_service import CrudService
from blogadmin.services.articles_service import ArticlesService
from blogadmin.services.comments_service import CommentsService
from blogadmin.services.tags_service import TagsService
from blogadmin.services.categories_service import CategoriesService
from blogadmin.services.users_service import UsersService

__all__ = [
    "CrudService",
    "ArticlesService",
    "CommentsService",
    "TagsService",
    "CategoriesService",
    "UsersService",
]
