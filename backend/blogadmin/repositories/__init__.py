"""Repository layer: one CrudRepository per entity plus file attachments."""

from blogadmin.repositories.base_repo import CrudRepository, plain_columns
from blogadmin.repositories.files_repo import FilesRepository
from blogadmin.repositories.articles_repo import ArticlesRepository, ARTICLES
from blogadmin.repositories.comments_repo import CommentsRepository, COMMENTS
from blogadmin.repositories.tags_repo import TagsRepository, TAGS
from blogadmin.repositories.categories_repo import CategoriesRepository, CATEGORIES
from blogadmin.repositories.users_repo import UsersRepository, USERS

__all__ = [
    "CrudRepository",
    "plain_columns",
    "FilesRepository",
    "ArticlesRepository",
    "CommentsRepository",
    "TagsRepository",
    "CategoriesRepository",
    "UsersRepository",
    "ARTICLES",
    "COMMENTS",
    "TAGS",
    "CATEGORIES",
    "USERS",
]
