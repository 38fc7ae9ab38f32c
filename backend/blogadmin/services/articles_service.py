"""Articles Service."""

from blogadmin.repositories.articles_repo import ArticlesRepository
from blogadmin.services.base_service import CrudService


class ArticlesService(CrudService):
    repository_class = ArticlesRepository
