"""Categories Service."""

from blogadmin.repositories.categories_repo import CategoriesRepository
from blogadmin.services.base_service import CrudService


class CategoriesService(CrudService):
    repository_class = CategoriesRepository
