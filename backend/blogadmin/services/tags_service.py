"""Tags Service."""

from blogadmin.repositories.tags_repo import TagsRepository
from blogadmin.services.base_service import CrudService


class TagsService(CrudService):
    repository_class = TagsRepository
