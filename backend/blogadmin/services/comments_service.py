"""Comments Service."""

from blogadmin.repositories.comments_repo import CommentsRepository
from blogadmin.services.base_service import CrudService


class CommentsService(CrudService):
    repository_class = CommentsRepository
