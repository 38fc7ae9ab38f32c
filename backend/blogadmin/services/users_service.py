"""
Users Service.

Read-only through the admin API; user accounts are written by the
authentication service.
"""

from blogadmin.repositories.users_repo import UsersRepository
from blogadmin.services.base_service import CrudService


class UsersService(CrudService):
    repository_class = UsersRepository
