"""Users API - read-only, mounted at /api/users."""

from pydantic import BaseModel

from blogadmin.api.routes.crud import build_crud_router
from blogadmin.api.schemas.users import UserResponse
from blogadmin.services.users_service import UsersService

router = build_crud_router(
    entity="users",
    service_class=UsersService,
    input_model=BaseModel,
    response_model=UserResponse,
    read_only=True,
)
