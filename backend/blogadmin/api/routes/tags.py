"""Tags API - mounted at /api/tags."""

from blogadmin.api.routes.crud import build_crud_router
from blogadmin.api.schemas.taxonomy import NamedInput, NamedResponse
from blogadmin.services.tags_service import TagsService

router = build_crud_router(
    entity="tags",
    service_class=TagsService,
    input_model=NamedInput,
    response_model=NamedResponse,
)
