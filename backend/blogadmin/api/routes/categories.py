"""Categories API - mounted at /api/categories."""

from blogadmin.api.routes.crud import build_crud_router
from blogadmin.api.schemas.taxonomy import NamedInput, NamedResponse
from blogadmin.services.categories_service import CategoriesService

router = build_crud_router(
    entity="categories",
    service_class=CategoriesService,
    input_model=NamedInput,
    response_model=NamedResponse,
)
