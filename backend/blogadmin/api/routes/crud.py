"""
CRUD router factory.

Every entity exposes the same endpoints, mounted at /api/<entity>:

    POST   ""              {"data": {...}}               -> true
    POST   "/bulk-import"  {"data": [{...}, ...]}        -> {"created", "skipped"}
    PUT    "/{id}"         {"id": ..., "data": {...}}    -> true
    DELETE "/{id}"                                       -> true   (admin only)
    GET    ""              filter query parameters       -> {"rows", "count"}
    GET    "/autocomplete" ?query=&limit=                -> [{"id", "label"}]
    GET    "/{id}"                                       -> record or null

Errors raised by services are rendered by blogadmin.api.errors.
"""

import logging
from typing import Any, Dict, List, Optional, Type

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel
from sqlalchemy.orm import Session

from blogadmin.api.schemas.common import (
    AutocompleteItem,
    BulkImportResponse,
    DataEnvelope,
    ListResponse,
    UpdateEnvelope,
)
from blogadmin.database.session import get_db_session
from blogadmin.platform.actor import Actor, get_actor
from blogadmin.services.base_service import CrudService

logger = logging.getLogger(__name__)


def filter_from_query(request: Request, list_valued: tuple) -> Dict[str, Any]:
    """
    Collect query parameters into a raw filter mapping.

    Repeatable parameters (date ranges) keep every value, in order.
    """
    params = request.query_params
    return {
        key: params.getlist(key) if key in list_valued else params.get(key)
        for key in params.keys()
    }


def build_crud_router(
    *,
    entity: str,
    service_class: Type[CrudService],
    input_model: Type[BaseModel],
    response_model: Type[BaseModel],
    read_only: bool = False,
) -> APIRouter:
    """
    Build the router for one entity.

    Args:
        entity: Entity name, used for the /api/<entity> prefix and tag
        service_class: CrudService subclass bound to the entity repository
        input_model: Payload schema for create/update/bulk import
        response_model: Schema of one hydrated record
        read_only: Expose only the read endpoints
    """
    router = APIRouter(prefix=f"/api/{entity}", tags=[entity])

    def _get_service(db: Session = Depends(get_db_session)) -> CrudService:
        return service_class(db)

    if not read_only:

        @router.post("", response_model=bool)
        def create_record(
            body: DataEnvelope[input_model],
            actor: Actor = Depends(get_actor),
            service: CrudService = Depends(_get_service),
        ):
            """Add new item."""
            service.create(body.data, actor)
            return True

        @router.post("/bulk-import", response_model=BulkImportResponse)
        def bulk_import_records(
            body: DataEnvelope[List[input_model]],
            actor: Actor = Depends(get_actor),
            service: CrudService = Depends(_get_service),
        ):
            """Import items, skipping rows whose import_hash already exists."""
            return service.bulk_import(body.data, actor)

        @router.put("/{record_id}", response_model=bool)
        def update_record(
            record_id: str,
            body: UpdateEnvelope[input_model],
            actor: Actor = Depends(get_actor),
            service: CrudService = Depends(_get_service),
        ):
            """Update the data of the selected item."""
            service.update(body.data, record_id, actor)
            return True

        @router.delete("/{record_id}", response_model=bool)
        def remove_record(
            record_id: str,
            actor: Actor = Depends(get_actor),
            service: CrudService = Depends(_get_service),
        ):
            """Delete the selected item (soft delete, admin only)."""
            service.remove(record_id, actor)
            return True

    @router.get("", response_model=ListResponse[response_model])
    def list_records(
        request: Request,
        service: CrudService = Depends(_get_service),
    ):
        """List items matching the filter query parameters."""
        list_valued = service.repository.descriptor.filters.list_valued
        return service.find_all(filter_from_query(request, list_valued))

    @router.get("/autocomplete", response_model=List[AutocompleteItem])
    def autocomplete_records(
        query: Optional[str] = Query(None),
        limit: Optional[int] = Query(None, ge=1),
        service: CrudService = Depends(_get_service),
    ):
        """{id, label} pairs for typeahead widgets."""
        return service.find_all_autocomplete(query, limit)

    @router.get("/{record_id}", response_model=Optional[response_model])
    def get_record(
        record_id: str,
        service: CrudService = Depends(_get_service),
    ):
        """Get selected item, or null when it does not exist."""
        return service.find_by({"id": record_id})

    return router
