"""
REST routes for browsing and editing backend resources.
"""

import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Request, Response
from pydantic import BaseModel

from exceptions import BadStatusError
from pages.forms import EntityForm
from pages.list_page import ListPage
from resources.client import ResourceClient

from ..deps import client_for, require_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/resources", tags=["resources"], dependencies=[Depends(require_session)])


class ListResponse(BaseModel):
    """One page of a resource table"""
    resource: str
    rows: List[Dict[str, str]]
    pagination: Dict[str, int]
    label: str
    summary: str
    error: Optional[str] = None


@router.get("/{name}", response_model=ListResponse)
def list_resource(
    request: Request,
    name: str,
    page: int = Query(1, ge=1, description="1-based page number"),
    page_size: Optional[int] = Query(None, ge=1, le=200, description="Rows per page"),
    q: str = Query("", description="Case-insensitive search over the display name"),
    sort: Literal["newest", "oldest", "name-asc", "name-desc"] = Query("newest"),
):
    client = client_for(request, name)
    view = ListPage(client, page_size=page_size or request.app.state.settings.page_size)
    view.set_query(q)
    view.set_sort(sort)
    view.load(page)
    return ListResponse(
        resource=client.spec.name,
        rows=view.visible_rows(),
        pagination=view.pagination.model_dump(),
        label=view.pagination.label(),
        summary=view.summary(),
        error=view.error,
    )


@router.get("/{name}/{record_id}")
def get_record(request: Request, name: str, record_id: str):
    client = client_for(request, name)
    try:
        record = client.get(record_id)
    except BadStatusError as e:
        raise HTTPException(status_code=502, detail=e.message) from e
    if record is None:
        raise HTTPException(status_code=404, detail=f"{client.spec.entity} {record_id} not found")
    return record


def _checked_form(client: ResourceClient, fields: Dict[str, Any], record_id: Optional[str] = None) -> EntityForm:
    """Fill a form, answering 422 on invalid fields and 409 on a duplicate name."""
    form = EntityForm(
        client,
        required=client.spec.display_fields,
        unique_field="name" if client.spec.name_only else None,
    )
    for key, value in fields.items():
        form.set_field(key, value)
    errors = form.validate()
    if errors:
        raise HTTPException(status_code=422, detail=errors[0])
    if form.check_duplicate(exclude_id=record_id) is not None:
        raise HTTPException(status_code=409, detail=form.validate()[0])
    return form


@router.post("/{name}", status_code=201)
def create_record(request: Request, name: str, fields: Dict[str, Any] = Body(...)):
    created = _checked_form(client_for(request, name), fields).submit()
    return created or {"status": "created"}


@router.put("/{name}/{record_id}")
def update_record(request: Request, name: str, record_id: str, fields: Dict[str, Any] = Body(...)):
    _checked_form(client_for(request, name), fields, record_id).submit(record_id)
    return {"status": "updated", "id": record_id}


@router.delete("/{name}/{record_id}", status_code=204)
def delete_record(request: Request, name: str, record_id: str):
    client = client_for(request, name)
    client.delete(record_id)
    logger.info(f"Deleted {client.spec.entity} {record_id}")
    return Response(status_code=204)
