"""
Dashboard and image upload routes.
"""

import logging
from typing import Dict

from fastapi import APIRouter, Depends, File, Request, UploadFile
from pydantic import BaseModel

from pages.dashboard import Dashboard
from resources.client import ResourceClient
from resources.registry import RESOURCES
from resources.upload import upload_image

from ..deps import require_session

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["dashboard"], dependencies=[Depends(require_session)])


class DashboardResponse(BaseModel):
    counts: Dict[str, int]
    total: int


class UploadResponse(BaseModel):
    url: str


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(request: Request):
    settings = request.app.state.settings
    transport = request.app.state.transport
    clients = {name: ResourceClient(spec, settings=settings, transport=transport) for name, spec in RESOURCES.items()}
    counts = Dashboard(clients).load()
    return DashboardResponse(counts=counts, total=sum(counts.values()))


@router.post("/images", response_model=UploadResponse)
async def upload(request: Request, file: UploadFile = File(...)):
    content = await file.read()
    url = upload_image(
        file.filename or "upload",
        content,
        file.content_type or "application/octet-stream",
        settings=request.app.state.settings,
        transport=request.app.state.transport,
    )
    return UploadResponse(url=url)
