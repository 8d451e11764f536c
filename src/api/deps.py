"""Shared FastAPI dependencies."""
from __future__ import annotations

from fastapi import HTTPException, Request

from resources.client import ResourceClient
from resources.registry import get_resource
from storage.auth import AuthSession


def get_auth(request: Request) -> AuthSession:
    return request.app.state.auth


def require_session(request: Request) -> AuthSession:
    auth: AuthSession = request.app.state.auth
    if not auth.is_authenticated():
        raise HTTPException(status_code=401, detail="Not signed in")
    return auth


def client_for(request: Request, name: str) -> ResourceClient:
    try:
        spec = get_resource(name)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return ResourceClient(spec, settings=request.app.state.settings, transport=request.app.state.transport)
