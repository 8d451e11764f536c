"""
Session routes: token-presence login, logout and profile.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from storage.auth import AuthSession

from ..deps import get_auth, require_session

router = APIRouter(tags=["auth"])


class LoginRequest(BaseModel):
    email: str
    name: Optional[str] = None


class ProfileUpdate(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None


@router.post("/login")
def login(body: LoginRequest, auth: AuthSession = Depends(get_auth)):
    try:
        token = auth.login(body.email, body.name)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return {"token": token, "user": auth.user()}


@router.post("/logout")
def logout(auth: AuthSession = Depends(require_session)):
    auth.logout()
    return {"status": "signed out"}


@router.get("/profile")
def profile(auth: AuthSession = Depends(require_session)):
    return auth.user() or {}


@router.put("/profile")
def update_profile(body: ProfileUpdate, auth: AuthSession = Depends(require_session)):
    try:
        return auth.update_profile(name=body.name, email=body.email)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
