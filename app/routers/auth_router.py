# /app/routers/auth_router.py

"""
Admin login (OAuth2 password flow) and the profile of the logged-in admin.

The token returned by `/token` must be sent as a bearer token on every admin
route; it is validated per request by `get_current_admin`.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm

from ..core import security
from ..core.deps import get_current_admin
from ..models.auth_model import AdminProfile, Token
from ..services import auth_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.post("/token", response_model=Token)
def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: DatabaseService = Depends(get_db_service),
):
    admin = auth_service.authenticate_admin(form_data.username, form_data.password, db)
    if not admin:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect login or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(access_token=security.create_access_token(subject=admin.id), token_type="bearer")


@router.get("/me", response_model=AdminProfile)
def read_current_admin(current_admin: AdminProfile = Depends(get_current_admin)):
    return current_admin
