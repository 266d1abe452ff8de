# /app/core/deps.py

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from ..models.auth_model import AdminProfile
from ..services import auth_service
from ..services.database_service import DatabaseService, get_db_service
from .security import InvalidTokenError, decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")

_CREDENTIALS_ERROR = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


def get_current_admin(
    token: str = Depends(oauth2_scheme),
    db: DatabaseService = Depends(get_db_service),
) -> AdminProfile:
    """Resolves the bearer token to a stored admin on every request."""
    try:
        claims = decode_access_token(token)
    except InvalidTokenError:
        raise _CREDENTIALS_ERROR
    admin = auth_service.get_admin(claims["sub"], db)
    if admin is None:
        raise _CREDENTIALS_ERROR
    return admin
