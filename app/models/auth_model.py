# /app/models/auth_model.py

from typing import Optional

from pydantic import BaseModel


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AdminProfile(BaseModel):
    id: str
    login: str
    fullName: Optional[str] = None
