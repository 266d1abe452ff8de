# /app/core/security.py

"""
Password hashing and access tokens for the admin area.

Passwords are stored as `pbkdf2_sha256$<rounds>$<salt>$<hex digest>`. Access
tokens are HS256 JWTs signed with the configured secret; the admin id travels in
the `sub` claim.
"""

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from .config import get_settings

ALGORITHM = "HS256"
PBKDF2_ROUNDS = 260000


class InvalidTokenError(Exception):
    pass


def hash_password(password: str, rounds: int = PBKDF2_ROUNDS) -> str:
    salt = secrets.token_hex(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), bytes.fromhex(salt), rounds)
    return f"pbkdf2_sha256${rounds}${salt}${dk.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        scheme, rounds, salt, digest = password_hash.split("$")
        if scheme != "pbkdf2_sha256":
            return False
        dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), bytes.fromhex(salt), int(rounds))
    except (AttributeError, ValueError):
        return False
    return hmac.compare_digest(dk.hex(), digest)


def create_access_token(subject: str, expires_minutes: Optional[int] = None, secret_key: Optional[str] = None) -> str:
    settings = get_settings()
    minutes = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    now = datetime.now(timezone.utc)
    claims = {"sub": subject, "iat": now, "exp": now + timedelta(minutes=minutes)}
    return jwt.encode(claims, secret_key or settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str, secret_key: Optional[str] = None) -> Dict[str, Any]:
    """Returns the token claims; expired, tampered or subject-less tokens raise InvalidTokenError."""
    try:
        claims = jwt.decode(token, secret_key or get_settings().secret_key, algorithms=[ALGORITHM])
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e
    if not claims.get("sub"):
        raise InvalidTokenError("Token has no subject.")
    return claims
