# /app/services/auth_service.py

from typing import Optional

from ..core.config import Settings
from ..core.logging_config import get_logger
from ..core.security import hash_password, verify_password
from ..models.auth_model import AdminProfile
from .database_helpers.record_store_sql import TableNotFoundError
from .database_service import DatabaseService

logger = get_logger("auth")


def _profile(row: dict) -> AdminProfile:
    return AdminProfile(id=row["id"], login=row["login"], fullName=row.get("full_name"))


def get_admin(admin_id: str, db: DatabaseService) -> Optional[AdminProfile]:
    row = db.get_by_id("admins", admin_id)
    return _profile(row) if row else None


def authenticate_admin(login: str, password: str, db: DatabaseService) -> Optional[AdminProfile]:
    rows = db.select_or_empty("admins", filters={"login": login}, limit=1)
    if not rows or not verify_password(password, rows[0]["password_hash"]):
        logger.warning("Failed admin login for '%s'", login)
        return None
    return _profile(rows[0])


def create_admin(login: str, password: str, db: DatabaseService, full_name: Optional[str] = None) -> AdminProfile:
    if db.select("admins", filters={"login": login}, limit=1):
        raise ValueError(f"Admin '{login}' already exists")
    row = db.insert("admins", {"login": login, "password_hash": hash_password(password), "full_name": full_name})
    logger.info("Created admin '%s'", login)
    return _profile(row)


def ensure_bootstrap_admin(settings: Settings, db: DatabaseService) -> Optional[AdminProfile]:
    """Creates the admin named in the environment on first start. A no-op when unset or present."""
    if not settings.admin_login or not settings.admin_password:
        return None
    try:
        if db.select("admins", filters={"login": settings.admin_login}, limit=1):
            return None
    except TableNotFoundError:
        logger.warning("The admins table is missing; skipping the bootstrap admin.")
        return None
    return create_admin(settings.admin_login, settings.admin_password, db)
