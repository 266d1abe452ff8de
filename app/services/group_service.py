# /app/services/group_service.py

"""
Business logic for study groups.

`currentStudents` and `monthlyRevenue` are never accepted from a client. They
are recomputed from student data by the synchronizer after every write, and
once more before the list is served so that stale values never reach a screen.
"""

from typing import Dict, List, Optional

from ..core.logging_config import get_logger
from ..models.group_model import GroupPayload, GroupProfile, GroupSummary, GroupUpdate
from ..models.student_model import StudentProfile
from .admin_helpers import mappers, metrics
from .admin_helpers.group_sync import sync_group_metrics
from .database_service import DatabaseService

logger = get_logger("groups")

_REQUIRED_COLUMNS = ("name", "max_students", "status")


def _teacher_names(db: DatabaseService) -> Dict[str, str]:
    return {t["id"]: t.get("name") or "" for t in db.select("teachers", columns=["id", "name"])}


def _check_teacher(teacher_id: Optional[str], db: DatabaseService) -> None:
    if teacher_id and db.get_by_id("teachers", teacher_id) is None:
        raise ValueError(f"Teacher with ID {teacher_id} not found")


def list_groups(db: DatabaseService) -> List[GroupProfile]:
    sync_group_metrics(db)
    names = _teacher_names(db)
    return [
        mappers.group_from_db(row, names.get(row.get("teacher_id")))
        for row in db.select("groups", order_by="created_at", descending=True)
    ]


def get_group(group_id: str, db: DatabaseService) -> Optional[GroupProfile]:
    row = db.get_by_id("groups", group_id)
    if row is None:
        return None
    teacher = db.get_by_id("teachers", row["teacher_id"]) if row.get("teacher_id") else None
    return mappers.group_from_db(row, teacher.get("name") if teacher else None)


def list_group_students(group_id: str, db: DatabaseService) -> Optional[List[StudentProfile]]:
    group = get_group(group_id, db)
    if group is None:
        return None
    rows = db.select("students", filters={"group_id": group_id}, order_by="full_name")
    return [mappers.student_from_db(row, group) for row in rows]


def create_group(payload: GroupPayload, db: DatabaseService) -> GroupProfile:
    _check_teacher(payload.teacherId, db)
    row = db.insert("groups", mappers.group_to_db(payload))
    sync_group_metrics(db, row["id"])
    logger.info("Created group %s", row["id"])
    return get_group(row["id"], db)


def update_group(group_id: str, payload: GroupUpdate, db: DatabaseService) -> Optional[GroupProfile]:
    values = mappers.require_values(mappers.group_to_db(payload), _REQUIRED_COLUMNS)
    if not values:
        raise ValueError("No update data provided.")
    _check_teacher(values.get("teacher_id"), db)
    if not db.update("groups", values, {"id": group_id}):
        return None
    sync_group_metrics(db, group_id)
    return get_group(group_id, db)


def delete_group(group_id: str, db: DatabaseService) -> bool:
    """Members are kept as unassigned students."""
    if db.get_by_id("groups", group_id) is None:
        return False
    db.update("students", {"group_id": None}, {"group_id": group_id})
    db.delete("groups", {"id": group_id})
    logger.info("Deleted group %s", group_id)
    return True


def get_group_summary(db: DatabaseService) -> GroupSummary:
    return metrics.summarize_groups(list_groups(db))
