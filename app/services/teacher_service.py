# /app/services/teacher_service.py

"""
Business logic for the teachers screen: the teacher list with the groups each
teacher leads, CRUD, and the payroll summary shown above the list.
"""

from typing import List, Optional

from ..core.logging_config import get_logger
from ..models.finance_model import SalarySummary
from ..models.teacher_model import TeacherGroupRef, TeacherPayload, TeacherProfile, TeacherUpdate
from .admin_helpers import mappers, metrics
from .database_service import DatabaseService

logger = get_logger("teachers")

_REQUIRED_COLUMNS = ("name", "status")


def _attach_groups(teacher: TeacherProfile, group_rows: List[dict]) -> TeacherProfile:
    teacher.groups = [
        TeacherGroupRef(id=g["id"], name=g.get("name") or "", schedule=g.get("schedule") or "")
        for g in group_rows
        if g.get("teacher_id") == teacher.id
    ]
    return teacher


def list_teachers(db: DatabaseService) -> List[TeacherProfile]:
    teacher_rows = db.select("teachers", order_by="created_at", descending=True)
    group_rows = db.select("groups", columns=["id", "name", "schedule", "teacher_id"])
    return [_attach_groups(mappers.teacher_from_db(row), group_rows) for row in teacher_rows]


def get_teacher(teacher_id: str, db: DatabaseService) -> Optional[TeacherProfile]:
    row = db.get_by_id("teachers", teacher_id)
    if row is None:
        return None
    group_rows = db.select("groups", columns=["id", "name", "schedule", "teacher_id"], filters={"teacher_id": teacher_id})
    return _attach_groups(mappers.teacher_from_db(row), group_rows)


def create_teacher(payload: TeacherPayload, db: DatabaseService) -> TeacherProfile:
    row = db.insert("teachers", mappers.teacher_to_db(payload))
    logger.info("Created teacher %s", row["id"])
    return mappers.teacher_from_db(row)


def update_teacher(teacher_id: str, payload: TeacherUpdate, db: DatabaseService) -> Optional[TeacherProfile]:
    values = mappers.require_values(mappers.teacher_to_db(payload), _REQUIRED_COLUMNS)
    if not values:
        raise ValueError("No update data provided.")
    rows = db.update("teachers", values, {"id": teacher_id})
    if not rows:
        return None
    return get_teacher(teacher_id, db)


def delete_teacher(teacher_id: str, db: DatabaseService) -> bool:
    """Unassigns the teacher from groups, courses and schedule slots, then deletes it."""
    if db.get_by_id("teachers", teacher_id) is None:
        return False
    for table in ("groups", "courses", "schedule_entries"):
        db.update(table, {"teacher_id": None}, {"teacher_id": teacher_id})
    db.delete("teachers", {"id": teacher_id})
    logger.info("Deleted teacher %s", teacher_id)
    return True


def get_salary_summary(db: DatabaseService) -> SalarySummary:
    teachers = [mappers.teacher_from_db(row) for row in db.select("teachers", columns=["id", "name", "monthly_salary", "status"])]
    return metrics.summarize_salaries(teachers)
