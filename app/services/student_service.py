# /app/services/student_service.py

"""
This service module is the business logic layer for students and their payment
history.

Every mutation that can change a group's enrollment or paid revenue is followed
by a metrics sync of the affected group(s):

- create / delete: the student's group;
- update: the old and the new group when the student moves, the current group
  when the payment amount or status changes;
- record_payment: the student's group, since the payment status changes.

Group, schedule and teacher names are resolved at read time, never stored on
the student.
"""

from typing import Dict, List, Optional

from ..core.logging_config import get_logger
from ..models.group_model import GroupProfile
from ..models.student_model import (
    PaymentCreate,
    PaymentHistoryEntry,
    StudentPayload,
    StudentProfile,
    StudentSummary,
    StudentUpdate,
)
from .admin_helpers import mappers, metrics
from .admin_helpers.group_sync import sync_group_metrics
from .database_service import DatabaseService

logger = get_logger("students")

_PAYMENT_FIELDS = ("monthly_payment", "payment_status")
_REQUIRED_COLUMNS = ("full_name", "monthly_payment", "payment_status")


def _group_profiles(db: DatabaseService) -> Dict[str, GroupProfile]:
    names = {t["id"]: t.get("name") or "" for t in db.select("teachers", columns=["id", "name"])}
    return {
        row["id"]: mappers.group_from_db(row, names.get(row.get("teacher_id")))
        for row in db.select("groups")
    }


def _history_by_student(db: DatabaseService, student_id: Optional[str] = None) -> Dict[str, List[PaymentHistoryEntry]]:
    filters = {"student_id": student_id} if student_id else None
    history: Dict[str, List[PaymentHistoryEntry]] = {}
    for row in db.select_or_empty("payment_history", filters=filters, order_by="date", descending=True):
        history.setdefault(row["student_id"], []).append(mappers.payment_from_db(row))
    return history


def _check_group(group_id: Optional[str], db: DatabaseService) -> None:
    if group_id and db.get_by_id("groups", group_id) is None:
        raise ValueError(f"Group with ID {group_id} not found")


def _sync(db: DatabaseService, *group_ids: Optional[str]) -> None:
    for group_id in dict.fromkeys(g for g in group_ids if g):
        sync_group_metrics(db, group_id)


# --- Reads ---

def list_students(db: DatabaseService) -> List[StudentProfile]:
    groups = _group_profiles(db)
    history = _history_by_student(db)
    students = []
    for row in db.select("students", order_by="created_at", descending=True):
        student = mappers.student_from_db(row, groups.get(row.get("group_id")))
        student.history = history.get(student.id, [])
        students.append(student)
    return students


def get_student(student_id: str, db: DatabaseService) -> Optional[StudentProfile]:
    row = db.get_by_id("students", student_id)
    if row is None:
        return None
    group = _group_profiles(db).get(row.get("group_id"))
    student = mappers.student_from_db(row, group)
    student.history = _history_by_student(db, student_id).get(student_id, [])
    return student


def get_student_summary(db: DatabaseService) -> StudentSummary:
    groups = _group_profiles(db)
    students = [mappers.student_from_db(row) for row in db.select("students")]
    return metrics.summarize_students(students, groups.values())


# --- Mutations ---

def create_student(payload: StudentPayload, db: DatabaseService) -> StudentProfile:
    _check_group(payload.groupId, db)
    row = db.insert("students", mappers.student_to_db(payload))
    logger.info("Created student %s", row["id"])
    _sync(db, row.get("group_id"))
    return get_student(row["id"], db)


def update_student(student_id: str, payload: StudentUpdate, db: DatabaseService) -> Optional[StudentProfile]:
    values = mappers.require_values(mappers.student_to_db(payload), _REQUIRED_COLUMNS)
    if not values:
        raise ValueError("No update data provided.")
    existing = db.get_by_id("students", student_id)
    if existing is None:
        return None
    _check_group(values.get("group_id"), db)

    db.update("students", values, {"id": student_id})

    old_group = existing.get("group_id")
    if "group_id" in values and values["group_id"] != old_group:
        _sync(db, old_group, values["group_id"])
    elif any(field in values for field in _PAYMENT_FIELDS):
        _sync(db, old_group)
    return get_student(student_id, db)


def delete_student(student_id: str, db: DatabaseService) -> bool:
    """Deletes the student together with its payment history."""
    existing = db.get_by_id("students", student_id)
    if existing is None:
        return False
    db.delete("payment_history", {"student_id": student_id})
    db.delete("students", {"id": student_id})
    logger.info("Deleted student %s", student_id)
    _sync(db, existing.get("group_id"))
    return True


def record_payment(student_id: str, payment: PaymentCreate, db: DatabaseService) -> Optional[StudentProfile]:
    """
    Appends an entry to the student's payment history and carries its status over
    to the student. History entries are never edited afterwards.
    """
    existing = db.get_by_id("students", student_id)
    if existing is None:
        return None
    db.insert("payment_history", mappers.payment_to_db({"studentId": student_id, **payment.model_dump()}))
    db.update("students", {"payment_status": payment.status}, {"id": student_id})
    logger.info("Recorded %s payment of %s for student %s", payment.status, payment.amount, student_id)
    _sync(db, existing.get("group_id"))
    return get_student(student_id, db)
