# /app/services/admin_helpers/mappers.py

"""
This module translates between stored rows (snake_case columns, numbers that
may arrive as strings, decimals or NULL) and the camelCase Pydantic entities
the API speaks.

Every mapper here is pure and total: a missing or malformed field becomes the
zero value for its type instead of an exception. `*_to_db` functions accept a
model or a plain dict and only emit the columns the payload actually carries,
which is what makes them usable for partial updates. `require_values` is the one
raising helper; services call it before an UPDATE that could clear a NOT NULL
column.
"""

import math
import re
from decimal import Decimal
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel

from ...models.teacher_model import TeacherProfile, TeacherStatus
from ...models.group_model import GroupProfile, GroupStatus
from ...models.student_model import StudentProfile, PaymentHistoryEntry, PaymentStatus, PaymentMethod
from ...models.finance_model import RevenueRecord, ExpenseRecord, ExpenseType

Payload = Union[BaseModel, Dict[str, Any]]

LOCALES = ("uz", "ru", "en")
UNASSIGNED = "Unassigned"


# --- Numeric coercion ---

def to_float(value: Any, default: float = 0.0) -> float:
    """Coerces `value` to a finite float, or returns `default`."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value) if isinstance(value, (int, float, Decimal)) else float(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def to_int(value: Any, default: int = 0) -> int:
    number = to_float(value, default=float(default))
    return int(number)


def parse_currency_value(value: Any) -> float:
    """
    Reads a price typed by staff ("1,500,000 so'm", "1 500 000", "12.50",
    "1.500,75") as a number. Never raises; anything unreadable is 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        return to_float(value)

    cleaned = re.sub(r"[^\d.,-]", "", str(value))
    if not re.search(r"\d", cleaned):
        return 0.0

    if "," in cleaned and "." in cleaned:
        # The rightmost separator is the decimal one.
        decimal_sep = "," if cleaned.rfind(",") > cleaned.rfind(".") else "."
        thousands_sep = "." if decimal_sep == "," else ","
        cleaned = cleaned.replace(thousands_sep, "").replace(decimal_sep, ".")
    else:
        for sep in (",", "."):
            if sep not in cleaned:
                continue
            parts = cleaned.split(sep)
            if len(parts) > 2 or len(parts[-1]) == 3:
                cleaned = cleaned.replace(sep, "")
            else:
                cleaned = cleaned.replace(sep, ".")
    return to_float(cleaned)


# --- Internal helpers ---

def _as_dict(payload: Payload) -> Dict[str, Any]:
    if isinstance(payload, BaseModel):
        return payload.model_dump(exclude_unset=True)
    return dict(payload)


def _choice(value: Any, enum_cls, default: str) -> str:
    allowed = {member.value for member in enum_cls}
    value = getattr(value, "value", value)
    return value if value in allowed else default


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _copy_fields(source: Dict[str, Any], mapping: Dict[str, str]) -> Dict[str, Any]:
    """Copies entity keys to column keys for the keys present in `source`."""
    return {column: source[key] for key, column in mapping.items() if key in source}


def require_values(row: Dict[str, Any], columns) -> Dict[str, Any]:
    """Raises ValueError when a partial update would clear any of the NOT NULL `columns`."""
    cleared = [column for column in columns if column in row and row[column] is None]
    if cleared:
        raise ValueError(f"Fields cannot be empty: {', '.join(cleared)}.")
    return row


# --- Teacher ---

def teacher_from_db(raw: Dict[str, Any]) -> TeacherProfile:
    return TeacherProfile(
        id=_text(raw.get("id")),
        fullName=_text(raw.get("name")),
        subject=_text(raw.get("specialty") or raw.get("specialty_uz")),
        experience=to_int(raw.get("experience")),
        phone=_text(raw.get("phone")),
        monthlySalary=to_float(raw.get("monthly_salary")),
        status=_choice(raw.get("status"), TeacherStatus, TeacherStatus.ACTIVE.value),
        photoUrl=raw.get("image_url") or None,
        bio=_text(raw.get("bio") or raw.get("bio_uz")),
        groups=[],
    )


def teacher_to_db(payload: Payload) -> Dict[str, Any]:
    data = _as_dict(payload)
    row = _copy_fields(data, {
        "id": "id",
        "fullName": "name",
        "experience": "experience",
        "phone": "phone",
        "monthlySalary": "monthly_salary",
        "status": "status",
    })
    # The admin form authors one subject and one bio; both are written to every locale.
    if "subject" in data:
        row["specialty"] = data["subject"]
        row.update({f"specialty_{locale}": data["subject"] for locale in LOCALES})
    if "bio" in data:
        bio = data["bio"] or ""
        row["bio"] = bio
        row.update({f"bio_{locale}": bio for locale in LOCALES})
    if "photoUrl" in data:
        row["image_url"] = data["photoUrl"] or None
    return row


# --- Group ---

def group_from_db(raw: Dict[str, Any], teacher_name: Optional[str] = None) -> GroupProfile:
    return GroupProfile(
        id=_text(raw.get("id")),
        name=_text(raw.get("name")),
        teacherId=_text(raw.get("teacher_id")),
        teacherName=teacher_name or UNASSIGNED,
        schedule=_text(raw.get("schedule")),
        room=_text(raw.get("room")),
        maxStudents=to_int(raw.get("max_students")),
        currentStudents=to_int(raw.get("current_students")),
        status=_choice(raw.get("status"), GroupStatus, GroupStatus.ACTIVE.value),
        attendanceRate=to_float(raw.get("attendance_rate")),
        monthlyRevenue=to_float(raw.get("monthly_revenue")),
    )


def group_to_db(payload: Payload) -> Dict[str, Any]:
    data = _as_dict(payload)
    row = _copy_fields(data, {
        "id": "id",
        "name": "name",
        "schedule": "schedule",
        "room": "room",
        "maxStudents": "max_students",
        "currentStudents": "current_students",
        "status": "status",
        "attendanceRate": "attendance_rate",
        "monthlyRevenue": "monthly_revenue",
    })
    if "teacherId" in data:
        row["teacher_id"] = data["teacherId"] or None
    return row


# --- Student & payment history ---

def payment_from_db(raw: Dict[str, Any]) -> PaymentHistoryEntry:
    return PaymentHistoryEntry(
        id=_text(raw.get("id")),
        studentId=_text(raw.get("student_id")),
        amount=to_float(raw.get("amount")),
        date=_text(raw.get("date")),
        status=_choice(raw.get("status"), PaymentStatus, PaymentStatus.PAID.value),
        method=_choice(raw.get("method"), PaymentMethod, PaymentMethod.CASH.value),
        note=raw.get("note") or None,
    )


def payment_to_db(payload: Payload) -> Dict[str, Any]:
    data = _as_dict(payload)
    row = _copy_fields(data, {
        "id": "id",
        "studentId": "student_id",
        "amount": "amount",
        "date": "date",
        "status": "status",
        "method": "method",
    })
    if "note" in data:
        row["note"] = data["note"] or None
    return row


def student_from_db(
    raw: Dict[str, Any],
    group: Optional[GroupProfile] = None,
    teacher_name: Optional[str] = None,
) -> StudentProfile:
    return StudentProfile(
        id=_text(raw.get("id")),
        fullName=_text(raw.get("full_name")),
        groupId=raw.get("group_id") or None,
        groupName=group.name if group else None,
        groupSchedule=group.schedule if group else None,
        teacherName=teacher_name or (group.teacherName if group else None),
        parentName=_text(raw.get("parent_name")),
        parentContact=_text(raw.get("parent_contact")),
        monthlyPayment=to_float(raw.get("monthly_payment")),
        paymentStatus=_choice(raw.get("payment_status"), PaymentStatus, PaymentStatus.UNPAID.value),
        photoUrl=raw.get("photo_url") or None,
        notes=raw.get("notes") or None,
        history=[],
    )


def student_to_db(payload: Payload) -> Dict[str, Any]:
    data = _as_dict(payload)
    row = _copy_fields(data, {
        "id": "id",
        "fullName": "full_name",
        "parentName": "parent_name",
        "parentContact": "parent_contact",
        "monthlyPayment": "monthly_payment",
        "paymentStatus": "payment_status",
    })
    for key, column in (("groupId", "group_id"), ("photoUrl", "photo_url"), ("notes", "notes")):
        if key in data:
            row[column] = data[key] or None
    return row


# --- Revenue & expenses ---

def revenue_from_db(raw: Dict[str, Any]) -> RevenueRecord:
    return RevenueRecord(
        id=_text(raw.get("id")),
        source=_text(raw.get("source")),
        amount=to_float(raw.get("amount")),
        month=_text(raw.get("month")),
        note=raw.get("note") or None,
    )


def revenue_to_db(payload: Payload) -> Dict[str, Any]:
    data = _as_dict(payload)
    row = _copy_fields(data, {"id": "id", "source": "source", "amount": "amount", "month": "month"})
    if "note" in data:
        row["note"] = data["note"] or None
    return row


def expense_from_db(raw: Dict[str, Any]) -> ExpenseRecord:
    return ExpenseRecord(
        id=_text(raw.get("id")),
        category=_text(raw.get("category")),
        amount=to_float(raw.get("amount")),
        month=_text(raw.get("month")),
        description=raw.get("description") or None,
        type=_choice(raw.get("type"), ExpenseType, ExpenseType.VARIABLE.value),
    )


def expense_to_db(payload: Payload) -> Dict[str, Any]:
    data = _as_dict(payload)
    row = _copy_fields(data, {"id": "id", "category": "category", "amount": "amount", "month": "month", "type": "type"})
    if "description" in data:
        row["description"] = data["description"] or None
    return row


# --- Locale lookup ---

def localized(record: Dict[str, Any], field: str, locale: str = "uz") -> str:
    """Returns `field_<locale>`, falling back to the Uzbek text and then the bare field."""
    for key in (f"{field}_{locale}", f"{field}_uz", field):
        value = record.get(key)
        if value:
            return str(value)
    return ""
