# /app/services/content_service.py

"""
Generic CRUD for the trilingual public-site content, plus the read-only views
the public site consumes.

Each content resource is described once in `RESOURCES`: the table it lives in,
the Pydantic model that validates it and its default ordering. Admin routes are
keyed by resource name, so adding a resource is a one-line change here.

Updates are merged onto the stored record and the merged result is validated
with the same model used for creation, so a partial update can never leave a
record that creation would have rejected.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from pydantic import BaseModel, ValidationError

from ..core.logging_config import get_logger
from ..models.content_model import (
    AchievementPayload,
    ApplicationPayload,
    CategoryPayload,
    ContentBlockPayload,
    CoursePayload,
    EventPayload,
    RegistrationRequest,
    ScheduleEntryPayload,
    TestimonialPayload,
)
from .admin_helpers.mappers import LOCALES, localized
from .database_service import DatabaseService

logger = get_logger("content")


@dataclass(frozen=True)
class ContentResource:
    table: str
    payload: Type[BaseModel]
    order_by: str = "created_at"
    descending: bool = True


RESOURCES: Dict[str, ContentResource] = {
    "courses": ContentResource("courses", CoursePayload),
    "events": ContentResource("events", EventPayload, order_by="date"),
    "achievements": ContentResource("achievements", AchievementPayload, order_by="year"),
    "testimonials": ContentResource("testimonials", TestimonialPayload),
    "categories": ContentResource("categories", CategoryPayload, order_by="slug", descending=False),
    "schedule": ContentResource("schedule_entries", ScheduleEntryPayload, order_by="day_of_week", descending=False),
    "content-blocks": ContentResource("content_blocks", ContentBlockPayload, order_by="key", descending=False),
    "applications": ContentResource("applications", ApplicationPayload),
}

# Text fields that exist in one column per locale, per table.
LOCALIZED_FIELDS: Dict[str, tuple] = {
    "courses": ("name", "description"),
    "events": ("title", "description"),
    "achievements": ("title", "description"),
    "testimonials": ("text",),
    "categories": ("name",),
    "content_blocks": ("value",),
}


def get_resource(name: str) -> ContentResource:
    resource = RESOURCES.get(name)
    if resource is None:
        raise KeyError(name)
    return resource


def _validate(resource: ContentResource, data: Dict[str, Any]) -> Dict[str, Any]:
    try:
        return resource.payload.model_validate(data).model_dump()
    except ValidationError as e:
        raise ValueError(str(e)) from e


def _writable(resource: ContentResource, row: Dict[str, Any]) -> Dict[str, Any]:
    fields = resource.payload.model_fields
    return {key: value for key, value in row.items() if key in fields}


# --- Admin CRUD ---

def list_records(name: str, db: DatabaseService) -> List[Dict[str, Any]]:
    resource = get_resource(name)
    return db.select_or_empty(resource.table, order_by=resource.order_by, descending=resource.descending)


def get_record(name: str, record_id: str, db: DatabaseService) -> Optional[Dict[str, Any]]:
    return db.get_by_id(get_resource(name).table, record_id)


def create_record(name: str, data: Dict[str, Any], db: DatabaseService) -> Dict[str, Any]:
    resource = get_resource(name)
    row = db.insert(resource.table, _validate(resource, data))
    logger.info("Created %s record %s", name, row["id"])
    return row


def update_record(name: str, record_id: str, data: Dict[str, Any], db: DatabaseService) -> Optional[Dict[str, Any]]:
    if not data:
        raise ValueError("No update data provided.")
    resource = get_resource(name)
    existing = db.get_by_id(resource.table, record_id)
    if existing is None:
        return None
    merged = {**_writable(resource, existing), **data}
    rows = db.update(resource.table, _validate(resource, merged), {"id": record_id})
    return rows[0] if rows else None


def delete_record(name: str, record_id: str, db: DatabaseService) -> bool:
    resource = get_resource(name)
    if resource.table == "courses":
        # Keep registrations and timetable slots; they just lose their course.
        db.update("applications", {"course_id": None}, {"course_id": record_id})
        db.update("schedule_entries", {"course_id": None}, {"course_id": record_id})
    deleted = db.delete(resource.table, {"id": record_id}) > 0
    if deleted:
        logger.info("Deleted %s record %s", name, record_id)
    return deleted


# --- Public site ---

def localize_record(table: str, record: Dict[str, Any], locale: str) -> Dict[str, Any]:
    """Adds the resolved text for `locale` under the bare field name (e.g. `name`)."""
    result = dict(record)
    for field in LOCALIZED_FIELDS.get(table, ()):
        result[field] = localized(record, field, locale)
    return result


def _check_locale(locale: str) -> str:
    return locale if locale in LOCALES else "uz"


def public_list(name: str, db: DatabaseService, locale: str = "uz") -> List[Dict[str, Any]]:
    resource = get_resource(name)
    filters = {"is_published": True} if resource.table == "courses" else None
    rows = db.select_or_empty(resource.table, filters=filters, order_by=resource.order_by, descending=resource.descending)
    locale = _check_locale(locale)
    return [localize_record(resource.table, row, locale) for row in rows]


def public_teachers(db: DatabaseService, locale: str = "uz") -> List[Dict[str, Any]]:
    locale = _check_locale(locale)
    rows = db.select_or_empty("teachers", filters={"status": "active"}, order_by="name")
    return [
        {
            "id": row["id"],
            "name": row.get("name") or "",
            "specialty": localized(row, "specialty", locale),
            "bio": localized(row, "bio", locale),
            "experience": row.get("experience") or 0,
            "imageUrl": row.get("image_url"),
        }
        for row in rows
    ]


def content_blocks(db: DatabaseService, locale: str = "uz") -> Dict[str, str]:
    locale = _check_locale(locale)
    return {row["key"]: localized(row, "value", locale) for row in db.select_or_empty("content_blocks")}


def register_application(request: RegistrationRequest, db: DatabaseService) -> Dict[str, Any]:
    if request.courseId and db.get_by_id("courses", request.courseId) is None:
        raise ValueError(f"Course with ID {request.courseId} not found")
    row = db.insert("applications", {
        "full_name": request.fullName,
        "age": request.age,
        "phone": request.phone,
        "course_id": request.courseId,
        "status": "new",
    })
    logger.info("Received application %s", row["id"])
    return row
