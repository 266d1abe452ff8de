# /app/models/content_model.py

"""
Payload contracts for the trilingual public-site content managed from the admin
area. Each resource has one model. It validates creates directly and updates
after the content service merges them onto the stored record.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _ContentPayload(BaseModel):
    model_config = ConfigDict(extra="forbid")


class CoursePayload(_ContentPayload):
    name_uz: str = Field(..., min_length=1)
    name_ru: Optional[str] = None
    name_en: Optional[str] = None
    description_uz: Optional[str] = None
    description_ru: Optional[str] = None
    description_en: Optional[str] = None
    category: Optional[str] = None
    price: Optional[str] = Field(default=None, examples=["1 500 000 so'm"])
    duration: Optional[str] = None
    teacher_id: Optional[str] = None
    image_url: Optional[str] = None
    is_published: bool = True
    featured: bool = False


class EventPayload(_ContentPayload):
    title_uz: str = Field(..., min_length=1)
    title_ru: Optional[str] = None
    title_en: Optional[str] = None
    description_uz: Optional[str] = None
    description_ru: Optional[str] = None
    description_en: Optional[str] = None
    date: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    featured: bool = False


class AchievementPayload(_ContentPayload):
    title_uz: str = Field(..., min_length=1)
    title_ru: Optional[str] = None
    title_en: Optional[str] = None
    description_uz: Optional[str] = None
    description_ru: Optional[str] = None
    description_en: Optional[str] = None
    year: Optional[int] = None
    image_url: Optional[str] = None


class TestimonialPayload(_ContentPayload):
    name: str = Field(..., min_length=1)
    text_uz: str = Field(..., min_length=1)
    text_ru: Optional[str] = None
    text_en: Optional[str] = None
    rating: int = Field(default=5, ge=1, le=5)


class CategoryPayload(_ContentPayload):
    slug: str = Field(..., min_length=1)
    name_uz: str = Field(..., min_length=1)
    name_ru: Optional[str] = None
    name_en: Optional[str] = None


class ScheduleEntryPayload(_ContentPayload):
    course_id: Optional[str] = None
    teacher_id: Optional[str] = None
    day_of_week: str = Field(..., min_length=1)
    start_time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    end_time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    room: Optional[str] = None


class ContentBlockPayload(_ContentPayload):
    key: str = Field(..., min_length=1, examples=["hero.title"])
    value_uz: Optional[str] = None
    value_ru: Optional[str] = None
    value_en: Optional[str] = None


class ApplicationPayload(_ContentPayload):
    """Staff-side edits to a registration (mostly its processing status)."""
    full_name: str = Field(..., min_length=2)
    age: Optional[str] = None
    phone: str = Field(..., min_length=5)
    course_id: Optional[str] = None
    status: str = "new"


class RegistrationRequest(BaseModel):
    """The public registration form."""
    fullName: str = Field(..., min_length=2)
    age: Optional[str] = None
    phone: str = Field(..., min_length=5)
    courseId: Optional[str] = None
