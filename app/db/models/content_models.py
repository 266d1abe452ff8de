# /app/db/models/content_models.py

"""
Public-site content. Every text field is stored once per locale (uz/ru/en).
These are plain records managed from the admin area; none of them carries a
computed field.
"""

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.sql import func

from ..base_class import Base, new_id


class Course(Base):
    id = Column(String, primary_key=True, index=True, default=new_id)
    name_uz = Column(String, nullable=False)
    name_ru = Column(String, nullable=True)
    name_en = Column(String, nullable=True)
    description_uz = Column(Text, nullable=True)
    description_ru = Column(Text, nullable=True)
    description_en = Column(Text, nullable=True)
    category = Column(String, nullable=True, index=True)
    # Free text as typed by staff, e.g. "1 500 000 so'm".
    price = Column(String, nullable=True)
    duration = Column(String, nullable=True)
    teacher_id = Column(String, ForeignKey("teachers.id"), nullable=True, index=True)
    image_url = Column(String, nullable=True)
    is_published = Column(Boolean, nullable=False, default=True)
    featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Application(Base):
    """A registration submitted from the public site."""
    id = Column(String, primary_key=True, index=True, default=new_id)
    full_name = Column(String, nullable=False)
    age = Column(String, nullable=True)
    phone = Column(String, nullable=False)
    course_id = Column(String, ForeignKey("courses.id"), nullable=True, index=True)
    status = Column(String, nullable=False, default="new")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)


class Event(Base):
    id = Column(String, primary_key=True, index=True, default=new_id)
    title_uz = Column(String, nullable=False)
    title_ru = Column(String, nullable=True)
    title_en = Column(String, nullable=True)
    description_uz = Column(Text, nullable=True)
    description_ru = Column(Text, nullable=True)
    description_en = Column(Text, nullable=True)
    date = Column(String, nullable=True)
    location = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Achievement(Base):
    id = Column(String, primary_key=True, index=True, default=new_id)
    title_uz = Column(String, nullable=False)
    title_ru = Column(String, nullable=True)
    title_en = Column(String, nullable=True)
    description_uz = Column(Text, nullable=True)
    description_ru = Column(Text, nullable=True)
    description_en = Column(Text, nullable=True)
    year = Column(Integer, nullable=True)
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Testimonial(Base):
    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String, nullable=False)
    text_uz = Column(Text, nullable=False)
    text_ru = Column(Text, nullable=True)
    text_en = Column(Text, nullable=True)
    rating = Column(Integer, nullable=True, default=5)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Category(Base):
    __tablename__ = "categories"

    id = Column(String, primary_key=True, index=True, default=new_id)
    slug = Column(String, unique=True, nullable=False)
    name_uz = Column(String, nullable=False)
    name_ru = Column(String, nullable=True)
    name_en = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class ScheduleEntry(Base):
    __tablename__ = "schedule_entries"

    id = Column(String, primary_key=True, index=True, default=new_id)
    course_id = Column(String, ForeignKey("courses.id"), nullable=True, index=True)
    teacher_id = Column(String, ForeignKey("teachers.id"), nullable=True)
    day_of_week = Column(String, nullable=False)
    start_time = Column(String, nullable=False)
    end_time = Column(String, nullable=False)
    room = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class ContentBlock(Base):
    """A keyed piece of site copy, e.g. `hero.title`, stored per locale."""
    id = Column(String, primary_key=True, index=True, default=new_id)
    key = Column(String, unique=True, index=True, nullable=False)
    value_uz = Column(Text, nullable=True)
    value_ru = Column(Text, nullable=True)
    value_en = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class Admin(Base):
    id = Column(String, primary_key=True, index=True, default=new_id)
    login = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    full_name = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
