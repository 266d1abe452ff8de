# /app/db/models/academy_models.py

"""
This module defines the SQLAlchemy tables for the operational side of the
academy: teachers, the groups they lead, the students enrolled in those groups
and each student's payment history.

Money columns are returned as plain floats. `groups.current_students` and
`groups.monthly_revenue` are denormalized and are only ever written by the
group metrics synchronizer.
"""

from sqlalchemy import Column, String, Integer, Float, Numeric, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base, new_id

MONEY = Numeric(14, 2, asdecimal=False)


class Teacher(Base):
    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String, nullable=False, index=True)

    # Trilingual public-site fields. The admin form only authors one value.
    specialty = Column(String, nullable=True)
    specialty_uz = Column(String, nullable=True)
    specialty_ru = Column(String, nullable=True)
    specialty_en = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    bio_uz = Column(Text, nullable=True)
    bio_ru = Column(Text, nullable=True)
    bio_en = Column(Text, nullable=True)

    experience = Column(Integer, nullable=True, default=0)
    phone = Column(String, nullable=True)
    monthly_salary = Column(MONEY, nullable=True, default=0)
    status = Column(String, nullable=False, default="active", index=True)
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    groups = relationship("Group", back_populates="teacher")


class Group(Base):
    id = Column(String, primary_key=True, index=True, default=new_id)
    name = Column(String, nullable=False)

    # Nullable: deleting a teacher blanks this reference instead of cascading.
    teacher_id = Column(String, ForeignKey("teachers.id"), nullable=True, index=True)
    schedule = Column(String, nullable=True)
    room = Column(String, nullable=True)
    max_students = Column(Integer, nullable=False, default=0)
    current_students = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False, default="active")
    attendance_rate = Column(Float, nullable=True, default=0)
    monthly_revenue = Column(MONEY, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    teacher = relationship("Teacher", back_populates="groups")
    students = relationship("Student", back_populates="group")


class Student(Base):
    id = Column(String, primary_key=True, index=True, default=new_id)
    full_name = Column(String, nullable=False, index=True)

    # Nullable: an unassigned student has no group.
    group_id = Column(String, ForeignKey("groups.id"), nullable=True, index=True)
    parent_name = Column(String, nullable=True)
    parent_contact = Column(String, nullable=True)
    monthly_payment = Column(MONEY, nullable=False, default=0)
    payment_status = Column(String, nullable=False, default="unpaid", index=True)
    photo_url = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    group = relationship("Group", back_populates="students")
    payments = relationship("PaymentHistory", back_populates="student", cascade="all, delete-orphan")


class PaymentHistory(Base):
    """An immutable ledger line, owned by exactly one student."""
    __tablename__ = "payment_history"

    id = Column(String, primary_key=True, index=True, default=new_id)
    student_id = Column(String, ForeignKey("students.id"), nullable=False, index=True)
    amount = Column(MONEY, nullable=False, default=0)
    date = Column(String, nullable=False)
    status = Column(String, nullable=False)
    method = Column(String, nullable=False, default="cash")
    note = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    student = relationship("Student", back_populates="payments")
