# /app/models/student_model.py

# --- Core Imports ---
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PaymentStatus(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"


# --- Payment History ---

class PaymentCreate(BaseModel):
    """A payment to record against a student. Entries are immutable once stored."""
    model_config = ConfigDict(use_enum_values=True)

    amount: float = Field(..., ge=0)
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}", examples=["2025-03-01"])
    status: PaymentStatus = Field(default=PaymentStatus.PAID)
    method: PaymentMethod = Field(default=PaymentMethod.CASH)
    note: Optional[str] = None


class PaymentHistoryEntry(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: str
    studentId: str
    amount: float = 0
    date: str = ""
    status: PaymentStatus = PaymentStatus.PAID
    method: PaymentMethod = PaymentMethod.CASH
    note: Optional[str] = None


# --- Students ---

class StudentPayload(BaseModel):
    """
    The model used for creating a new student. Group name, schedule and teacher
    name are resolved at read time and are never part of the payload.
    """
    model_config = ConfigDict(use_enum_values=True)

    fullName: str = Field(..., min_length=2, description="The full name of the student.")
    groupId: Optional[str] = Field(default=None, description="Null for an unassigned student.")
    parentName: str = Field(default="")
    parentContact: str = Field(default="")
    monthlyPayment: float = Field(default=0, ge=0)
    paymentStatus: PaymentStatus = Field(default=PaymentStatus.UNPAID)
    photoUrl: Optional[str] = None
    notes: Optional[str] = None


class StudentUpdate(BaseModel):
    """
    The model for updating a student. All fields are optional to allow for
    partial updates.
    """
    model_config = ConfigDict(use_enum_values=True)

    fullName: Optional[str] = Field(default=None, min_length=2)
    groupId: Optional[str] = None
    parentName: Optional[str] = None
    parentContact: Optional[str] = None
    monthlyPayment: Optional[float] = Field(default=None, ge=0)
    paymentStatus: Optional[PaymentStatus] = None
    photoUrl: Optional[str] = None
    notes: Optional[str] = None


class StudentProfile(BaseModel):
    """The full representation of a student as returned by the API."""
    model_config = ConfigDict(use_enum_values=True)

    id: str
    fullName: str
    groupId: Optional[str] = None
    groupName: Optional[str] = None
    groupSchedule: Optional[str] = None
    teacherName: Optional[str] = None
    parentName: str = ""
    parentContact: str = ""
    monthlyPayment: float = 0
    paymentStatus: PaymentStatus = PaymentStatus.UNPAID
    photoUrl: Optional[str] = None
    notes: Optional[str] = None
    history: List[PaymentHistoryEntry] = Field(default_factory=list, description="Most recent first.")


class GroupSeats(BaseModel):
    id: str
    name: str
    remaining: int


class StudentSummary(BaseModel):
    total: int = 0
    paid: int = 0
    unpaid: int = 0
    monthlyRevenue: float = 0
    perGroup: List[GroupSeats] = Field(default_factory=list)
