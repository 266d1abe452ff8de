# /app/models/group_model.py

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class GroupStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"


class GroupPayload(BaseModel):
    """
    The admin form payload for a group. `currentStudents` and `monthlyRevenue`
    are not part of it: they are recomputed from student data, never typed in.
    """
    model_config = ConfigDict(use_enum_values=True)

    name: str = Field(..., min_length=1)
    teacherId: Optional[str] = Field(default=None)
    schedule: str = Field(default="", examples=["Mon/Wed/Fri 14:00"])
    room: str = Field(default="")
    maxStudents: int = Field(default=0, ge=0)
    status: GroupStatus = Field(default=GroupStatus.ACTIVE)
    attendanceRate: float = Field(default=0, ge=0, le=100)


class GroupUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    name: Optional[str] = Field(default=None, min_length=1)
    teacherId: Optional[str] = None
    schedule: Optional[str] = None
    room: Optional[str] = None
    maxStudents: Optional[int] = Field(default=None, ge=0)
    status: Optional[GroupStatus] = None
    attendanceRate: Optional[float] = Field(default=None, ge=0, le=100)


class GroupProfile(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: str
    name: str
    teacherId: str = ""
    teacherName: str = "Unassigned"
    schedule: str = ""
    room: str = ""
    maxStudents: int = 0
    currentStudents: int = 0
    status: GroupStatus = GroupStatus.ACTIVE
    attendanceRate: float = 0
    monthlyRevenue: float = 0


class GroupMetrics(BaseModel):
    """The two denormalized values the synchronizer writes back onto a group."""
    currentStudents: int = 0
    monthlyRevenue: float = 0


class GroupSummary(BaseModel):
    total: int = 0
    active: int = 0
    closed: int = 0
    avgCapacity: int = Field(default=0, description="Average fill rate across groups, in percent.")
    revenue: float = 0
