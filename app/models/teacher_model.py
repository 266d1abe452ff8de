# /app/models/teacher_model.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TeacherStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class TeacherGroupRef(BaseModel):
    """A lightweight reference to one of the groups a teacher leads."""
    id: str
    name: str
    schedule: str = ""


class TeacherPayload(BaseModel):
    """The admin form payload for creating a teacher."""
    model_config = ConfigDict(use_enum_values=True)

    fullName: str = Field(..., min_length=2, description="The teacher's full name.")
    subject: str = Field(default="", description="Subject taught; written to every locale.")
    experience: int = Field(default=0, ge=0, description="Years of experience.")
    phone: str = Field(default="")
    monthlySalary: float = Field(default=0, ge=0, description="Monthly salary in the base currency.", examples=[4000000])
    status: TeacherStatus = Field(default=TeacherStatus.ACTIVE)
    photoUrl: Optional[str] = Field(default=None)
    bio: str = Field(default="")


class TeacherUpdate(BaseModel):
    """All fields optional to allow partial updates (e.g. salary or status only)."""
    model_config = ConfigDict(use_enum_values=True)

    fullName: Optional[str] = Field(default=None, min_length=2)
    subject: Optional[str] = None
    experience: Optional[int] = Field(default=None, ge=0)
    phone: Optional[str] = None
    monthlySalary: Optional[float] = Field(default=None, ge=0)
    status: Optional[TeacherStatus] = None
    photoUrl: Optional[str] = None
    bio: Optional[str] = None


class TeacherProfile(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: str
    fullName: str
    subject: str = ""
    experience: int = 0
    phone: str = ""
    monthlySalary: float = 0
    status: TeacherStatus = TeacherStatus.ACTIVE
    photoUrl: Optional[str] = None
    bio: str = ""
    groups: List[TeacherGroupRef] = Field(default_factory=list)
