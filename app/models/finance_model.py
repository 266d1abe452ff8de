# /app/models/finance_model.py

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


class ExpenseType(str, Enum):
    FIXED = "fixed"
    VARIABLE = "variable"


class RevenueCreate(BaseModel):
    source: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    month: str = Field(..., pattern=MONTH_PATTERN, examples=["2025-03"])
    note: Optional[str] = None


class RevenueRecord(BaseModel):
    id: str
    source: str = ""
    amount: float = 0
    month: str = ""
    note: Optional[str] = None


class ExpenseCreate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    category: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    month: str = Field(..., pattern=MONTH_PATTERN, examples=["2025-03"])
    description: Optional[str] = None
    type: ExpenseType = Field(default=ExpenseType.VARIABLE)


class ExpenseRecord(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    id: str
    category: str = ""
    amount: float = 0
    month: str = ""
    description: Optional[str] = None
    type: ExpenseType = ExpenseType.VARIABLE


class FinanceBreakdown(BaseModel):
    """All-time totals; not scoped to a month."""
    teacherSalaries: float = 0
    operatingExpenses: float = 0
    totalExpenses: float = 0
    additionalExpenses: List[ExpenseRecord] = Field(default_factory=list)


class MonthAmount(BaseModel):
    month: str
    amount: float


class LedgerSummary(BaseModel):
    monthly: float = Field(default=0, description="Total for the current month.")
    total: float = Field(default=0, description="Total across every month on record.")
    fixed: float = Field(default=0, description="Total of fixed-type lines (expenses only).")
    byMonth: List[MonthAmount] = Field(default_factory=list)


class SalarySummary(BaseModel):
    active: float = 0
    inactive: float = 0
