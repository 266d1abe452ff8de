# /app/models/dashboard_model.py

# --- Core Imports ---
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

TimeRange = Literal["7d", "30d", "90d", "12m"]
TeacherPace = Literal["ahead", "ontime", "delayed"]


# --- Snapshot building blocks ---

class RevenuePoint(BaseModel):
    month: str
    revenue: float = 0


class ExpensePoint(BaseModel):
    month: str
    expense: float = 0


class ProfitPoint(BaseModel):
    month: str
    profit: float = 0


class StatusPoint(BaseModel):
    status: Literal["paid", "unpaid"]
    value: int = 0


class NamedValue(BaseModel):
    name: str
    value: float = 0


class TeacherGroupCount(BaseModel):
    teacher: str
    value: int = 0


class RankedGroup(BaseModel):
    id: str
    name: str
    value: float = 0


class TopGroups(BaseModel):
    byStudents: List[RankedGroup] = Field(default_factory=list)
    byRevenue: List[RankedGroup] = Field(default_factory=list)
    byAttendance: List[RankedGroup] = Field(default_factory=list)


class DashboardSnapshot(BaseModel):
    """
    Defines the data contract for the admin dashboard. Every field has a zero
    default so that a snapshot built from unavailable data is still complete.
    """

    teacherCount: int = 0
    studentCount: int = 0
    groupCount: int = 0
    monthlyRevenue: float = Field(default=0, description="Ledger revenue this month plus paid student fees.")
    monthlyExpenses: float = Field(default=0, description="Active payroll plus ledger expenses this month.")
    netProfit: float = 0
    profitMargin: float = Field(default=0, description="Percent of revenue; 0 when revenue is 0.")
    paidStudents: int = 0
    unpaidStudents: int = 0
    revenueSeries: List[RevenuePoint] = Field(default_factory=list)
    expenseSeries: List[ExpensePoint] = Field(default_factory=list)
    profitSeries: List[ProfitPoint] = Field(default_factory=list)
    studentStatusSeries: List[StatusPoint] = Field(default_factory=list)
    studentsPerGroup: List[NamedValue] = Field(default_factory=list)
    teachersPerGroup: List[TeacherGroupCount] = Field(default_factory=list)
    capacityUsage: List[NamedValue] = Field(default_factory=list)
    topGroups: TopGroups = Field(default_factory=TopGroups)


# --- Course / teacher financial overview ---

class TrendPoint(BaseModel):
    key: str
    label: str
    revenue: float = 0
    enrollment: int = 0


class CourseFinancial(BaseModel):
    id: str
    name: str = ""
    category: str = ""
    teacherId: Optional[str] = None
    teacherName: Optional[str] = None
    teacherSpecialty: Optional[str] = None
    revenue: float = 0
    enrollment: int = 0


class TeacherFinancial(BaseModel):
    id: str
    name: Optional[str] = None
    specialty: Optional[str] = None
    totalRevenue: float = 0
    payout: float = 0
    courses: int = 0
    status: TeacherPace = "ontime"


class FinancialBase(BaseModel):
    """Range-dependent figures; the payout rate is applied on top of this."""
    courseFinancials: List[CourseFinancial] = Field(default_factory=list)
    trendPoints: List[TrendPoint] = Field(default_factory=list)
    totalRevenue: float = 0
    totalEnrollments: int = 0


class FinancialOverview(BaseModel):
    totalRevenue: float = 0
    avgTicket: float = 0
    totalEnrollments: int = 0
    outstandingPayouts: float = 0
    pipelineGrowth: float = 0
    revenueTrend: List[TrendPoint] = Field(default_factory=list)
    topCourses: List[CourseFinancial] = Field(default_factory=list)
    teacherSummaries: List[TeacherFinancial] = Field(default_factory=list)


# --- Home page cards ---

class SiteStats(BaseModel):
    courses: int = 0
    teachers: int = 0
    events: int = 0
    applications: int = 0
    achievements: int = 0


class RecentApplication(BaseModel):
    id: str
    fullName: str
    phone: str = ""
    createdAt: Optional[str] = None
    courseName: Optional[str] = None


class RecentCourse(BaseModel):
    id: str
    name: str
    category: str = ""
    createdAt: Optional[str] = None


class RecentActivity(BaseModel):
    applications: List[RecentApplication] = Field(default_factory=list)
    courses: List[RecentCourse] = Field(default_factory=list)


class MonthlyFigures(BaseModel):
    monthlyRevenue: float = 0
    monthlyExpenses: float = 0
    netProfit: float = 0
    profitMargin: float = 0
