# /app/services/dashboard_service.py

"""
Builds the composite results behind the admin home screen.

Every builder here fans its independent reads out to worker threads and waits
for all of them, then hands the rows to the pure aggregators. Reads go through
the tolerant `safe_select` / `safe_count` helpers, so a failing or missing table
contributes an empty collection instead of failing the whole screen. The worst
case is an all-zero result, never an exception caused by data.
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

from ..core.logging_config import get_logger
from ..models.dashboard_model import (
    DashboardSnapshot,
    FinancialOverview,
    RecentActivity,
    RecentApplication,
    RecentCourse,
    SiteStats,
)
from .admin_helpers import course_financials, metrics
from .database_service import DatabaseService

logger = get_logger("dashboard")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _read(db: DatabaseService, table: str, **kwargs):
    return asyncio.to_thread(db.safe_select, table, **kwargs)


def _count(db: DatabaseService, table: str, filters=None):
    return asyncio.to_thread(db.safe_count, table, filters)


def _iso(value) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat() if isinstance(value, datetime) else str(value)


async def get_dashboard_snapshot(db: DatabaseService, now: Optional[datetime] = None) -> DashboardSnapshot:
    now = now or _utcnow()
    month = metrics.month_key(now)
    months = metrics.last_n_months(now)

    (
        teacher_count,
        student_count,
        group_count,
        teachers,
        students,
        groups,
        revenue_this_month,
        expenses_this_month,
        revenue_window,
        expenses_window,
    ) = await asyncio.gather(
        _count(db, "teachers"),
        _count(db, "students"),
        _count(db, "groups"),
        _read(db, "teachers", columns=["id", "name", "monthly_salary", "status"]),
        _read(db, "students", columns=["group_id", "monthly_payment", "payment_status"]),
        _read(db, "groups", order_by="name"),
        _read(db, "revenue", columns=["amount", "month"], filters={"month": month}),
        _read(db, "expenses", columns=["amount", "month"], filters={"month": month}),
        _read(db, "revenue", columns=["amount", "month"], filters={"month__in": months}),
        _read(db, "expenses", columns=["amount", "month"], filters={"month__in": months}),
    )

    figures = metrics.compute_monthly_figures(revenue_this_month, students, teachers, expenses_this_month, month)
    paid = sum(1 for s in students if s.get("payment_status") == "paid")
    unpaid = len(students) - paid
    revenue_series, expense_series, profit_series = metrics.build_trend_series(
        revenue_window, expenses_window, metrics.active_payroll(teachers), months
    )

    snapshot = DashboardSnapshot(
        teacherCount=teacher_count,
        studentCount=student_count,
        groupCount=group_count,
        monthlyRevenue=figures.monthlyRevenue,
        monthlyExpenses=figures.monthlyExpenses,
        netProfit=figures.netProfit,
        profitMargin=figures.profitMargin,
        paidStudents=paid,
        unpaidStudents=unpaid,
        revenueSeries=revenue_series,
        expenseSeries=expense_series,
        profitSeries=profit_series,
        studentStatusSeries=metrics.student_status_series(paid, unpaid),
        studentsPerGroup=metrics.students_per_group(groups),
        teachersPerGroup=metrics.groups_per_teacher(teachers, groups),
        capacityUsage=metrics.capacity_usage(groups),
        topGroups=metrics.build_top_groups(groups),
    )
    logger.debug("Built dashboard snapshot for %s", month)
    return snapshot


async def get_financial_overview(
    db: DatabaseService,
    time_range: str = course_financials.DEFAULT_RANGE,
    payout_rate: float = course_financials.DEFAULT_PAYOUT_RATE,
    now: Optional[datetime] = None,
) -> FinancialOverview:
    """Estimated course revenue from applications received in the window."""
    now = now or _utcnow()
    since = course_financials.get_range_start(time_range, now)

    courses, teachers, applications = await asyncio.gather(
        _read(db, "courses", columns=["id", "name_uz", "category", "price", "teacher_id"],
              filters={"is_published": True}),
        _read(db, "teachers", columns=["id", "name", "specialty_uz"]),
        _read(db, "applications", columns=["id", "course_id", "created_at"],
              filters={"created_at__gte": since}),
    )

    base = course_financials.build_financial_base(courses, teachers, applications, time_range, now)
    return course_financials.build_financial_overview(base, payout_rate)


async def get_site_stats(db: DatabaseService) -> SiteStats:
    courses, teachers, events, applications, achievements = await asyncio.gather(
        _count(db, "courses"),
        _count(db, "teachers"),
        _count(db, "events"),
        _count(db, "applications"),
        _count(db, "achievements"),
    )
    return SiteStats(
        courses=courses,
        teachers=teachers,
        events=events,
        applications=applications,
        achievements=achievements,
    )


async def get_recent_activity(db: DatabaseService, limit: int = 5) -> RecentActivity:
    applications, courses = await asyncio.gather(
        _read(db, "applications", order_by="created_at", descending=True, limit=limit),
        _read(db, "courses", columns=["id", "name_uz", "category", "created_at"],
              order_by="created_at", descending=True, limit=limit),
    )

    course_ids = [a["course_id"] for a in applications if a.get("course_id")]
    names = {}
    if course_ids:
        rows = await _read(db, "courses", columns=["id", "name_uz"], filters={"id__in": course_ids})
        names = {r["id"]: r.get("name_uz") for r in rows}

    return RecentActivity(
        applications=[
            RecentApplication(
                id=a["id"],
                fullName=a.get("full_name") or "",
                phone=a.get("phone") or "",
                createdAt=_iso(a.get("created_at")),
                courseName=names.get(a.get("course_id")),
            )
            for a in applications
        ],
        courses=[
            RecentCourse(id=c["id"], name=c.get("name_uz") or "", category=c.get("category") or "",
                         createdAt=_iso(c.get("created_at")))
            for c in courses
        ],
    )
