# /app/services/admin_helpers/course_financials.py

"""
Course and teacher revenue estimates for the dashboard's financial overview.

Revenue here is an estimate: every Application received inside the selected
window counts as one enrollment at the course's listed price. The window is
split into day, ISO week or month buckets, all generated up front so that quiet
periods show up as zeros.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd

from ...models.dashboard_model import (
    CourseFinancial,
    FinancialBase,
    FinancialOverview,
    TeacherFinancial,
    TimeRange,
    TrendPoint,
)
from .mappers import parse_currency_value

Row = Dict[str, Any]

DEFAULT_RANGE: TimeRange = "30d"
DEFAULT_PAYOUT_RATE = 0.35
TOP_COURSES_LIMIT = 5
TOP_TEACHERS_LIMIT = 6

AHEAD_FACTOR = 1.2
DELAYED_FACTOR = 0.6

_DAY_WINDOWS = {"7d": 7, "30d": 30, "90d": 90}


def _start_of_month(day: date, months_back: int = 0) -> date:
    total = day.year * 12 + (day.month - 1) - months_back
    return date(total // 12, total % 12 + 1, 1)


def get_range_start(time_range: str, now: datetime) -> datetime:
    """First instant (UTC midnight) covered by the window ending today."""
    today = now.date()
    if time_range == "12m":
        start = _start_of_month(today, 11)
    else:
        start = today - timedelta(days=_DAY_WINDOWS.get(time_range, _DAY_WINDOWS[DEFAULT_RANGE]) - 1)
    return datetime(start.year, start.month, start.day, tzinfo=timezone.utc)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        moment = value
    else:
        try:
            moment = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


# --- Buckets ---

def _week_key(day: date) -> str:
    iso_year, week, _ = day.isocalendar()
    return f"{iso_year}-W{week:02d}"


def _bucket_key(time_range: str, day: date) -> str:
    if time_range == "12m":
        return day.strftime("%Y-%m")
    if time_range == "90d":
        return _week_key(day)
    return day.isoformat()


def _empty_buckets(time_range: str, start: date, end: date) -> Dict[str, TrendPoint]:
    buckets: Dict[str, TrendPoint] = {}
    if time_range == "12m":
        cursor = start.replace(day=1)
        while cursor <= end:
            key = _bucket_key(time_range, cursor)
            buckets[key] = TrendPoint(key=key, label=cursor.strftime("%b %y"))
            cursor = _start_of_month(cursor, -1)
    elif time_range == "90d":
        # Weeks start on Monday; the first bucket may begin before the window does.
        cursor = start - timedelta(days=start.weekday())
        while cursor <= end:
            key = _bucket_key(time_range, cursor)
            buckets[key] = TrendPoint(key=key, label=f"Week {cursor.isocalendar()[1]}")
            cursor += timedelta(days=7)
    else:
        cursor = start
        while cursor <= end:
            key = _bucket_key(time_range, cursor)
            buckets[key] = TrendPoint(key=key, label=cursor.strftime("%d %b"))
            cursor += timedelta(days=1)
    return buckets


def create_trend_points(
    time_range: str,
    applications: Iterable[Row],
    price_map: Dict[str, float],
    now: datetime,
) -> List[TrendPoint]:
    """
    Folds applications into the pre-generated buckets of the window. Applications
    without a course, without a readable timestamp, or outside the window are skipped.
    """
    if time_range not in ("7d", "30d", "90d", "12m"):
        time_range = DEFAULT_RANGE
    start = get_range_start(time_range, now)
    buckets = _empty_buckets(time_range, start.date(), now.astimezone(timezone.utc).date())

    for application in applications:
        course_id = application.get("course_id")
        created_at = _parse_timestamp(application.get("created_at"))
        if not course_id or created_at is None:
            continue
        bucket = buckets.get(_bucket_key(time_range, created_at.date()))
        if bucket is None:
            continue
        bucket.enrollment += 1
        bucket.revenue += price_map.get(course_id, 0.0)
    return list(buckets.values())


# --- Course & teacher figures ---

def count_enrollments(applications: Iterable[Row]) -> Dict[str, int]:
    df = pd.DataFrame(list(applications), columns=["course_id", "created_at"])
    df = df[df["course_id"].notna() & (df["course_id"] != "") & df["created_at"].notna()]
    if df.empty:
        return {}
    return {str(course_id): int(n) for course_id, n in df.groupby("course_id").size().items()}


def build_course_financials(
    courses: Sequence[Row],
    teachers: Iterable[Row],
    applications: Iterable[Row],
) -> List[CourseFinancial]:
    teacher_map = {t.get("id"): t for t in teachers}
    enrollments = count_enrollments(applications)

    financials = []
    for course in courses:
        course_id = str(course.get("id"))
        enrollment = enrollments.get(course_id, 0)
        teacher = teacher_map.get(course.get("teacher_id")) if course.get("teacher_id") else None
        financials.append(CourseFinancial(
            id=course_id,
            name=str(course.get("name_uz") or course.get("name") or ""),
            category=str(course.get("category") or ""),
            teacherId=course.get("teacher_id") or None,
            teacherName=teacher.get("name") if teacher else None,
            teacherSpecialty=(teacher.get("specialty_uz") or teacher.get("specialty")) if teacher else None,
            revenue=enrollment * parse_currency_value(course.get("price")),
            enrollment=enrollment,
        ))
    return financials


def build_financial_base(
    courses: Sequence[Row],
    teachers: Iterable[Row],
    applications: Sequence[Row],
    time_range: str,
    now: datetime,
) -> FinancialBase:
    price_map = {str(c.get("id")): parse_currency_value(c.get("price")) for c in courses}
    course_financials = build_course_financials(courses, teachers, applications)
    return FinancialBase(
        courseFinancials=course_financials,
        trendPoints=create_trend_points(time_range, applications, price_map, now),
        totalRevenue=sum(c.revenue for c in course_financials),
        totalEnrollments=sum(c.enrollment for c in course_financials),
    )


def determine_teacher_status(revenue: float, total_revenue: float, teacher_count: int) -> str:
    if not teacher_count or total_revenue == 0:
        return "ontime"
    average_share = total_revenue / teacher_count
    if revenue >= average_share * AHEAD_FACTOR:
        return "ahead"
    if revenue <= average_share * DELAYED_FACTOR:
        return "delayed"
    return "ontime"


def summarize_teachers(base: FinancialBase, payout_rate: float) -> List[TeacherFinancial]:
    aggregate: Dict[str, Dict[str, Any]] = {}
    for course in base.courseFinancials:
        if not course.teacherId:
            continue
        entry = aggregate.setdefault(course.teacherId, {
            "name": course.teacherName, "specialty": course.teacherSpecialty, "revenue": 0.0, "courses": 0,
        })
        entry["name"] = course.teacherName or entry["name"]
        entry["specialty"] = course.teacherSpecialty or entry["specialty"]
        entry["revenue"] += course.revenue
        entry["courses"] += 1

    summaries = [
        TeacherFinancial(
            id=teacher_id,
            name=data["name"],
            specialty=data["specialty"],
            totalRevenue=data["revenue"],
            payout=data["revenue"] * payout_rate,
            courses=data["courses"],
            status=determine_teacher_status(data["revenue"], base.totalRevenue, len(aggregate)),
        )
        for teacher_id, data in aggregate.items()
    ]
    return sorted(summaries, key=lambda t: t.totalRevenue, reverse=True)[:TOP_TEACHERS_LIMIT]


def pipeline_growth(points: Sequence[TrendPoint]) -> float:
    """Percent change of the second half of the trend over the first half."""
    midpoint = len(points) // 2
    first_half = sum(p.revenue for p in points[:midpoint])
    second_half = sum(p.revenue for p in points[midpoint:])
    if first_half == 0:
        return 0.0
    return (second_half - first_half) / first_half * 100


def build_financial_overview(base: Optional[FinancialBase], payout_rate: float = DEFAULT_PAYOUT_RATE) -> FinancialOverview:
    if base is None:
        return FinancialOverview()

    teacher_summaries = summarize_teachers(base, payout_rate)
    return FinancialOverview(
        totalRevenue=base.totalRevenue,
        avgTicket=base.totalRevenue / base.totalEnrollments if base.totalEnrollments else 0.0,
        totalEnrollments=base.totalEnrollments,
        outstandingPayouts=sum(t.payout for t in teacher_summaries if t.status == "delayed"),
        pipelineGrowth=pipeline_growth(base.trendPoints),
        revenueTrend=base.trendPoints,
        topCourses=sorted(base.courseFinancials, key=lambda c: c.revenue, reverse=True)[:TOP_COURSES_LIMIT],
        teacherSummaries=teacher_summaries,
    )
