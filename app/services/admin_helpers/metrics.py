# /app/services/admin_helpers/metrics.py

"""
Pure aggregation over collections that have already been fetched.

Functions whose names end in `_rows` (or that take `*_rows` arguments) work on
raw store rows, which is what the dashboard and the synchronizer read in bulk.
The `summarize_*` functions work on mapped entities and back the admin list
screens. Nothing here does I/O, and nothing here raises on dirty data.
"""

import math
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import pandas as pd

from ...models.dashboard_model import (
    ExpensePoint,
    MonthlyFigures,
    NamedValue,
    ProfitPoint,
    RankedGroup,
    RevenuePoint,
    StatusPoint,
    TeacherGroupCount,
    TopGroups,
)
from ...models.finance_model import FinanceBreakdown, LedgerSummary, MonthAmount, SalarySummary
from ...models.group_model import GroupMetrics, GroupProfile, GroupSummary
from ...models.student_model import GroupSeats, StudentProfile, StudentSummary
from ...models.teacher_model import TeacherProfile
from .mappers import expense_from_db, to_float, to_int

Row = Dict[str, Any]

TREND_MONTHS = 6
TOP_GROUPS_LIMIT = 5


# --- Small helpers ---

def month_key(moment: datetime) -> str:
    return moment.strftime("%Y-%m")


def last_n_months(now: datetime, count: int = TREND_MONTHS) -> List[str]:
    """The `count` most recent YYYY-MM keys, oldest first, ending at `now`'s month."""
    keys = []
    for offset in range(count - 1, -1, -1):
        total = now.year * 12 + (now.month - 1) - offset
        keys.append(f"{total // 12:04d}-{total % 12 + 1:02d}")
    return keys


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _sum_amounts(rows: Iterable[Row], column: str = "amount", where: Optional[Callable[[Row], bool]] = None) -> float:
    return sum(to_float(r.get(column)) for r in rows if where is None or where(r))


def _is_paid(row: Row) -> bool:
    return row.get("payment_status") == "paid"


# --- Group metrics ---

def compute_group_metrics(student_rows: Iterable[Row]) -> Dict[str, GroupMetrics]:
    """
    Enrollment count and paid monthly revenue per group id. Students without a
    group are ignored; groups without students are simply absent from the result.
    """
    df = pd.DataFrame(list(student_rows), columns=["group_id", "monthly_payment", "payment_status"])
    df = df[df["group_id"].notna() & (df["group_id"] != "")].copy()
    if df.empty:
        return {}

    df["monthly_payment"] = df["monthly_payment"].map(to_float)
    df["paid_amount"] = df["monthly_payment"].where(df["payment_status"] == "paid", 0.0)
    grouped = df.groupby("group_id").agg(
        current_students=("monthly_payment", "size"),
        monthly_revenue=("paid_amount", "sum"),
    )
    return {
        str(group_id): GroupMetrics(
            currentStudents=int(row["current_students"]),
            monthlyRevenue=float(row["monthly_revenue"]),
        )
        for group_id, row in grouped.iterrows()
    }


def capacity_percent(current_students: Any, max_students: Any) -> int:
    """Fill rate in percent, clamped to [0, 100] so over-enrollment reads as full."""
    capacity = to_int(max_students)
    if capacity <= 0:
        return 0
    return max(0, min(100, round_half_up(to_int(current_students) / capacity * 100)))


# --- Finance ---

def active_payroll(teacher_rows: Iterable[Row]) -> float:
    return _sum_amounts(teacher_rows, "monthly_salary", where=lambda r: r.get("status", "active") == "active")


def compute_finance_breakdown(teacher_rows: Iterable[Row], expense_rows: Sequence[Row]) -> FinanceBreakdown:
    teacher_salaries = active_payroll(teacher_rows)
    operating_expenses = _sum_amounts(expense_rows)
    return FinanceBreakdown(
        teacherSalaries=teacher_salaries,
        operatingExpenses=operating_expenses,
        totalExpenses=teacher_salaries + operating_expenses,
        additionalExpenses=[expense_from_db(r) for r in expense_rows],
    )


def calculate_profit_margin(monthly_revenue: float, net_profit: float) -> float:
    if monthly_revenue == 0:
        return 0.0
    return net_profit / monthly_revenue * 100


def paid_student_fees(student_rows: Iterable[Row]) -> float:
    # Recurring fees count towards every month, whatever the actual payment date.
    return _sum_amounts(student_rows, "monthly_payment", where=_is_paid)


def compute_monthly_figures(
    revenue_rows: Iterable[Row],
    student_rows: Iterable[Row],
    teacher_rows: Iterable[Row],
    expense_rows: Iterable[Row],
    month: str,
) -> MonthlyFigures:
    in_month = lambda r: r.get("month") == month  # noqa: E731
    monthly_revenue = _sum_amounts(revenue_rows, where=in_month) + paid_student_fees(student_rows)
    monthly_expenses = active_payroll(teacher_rows) + _sum_amounts(expense_rows, where=in_month)
    net_profit = monthly_revenue - monthly_expenses
    return MonthlyFigures(
        monthlyRevenue=monthly_revenue,
        monthlyExpenses=monthly_expenses,
        netProfit=net_profit,
        profitMargin=calculate_profit_margin(monthly_revenue, net_profit),
    )


def sum_by_month(rows: Iterable[Row]) -> Dict[str, float]:
    df = pd.DataFrame(list(rows), columns=["month", "amount"])
    if df.empty:
        return {}
    df["amount"] = df["amount"].map(to_float)
    return {str(month): float(total) for month, total in df.groupby("month")["amount"].sum().items()}


def build_trend_series(
    revenue_rows: Iterable[Row],
    expense_rows: Iterable[Row],
    payroll: float,
    months: Sequence[str],
) -> Tuple[List[RevenuePoint], List[ExpensePoint], List[ProfitPoint]]:
    """
    One point per month key, zero-filled. Today's payroll is added to every
    month, past ones included, because salaries are not historized.
    """
    revenue_by_month = sum_by_month(revenue_rows)
    expense_by_month = sum_by_month(expense_rows)

    revenue_series = [RevenuePoint(month=m, revenue=revenue_by_month.get(m, 0.0)) for m in months]
    expense_series = [ExpensePoint(month=m, expense=expense_by_month.get(m, 0.0) + payroll) for m in months]

    revenue_lookup = {p.month: p.revenue for p in revenue_series}
    expense_lookup = {p.month: p.expense for p in expense_series}
    profit_series = [
        ProfitPoint(month=m, profit=revenue_lookup.get(m, 0.0) - expense_lookup.get(m, 0.0))
        for m in months
    ]
    return revenue_series, expense_series, profit_series


def student_status_series(paid: int, unpaid: int) -> List[StatusPoint]:
    return [StatusPoint(status="paid", value=paid), StatusPoint(status="unpaid", value=unpaid)]


# --- Group breakdowns & rankings ---

def students_per_group(group_rows: Iterable[Row]) -> List[NamedValue]:
    return [NamedValue(name=str(g.get("name") or ""), value=to_int(g.get("current_students"))) for g in group_rows]


def groups_per_teacher(teacher_rows: Iterable[Row], group_rows: Sequence[Row]) -> List[TeacherGroupCount]:
    counts: Dict[Any, int] = {}
    for g in group_rows:
        counts[g.get("teacher_id")] = counts.get(g.get("teacher_id"), 0) + 1
    return [
        TeacherGroupCount(teacher=str(t.get("name") or ""), value=counts.get(t.get("id"), 0))
        for t in teacher_rows
    ]


def capacity_usage(group_rows: Iterable[Row]) -> List[NamedValue]:
    return [
        NamedValue(name=str(g.get("name") or ""), value=capacity_percent(g.get("current_students"), g.get("max_students")))
        for g in group_rows
    ]


def top_groups(group_rows: Sequence[Row], value_of: Callable[[Row], float], limit: int = TOP_GROUPS_LIMIT) -> List[RankedGroup]:
    # sorted() is stable, so ties keep their original order.
    ranked = sorted(group_rows, key=value_of, reverse=True)[:limit]
    return [RankedGroup(id=str(g.get("id")), name=str(g.get("name") or ""), value=value_of(g)) for g in ranked]


def build_top_groups(group_rows: Sequence[Row], limit: int = TOP_GROUPS_LIMIT) -> TopGroups:
    return TopGroups(
        byStudents=top_groups(group_rows, lambda g: to_int(g.get("current_students")), limit),
        byRevenue=top_groups(group_rows, lambda g: to_float(g.get("monthly_revenue")), limit),
        byAttendance=top_groups(group_rows, lambda g: to_float(g.get("attendance_rate")), limit),
    )


# --- Admin list screen summaries ---

def summarize_ledger(records: Sequence[Any], month: str) -> LedgerSummary:
    """Totals for the revenue and expense screens. `fixed` only applies to expenses."""
    by_month = sum_by_month({"month": r.month, "amount": r.amount} for r in records)
    return LedgerSummary(
        monthly=sum(r.amount for r in records if r.month == month),
        total=sum(r.amount for r in records),
        fixed=sum(r.amount for r in records if getattr(r, "type", None) == "fixed"),
        byMonth=[MonthAmount(month=m, amount=by_month[m]) for m in sorted(by_month)],
    )


def summarize_salaries(teachers: Iterable[TeacherProfile]) -> SalarySummary:
    summary = SalarySummary()
    for teacher in teachers:
        if teacher.status == "active":
            summary.active += teacher.monthlySalary
        else:
            summary.inactive += teacher.monthlySalary
    return summary


def summarize_groups(groups: Sequence[GroupProfile]) -> GroupSummary:
    if not groups:
        return GroupSummary()
    active = sum(1 for g in groups if g.status == "active")
    fill = sum(capacity_percent(g.currentStudents, g.maxStudents) for g in groups)
    return GroupSummary(
        total=len(groups),
        active=active,
        closed=len(groups) - active,
        avgCapacity=round_half_up(fill / len(groups)),
        revenue=sum(g.monthlyRevenue for g in groups),
    )


def summarize_students(students: Sequence[StudentProfile], groups: Iterable[GroupProfile]) -> StudentSummary:
    paid = [s for s in students if s.paymentStatus == "paid"]
    return StudentSummary(
        total=len(students),
        paid=len(paid),
        unpaid=len(students) - len(paid),
        monthlyRevenue=sum(s.monthlyPayment for s in paid),
        perGroup=[
            GroupSeats(id=g.id, name=g.name, remaining=max(g.maxStudents - g.currentStudents, 0))
            for g in groups
        ],
    )
