# /tests/test_metrics.py

from datetime import datetime, timezone

import pytest

from app.models.group_model import GroupProfile
from app.models.student_model import StudentProfile
from app.services.admin_helpers import mappers, metrics


@pytest.fixture
def group_students():
    """Three students of one group; the 300000 one has not paid."""
    return [
        {"group_id": "g1", "monthly_payment": 500000, "payment_status": "paid"},
        {"group_id": "g1", "monthly_payment": "300000", "payment_status": "unpaid"},
        {"group_id": "g1", "monthly_payment": 700000, "payment_status": "paid"},
    ]


# --- Group metrics ---

def test_group_metrics_count_everyone_but_only_paid_revenue(group_students):
    """
    GIVEN: Three students in one group, one of them unpaid.
    WHEN: Group metrics are computed.
    THEN: All three are enrolled but only the paid fees are revenue.
    """
    result = metrics.compute_group_metrics(group_students)

    assert result["g1"].currentStudents == 3
    assert result["g1"].monthlyRevenue == 1200000


def test_group_metrics_ignore_unassigned_students(group_students):
    students = group_students + [
        {"group_id": None, "monthly_payment": 900000, "payment_status": "paid"},
        {"group_id": "", "monthly_payment": 900000, "payment_status": "paid"},
        {"group_id": "g2", "monthly_payment": None, "payment_status": "paid"},
    ]
    result = metrics.compute_group_metrics(students)

    assert set(result) == {"g1", "g2"}
    assert result["g2"].currentStudents == 1
    assert result["g2"].monthlyRevenue == 0


def test_group_metrics_of_no_students_is_empty():
    assert metrics.compute_group_metrics([]) == {}


# --- Monthly figures ---

def test_monthly_figures_with_no_revenue_have_zero_margin():
    figures = metrics.compute_monthly_figures(
        revenue_rows=[],
        student_rows=[],
        teacher_rows=[],
        expense_rows=[{"amount": 200000, "month": "2025-03"}],
        month="2025-03",
    )
    assert figures.monthlyRevenue == 0
    assert figures.monthlyExpenses == 200000
    assert figures.netProfit == -200000
    assert figures.profitMargin == 0


def test_monthly_figures_combine_ledger_fees_and_payroll():
    figures = metrics.compute_monthly_figures(
        revenue_rows=[{"amount": 1000000, "month": "2025-03"}, {"amount": 999, "month": "2025-02"}],
        student_rows=[
            {"monthly_payment": 500000, "payment_status": "paid"},
            {"monthly_payment": 400000, "payment_status": "unpaid"},
        ],
        teacher_rows=[
            {"monthly_salary": 600000, "status": "active"},
            {"monthly_salary": 5000000, "status": "inactive"},
        ],
        expense_rows=[{"amount": 150000, "month": "2025-03"}],
        month="2025-03",
    )
    assert figures.monthlyRevenue == 1500000
    assert figures.monthlyExpenses == 750000
    assert figures.netProfit == 750000
    assert figures.profitMargin == pytest.approx(50.0)


@pytest.mark.parametrize("revenue, net, expected", [(0, -5, 0.0), (200, 50, 25.0), (100, -100, -100.0)])
def test_calculate_profit_margin(revenue, net, expected):
    assert metrics.calculate_profit_margin(revenue, net) == expected


def test_finance_breakdown_only_counts_active_payroll():
    breakdown = metrics.compute_finance_breakdown(
        [{"monthly_salary": "3000000", "status": "active"}, {"monthly_salary": 1000000, "status": "inactive"}],
        [{"id": "e1", "category": "Rent", "amount": 2000000, "month": "2025-03", "type": "fixed"}],
    )
    assert breakdown.teacherSalaries == 3000000
    assert breakdown.operatingExpenses == 2000000
    assert breakdown.totalExpenses == 5000000
    assert breakdown.additionalExpenses[0].category == "Rent"


# --- Trend series ---

def test_last_n_months_crosses_year_boundary():
    now = datetime(2025, 2, 14, tzinfo=timezone.utc)
    assert metrics.last_n_months(now) == ["2024-09", "2024-10", "2024-11", "2024-12", "2025-01", "2025-02"]


def test_trend_series_are_complete_and_matched_by_month():
    """
    GIVEN: Ledger rows for only two of the six months.
    WHEN: The trend series are built.
    THEN: Every series has all six months in order, and profit is revenue
          minus expense for the same month.
    """
    months = metrics.last_n_months(datetime(2025, 6, 1, tzinfo=timezone.utc))
    revenue_series, expense_series, profit_series = metrics.build_trend_series(
        revenue_rows=[{"amount": 1000, "month": "2025-06"}, {"amount": 500, "month": "2025-06"}],
        expense_rows=[{"amount": 300, "month": "2025-02"}],
        payroll=100,
        months=months,
    )

    for series in (revenue_series, expense_series, profit_series):
        assert [p.month for p in series] == months
    assert revenue_series[-1].revenue == 1500
    assert revenue_series[0].revenue == 0
    # Payroll applies to every month, past ones included.
    assert [p.expense for p in expense_series] == [100, 400, 100, 100, 100, 100]
    assert profit_series[-1].profit == 1400
    assert profit_series[1].profit == -400


# --- Capacity & rankings ---

@pytest.mark.parametrize("current, maximum, expected", [
    (5, 10, 50), (12, 10, 100), (3, 0, 0), (1, 3, 33), (2, 3, 67), (None, "abc", 0),
])
def test_capacity_percent_is_clamped(current, maximum, expected):
    assert metrics.capacity_percent(current, maximum) == expected


def test_top_groups_is_stable_for_ties():
    groups = [
        {"id": "a", "name": "A", "current_students": 5},
        {"id": "b", "name": "B", "current_students": 9},
        {"id": "c", "name": "C", "current_students": 5},
        {"id": "d", "name": "D", "current_students": 5},
    ]
    ranked = metrics.top_groups(groups, lambda g: g["current_students"], limit=3)
    assert [g.id for g in ranked] == ["b", "a", "c"]


def test_top_groups_has_at_most_five_entries():
    groups = [{"id": str(i), "name": str(i), "monthly_revenue": i} for i in range(8)]
    top = metrics.build_top_groups(groups)
    assert [g.id for g in top.byRevenue] == ["7", "6", "5", "4", "3"]
    assert len(top.byStudents) == len(top.byAttendance) == 5


def test_groups_per_teacher_counts_zero_for_idle_teachers():
    teachers = [{"id": "t1", "name": "Aziza"}, {"id": "t2", "name": "Bobur"}]
    groups = [{"id": "g1", "teacher_id": "t1"}, {"id": "g2", "teacher_id": "t1"}, {"id": "g3", "teacher_id": None}]
    result = metrics.groups_per_teacher(teachers, groups)
    assert [(r.teacher, r.value) for r in result] == [("Aziza", 2), ("Bobur", 0)]


# --- Screen summaries ---

def test_summarize_ledger_groups_by_month():
    records = [
        mappers.expense_from_db({"id": "1", "amount": 100, "month": "2025-03", "type": "fixed"}),
        mappers.expense_from_db({"id": "2", "amount": 50, "month": "2025-03"}),
        mappers.expense_from_db({"id": "3", "amount": 70, "month": "2025-01", "type": "fixed"}),
    ]
    summary = metrics.summarize_ledger(records, "2025-03")

    assert summary.monthly == 150
    assert summary.total == 220
    assert summary.fixed == 170
    assert [(m.month, m.amount) for m in summary.byMonth] == [("2025-01", 70), ("2025-03", 150)]


def test_summarize_groups_and_students():
    groups = [
        GroupProfile(id="g1", name="A", maxStudents=10, currentStudents=5, monthlyRevenue=100),
        GroupProfile(id="g2", name="B", maxStudents=4, currentStudents=6, status="closed"),
    ]
    group_summary = metrics.summarize_groups(groups)
    assert (group_summary.total, group_summary.active, group_summary.closed) == (2, 1, 1)
    assert group_summary.avgCapacity == 75  # over-enrolled B counts as full: (50% + 100%) / 2
    assert group_summary.revenue == 100

    students = [
        StudentProfile(id="s1", fullName="Ali", monthlyPayment=300, paymentStatus="paid"),
        StudentProfile(id="s2", fullName="Vali", monthlyPayment=200),
    ]
    student_summary = metrics.summarize_students(students, groups)
    assert (student_summary.paid, student_summary.unpaid, student_summary.monthlyRevenue) == (1, 1, 300)
    assert [s.remaining for s in student_summary.perGroup] == [5, 0]
