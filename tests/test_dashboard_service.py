# /tests/test_dashboard_service.py

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import text

from app.services import dashboard_service
from app.services.admin_helpers.group_sync import sync_group_metrics
from app.services.database_helpers.record_store_sql import RecordStoreError

NOW = datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def seeded(db, make_teacher, make_group, make_student):
    aziza = make_teacher(name="Aziza", salary=2000000)
    make_teacher(name="Bobur", salary=1000000, status="inactive")
    ielts = make_group(name="IELTS", teacher_id=aziza["id"], max_students=2, attendance_rate=90)
    math = make_group(name="Math", teacher_id=aziza["id"], max_students=10, attendance_rate=70)
    make_student(group_id=ielts["id"], monthly_payment=500000)
    make_student(group_id=ielts["id"], monthly_payment=300000, payment_status="unpaid")
    make_student(group_id=ielts["id"], monthly_payment=700000)
    make_student(group_id=math["id"], monthly_payment=400000)
    sync_group_metrics(db)

    db.insert("revenue", {"source": "Camp", "amount": 1000000, "month": "2025-03"})
    db.insert("revenue", {"source": "Camp", "amount": 800000, "month": "2025-01"})
    db.insert("revenue", {"source": "Old", "amount": 999, "month": "2024-01"})
    db.insert("expenses", {"category": "Rent", "amount": 500000, "month": "2025-03"})
    return {"aziza": aziza, "ielts": ielts, "math": math}


@pytest.mark.asyncio
async def test_snapshot_aggregates_every_section(db, seeded):
    snapshot = await dashboard_service.get_dashboard_snapshot(db, now=NOW)

    assert (snapshot.teacherCount, snapshot.groupCount, snapshot.studentCount) == (2, 2, 4)
    # 1,000,000 ledger + 1,600,000 paid fees
    assert snapshot.monthlyRevenue == 2600000
    # 2,000,000 active payroll + 500,000 ledger expenses
    assert snapshot.monthlyExpenses == 2500000
    assert snapshot.netProfit == 100000
    assert snapshot.profitMargin == pytest.approx(100000 / 2600000 * 100)
    assert (snapshot.paidStudents, snapshot.unpaidStudents) == (3, 1)

    assert [p.month for p in snapshot.revenueSeries] == ["2024-10", "2024-11", "2024-12", "2025-01", "2025-02", "2025-03"]
    assert [p.revenue for p in snapshot.revenueSeries] == [0, 0, 0, 800000, 0, 1000000]
    assert snapshot.expenseSeries[0].expense == 2000000
    assert snapshot.profitSeries[-1].profit == 1000000 - 2500000

    assert [(s.status, s.value) for s in snapshot.studentStatusSeries] == [("paid", 3), ("unpaid", 1)]
    assert {c.name: c.value for c in snapshot.capacityUsage} == {"IELTS": 100, "Math": 10}
    assert {t.teacher: t.value for t in snapshot.teachersPerGroup} == {"Aziza": 2, "Bobur": 0}
    assert [g.name for g in snapshot.topGroups.byStudents] == ["IELTS", "Math"]
    assert [g.name for g in snapshot.topGroups.byAttendance] == ["IELTS", "Math"]
    assert snapshot.topGroups.byRevenue[0].value == 1200000


@pytest.mark.asyncio
async def test_snapshot_of_empty_database_is_all_zero(db):
    snapshot = await dashboard_service.get_dashboard_snapshot(db, now=NOW)

    assert snapshot.teacherCount == 0
    assert snapshot.monthlyRevenue == 0
    assert snapshot.profitMargin == 0
    assert len(snapshot.revenueSeries) == 6
    assert all(p.profit == 0 for p in snapshot.profitSeries)
    assert snapshot.topGroups.byRevenue == []


@pytest.mark.asyncio
async def test_snapshot_survives_missing_ledger_tables(db, engine, seeded):
    with engine.begin() as conn:
        conn.execute(text("DROP TABLE revenue"))
        conn.execute(text("DROP TABLE expenses"))

    snapshot = await dashboard_service.get_dashboard_snapshot(db, now=NOW)

    assert snapshot.monthlyRevenue == 1600000
    assert snapshot.monthlyExpenses == 2000000
    assert [p.revenue for p in snapshot.revenueSeries] == [0] * 6


@pytest.mark.asyncio
async def test_snapshot_never_raises_on_store_failure(db, mocker):
    mocker.patch.object(db.store, "select", side_effect=RecordStoreError("timeout"))
    mocker.patch.object(db.store, "count", side_effect=RecordStoreError("timeout"))

    snapshot = await dashboard_service.get_dashboard_snapshot(db, now=NOW)

    assert snapshot.studentCount == 0
    assert snapshot.netProfit == 0


@pytest.mark.asyncio
async def test_financial_overview_uses_applications_in_window(db, make_teacher):
    teacher = make_teacher(name="Aziza", specialty_uz="Ingliz tili")
    course = db.insert("courses", {"name_uz": "IELTS", "price": "1,500,000 so'm", "teacher_id": teacher["id"]})
    db.insert("courses", {"name_uz": "Draft", "price": "900000", "is_published": False})
    for days_ago in (0, 1, 40):
        db.insert("applications", {
            "full_name": "Applicant", "phone": "+998900000000", "course_id": course["id"],
            "created_at": NOW - timedelta(days=days_ago),
        })

    overview = await dashboard_service.get_financial_overview(db, time_range="30d", payout_rate=0.5, now=NOW)

    assert overview.totalEnrollments == 2
    assert overview.totalRevenue == 3000000
    assert overview.avgTicket == 1500000
    assert [c.name for c in overview.topCourses] == ["IELTS"]
    assert overview.teacherSummaries[0].payout == 1500000
    assert overview.teacherSummaries[0].specialty == "Ingliz tili"
    assert len(overview.revenueTrend) == 30


@pytest.mark.asyncio
async def test_site_stats_and_recent_activity(db):
    course = db.insert("courses", {"name_uz": "Robototexnika", "category": "tech"})
    db.insert("events", {"title_uz": "Open day"})
    db.insert("applications", {"full_name": "Malika", "phone": "+998901112233", "course_id": course["id"]})

    stats = await dashboard_service.get_site_stats(db)
    recent = await dashboard_service.get_recent_activity(db)

    assert (stats.courses, stats.events, stats.applications, stats.teachers) == (1, 1, 1, 0)
    assert recent.applications[0].courseName == "Robototexnika"
    assert recent.courses[0].name == "Robototexnika"
