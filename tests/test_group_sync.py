# /tests/test_group_sync.py

from app.services.admin_helpers.group_sync import sync_group_metrics
from app.services.database_helpers.record_store_sql import RecordStoreError


def test_sync_writes_metrics_for_one_group(db, make_group, make_student):
    """
    GIVEN: A group with three students, one of them unpaid.
    WHEN: The group is synchronized.
    THEN: Its stored enrollment and revenue match the student data.
    """
    group = make_group()
    make_student(group_id=group["id"], monthly_payment=500000)
    make_student(group_id=group["id"], monthly_payment=300000, payment_status="unpaid")
    make_student(group_id=group["id"], monthly_payment=700000)

    written = sync_group_metrics(db, group["id"])

    stored = db.get_by_id("groups", group["id"])
    assert stored["current_students"] == 3
    assert stored["monthly_revenue"] == 1200000
    assert written[group["id"]].currentStudents == 3


def test_sync_all_resets_groups_without_students(db, make_group, make_student):
    empty = make_group(name="Empty", current_students=7, monthly_revenue=999)
    busy = make_group(name="Busy")
    make_student(group_id=busy["id"], monthly_payment=100)
    make_student(group_id=None)

    written = sync_group_metrics(db)

    assert set(written) == {empty["id"], busy["id"]}
    assert db.get_by_id("groups", empty["id"])["current_students"] == 0
    assert db.get_by_id("groups", empty["id"])["monthly_revenue"] == 0
    assert db.get_by_id("groups", busy["id"])["current_students"] == 1


def test_sync_is_idempotent(db, make_group, make_student):
    group = make_group()
    make_student(group_id=group["id"])

    first = sync_group_metrics(db)
    second = sync_group_metrics(db)
    assert first == second


def test_sync_failure_is_logged_not_raised(db, mocker):
    mocker.patch.object(db, "select", side_effect=RecordStoreError("boom"))

    assert sync_group_metrics(db, "g1") == {}
