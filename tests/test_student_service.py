# /tests/test_student_service.py

import pytest

from app.models.student_model import PaymentCreate, StudentPayload, StudentUpdate
from app.services import student_service
from app.services.admin_helpers.group_sync import sync_group_metrics


def _group_state(db, group_id):
    row = db.get_by_id("groups", group_id)
    return row["current_students"], row["monthly_revenue"]


def test_create_student_syncs_its_group(db, make_teacher, make_group):
    teacher = make_teacher(name="Aziza")
    group = make_group(teacher_id=teacher["id"], schedule="Mon/Wed")

    student = student_service.create_student(
        StudentPayload(fullName="Jasur Aliyev", groupId=group["id"], monthlyPayment=500000, paymentStatus="paid"),
        db,
    )

    assert student.groupName == "IELTS 1"
    assert student.groupSchedule == "Mon/Wed"
    assert student.teacherName == "Aziza"
    assert _group_state(db, group["id"]) == (1, 500000)


def test_create_student_in_unknown_group_is_rejected(db):
    with pytest.raises(ValueError):
        student_service.create_student(StudentPayload(fullName="Jasur", groupId="nope"), db)


def test_moving_a_student_syncs_old_and_new_group(db, make_group, make_student):
    """
    GIVEN: A paid student in group A.
    WHEN: The student is moved to group B.
    THEN: A loses the student and the revenue, and B gains both.
    """
    group_a = make_group(name="A")
    group_b = make_group(name="B")
    student = make_student(group_id=group_a["id"], monthly_payment=400000)
    student_service.update_student(student["id"], StudentUpdate(paymentStatus="paid"), db)
    assert _group_state(db, group_a["id"]) == (1, 400000)

    student_service.update_student(student["id"], StudentUpdate(groupId=group_b["id"]), db)

    assert _group_state(db, group_a["id"]) == (0, 0)
    assert _group_state(db, group_b["id"]) == (1, 400000)


def test_payment_status_change_updates_group_revenue(db, make_group, make_student):
    group = make_group()
    student = make_student(group_id=group["id"], monthly_payment=300000, payment_status="unpaid")

    student_service.update_student(student["id"], StudentUpdate(paymentStatus="paid"), db)
    assert _group_state(db, group["id"]) == (1, 300000)

    student_service.update_student(student["id"], StudentUpdate(monthlyPayment=350000), db)
    assert _group_state(db, group["id"]) == (1, 350000)


def test_update_missing_student_returns_none(db):
    assert student_service.update_student("nope", StudentUpdate(fullName="Someone"), db) is None


def test_empty_update_is_rejected(db, make_student):
    student = make_student()
    with pytest.raises(ValueError):
        student_service.update_student(student["id"], StudentUpdate(), db)


def test_record_payment_appends_history_and_marks_paid(db, make_group, make_student):
    group = make_group()
    student = make_student(group_id=group["id"], monthly_payment=600000, payment_status="unpaid")

    student_service.record_payment(student["id"], PaymentCreate(amount=600000, date="2025-02-01"), db)
    profile = student_service.record_payment(
        student["id"], PaymentCreate(amount=600000, date="2025-03-01", method="card"), db
    )

    assert profile.paymentStatus == "paid"
    assert [h.date for h in profile.history] == ["2025-03-01", "2025-02-01"]
    assert profile.history[0].method == "card"
    assert _group_state(db, group["id"]) == (1, 600000)


def test_record_payment_for_missing_student_returns_none(db):
    assert student_service.record_payment("nope", PaymentCreate(amount=1, date="2025-01-01"), db) is None


def test_delete_student_cascades_history_and_syncs(db, make_group, make_student):
    group = make_group()
    student = make_student(group_id=group["id"])
    student_service.record_payment(student["id"], PaymentCreate(amount=1, date="2025-01-01"), db)

    assert student_service.delete_student(student["id"], db) is True

    assert db.count("payment_history", {"student_id": student["id"]}) == 0
    assert _group_state(db, group["id"]) == (0, 0)
    assert student_service.delete_student(student["id"], db) is False


def test_student_summary_reports_remaining_seats(db, make_group, make_student):
    group = make_group(max_students=3)
    make_student(group_id=group["id"], monthly_payment=100)
    make_student(group_id=group["id"], monthly_payment=200, payment_status="unpaid")
    sync_group_metrics(db)

    summary = student_service.get_student_summary(db)

    assert (summary.total, summary.paid, summary.unpaid) == (2, 1, 1)
    assert summary.monthlyRevenue == 100
    assert summary.perGroup[0].remaining == 1
