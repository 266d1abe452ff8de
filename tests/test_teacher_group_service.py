# /tests/test_teacher_group_service.py

import pytest

from app.models.group_model import GroupPayload, GroupUpdate
from app.models.teacher_model import TeacherPayload, TeacherUpdate
from app.services import group_service, teacher_service


def test_create_teacher_writes_every_locale(db):
    teacher = teacher_service.create_teacher(
        TeacherPayload(fullName="Aziza Karimova", subject="English", bio="CELTA", monthlySalary=4000000), db
    )

    row = db.get_by_id("teachers", teacher.id)
    assert (row["specialty_uz"], row["specialty_ru"], row["specialty_en"]) == ("English",) * 3
    assert row["bio_en"] == "CELTA"
    assert teacher.monthlySalary == 4000000


def test_list_teachers_includes_their_groups(db, make_teacher, make_group):
    teacher = make_teacher()
    make_group(name="IELTS 1", teacher_id=teacher["id"])
    make_group(name="Orphan")

    [profile] = teacher_service.list_teachers(db)
    assert [g.name for g in profile.groups] == ["IELTS 1"]


def test_update_teacher_partially(db, make_teacher):
    teacher = make_teacher(salary=1000)
    updated = teacher_service.update_teacher(teacher["id"], TeacherUpdate(status="inactive"), db)

    assert updated.status == "inactive"
    assert updated.monthlySalary == 1000
    assert teacher_service.update_teacher("nope", TeacherUpdate(phone="1"), db) is None


def test_delete_teacher_unassigns_groups_and_courses(db, make_teacher, make_group):
    teacher = make_teacher()
    group = make_group(teacher_id=teacher["id"])
    course = db.insert("courses", {"name_uz": "IELTS", "teacher_id": teacher["id"]})

    assert teacher_service.delete_teacher(teacher["id"], db) is True

    assert db.get_by_id("groups", group["id"])["teacher_id"] is None
    assert db.get_by_id("courses", course["id"])["teacher_id"] is None
    assert group_service.get_group(group["id"], db).teacherName == "Unassigned"
    assert teacher_service.delete_teacher(teacher["id"], db) is False


def test_salary_summary(db, make_teacher):
    make_teacher(salary=3000)
    make_teacher(salary=2000)
    make_teacher(salary=500, status="inactive")

    summary = teacher_service.get_salary_summary(db)
    assert (summary.active, summary.inactive) == (5000, 500)


def test_list_groups_refreshes_stale_metrics(db, make_group, make_student):
    """
    GIVEN: A group whose stored counters are out of date.
    WHEN: The group list is read.
    THEN: The counters are recomputed before being returned.
    """
    group = make_group(current_students=99, monthly_revenue=1)
    make_student(group_id=group["id"], monthly_payment=250000)

    [profile] = group_service.list_groups(db)
    assert profile.currentStudents == 1
    assert profile.monthlyRevenue == 250000


def test_create_group_with_unknown_teacher_is_rejected(db):
    with pytest.raises(ValueError):
        group_service.create_group(GroupPayload(name="X", teacherId="ghost"), db)


def test_update_group_keeps_computed_fields(db, make_teacher, make_group, make_student):
    teacher = make_teacher(name="Bobur")
    group = make_group()
    make_student(group_id=group["id"], monthly_payment=100)

    updated = group_service.update_group(group["id"], GroupUpdate(teacherId=teacher["id"], room="204"), db)

    assert updated.teacherName == "Bobur"
    assert updated.room == "204"
    assert updated.currentStudents == 1


def test_delete_group_keeps_students_unassigned(db, make_group, make_student):
    group = make_group()
    student = make_student(group_id=group["id"])

    assert group_service.delete_group(group["id"], db) is True

    assert db.get_by_id("students", student["id"])["group_id"] is None
    assert group_service.list_group_students(group["id"], db) is None


def test_group_summary(db, make_group, make_student):
    full = make_group(name="Full", max_students=1)
    make_group(name="Closed", max_students=4, status="closed")
    make_student(group_id=full["id"], monthly_payment=700)

    summary = group_service.get_group_summary(db)

    assert (summary.total, summary.active, summary.closed) == (2, 1, 1)
    assert summary.avgCapacity == 50
    assert summary.revenue == 700
