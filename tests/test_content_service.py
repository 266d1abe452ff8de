# /tests/test_content_service.py

import pytest

from app.models.content_model import RegistrationRequest
from app.services import content_service


def test_create_validates_against_the_resource_model(db):
    with pytest.raises(ValueError):
        content_service.create_record("schedule", {"day_of_week": "Mon", "start_time": "9am", "end_time": "10:00"}, db)
    with pytest.raises(ValueError):
        content_service.create_record("courses", {"name_uz": "IELTS", "unexpected": 1}, db)


def test_unknown_resource_is_a_key_error(db):
    with pytest.raises(KeyError):
        content_service.list_records("spaceships", db)


def test_update_merges_then_validates(db):
    course = content_service.create_record("courses", {"name_uz": "IELTS", "price": "1 000 000"}, db)

    updated = content_service.update_record("courses", course["id"], {"price": "1 200 000"}, db)
    assert updated["name_uz"] == "IELTS"
    assert updated["price"] == "1 200 000"

    with pytest.raises(ValueError):
        content_service.update_record("courses", course["id"], {"name_uz": ""}, db)
    assert content_service.update_record("courses", "nope", {"price": "1"}, db) is None


def test_deleting_a_course_keeps_its_applications(db):
    course = content_service.create_record("courses", {"name_uz": "IELTS"}, db)
    application = content_service.register_application(
        RegistrationRequest(fullName="Malika", phone="+998901112233", courseId=course["id"]), db
    )

    assert content_service.delete_record("courses", course["id"], db) is True
    assert db.get_by_id("applications", application["id"])["course_id"] is None


def test_public_lists_are_localized_and_published_only(db):
    content_service.create_record("courses", {"name_uz": "Ingliz tili", "name_ru": "Английский"}, db)
    content_service.create_record("courses", {"name_uz": "Draft", "is_published": False}, db)

    ru = content_service.public_list("courses", db, locale="ru")
    en = content_service.public_list("courses", db, locale="en")
    assert [c["name"] for c in ru] == ["Английский"]
    assert [c["name"] for c in en] == ["Ingliz tili"]


def test_content_blocks_resolve_to_a_dict(db):
    content_service.create_record("content-blocks", {"key": "hero.title", "value_uz": "Salom", "value_en": "Hello"}, db)

    assert content_service.content_blocks(db, "en") == {"hero.title": "Hello"}
    assert content_service.content_blocks(db, "xx") == {"hero.title": "Salom"}


def test_public_teachers_only_lists_active_ones(db, make_teacher):
    make_teacher(name="Aziza", specialty_uz="Ingliz tili", specialty_ru="Английский")
    make_teacher(name="Gone", status="inactive")

    teachers = content_service.public_teachers(db, "ru")
    assert [(t["name"], t["specialty"]) for t in teachers] == [("Aziza", "Английский")]


def test_registration_for_unknown_course_is_rejected(db):
    with pytest.raises(ValueError):
        content_service.register_application(RegistrationRequest(fullName="Ali", phone="12345", courseId="x"), db)
