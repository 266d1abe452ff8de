# /tests/conftest.py

import pytest
from fastapi.testclient import TestClient

from app.db.database import build_engine, create_tables, get_engine
from app.core.deps import get_current_admin
from app.main import app
from app.models.auth_model import AdminProfile
from app.services.database_service import DatabaseService


@pytest.fixture
def engine(tmp_path):
    """
    A fresh SQLite database file per test. A file (not `:memory:`) is used
    because the dashboard reads from several worker threads at once.
    """
    engine = build_engine(f"sqlite:///{tmp_path / 'academy.db'}")
    create_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    return DatabaseService.from_engine(engine)


@pytest.fixture
def client(engine):
    """A TestClient bound to the test database, with admin auth bypassed."""
    app.dependency_overrides[get_engine] = lambda: engine
    app.dependency_overrides[get_current_admin] = lambda: AdminProfile(id="adm_test", login="tester")
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_teacher(db):
    def _make(name="Aziza Karimova", salary=3000000, status="active", **extra):
        return db.insert("teachers", {"name": name, "monthly_salary": salary, "status": status, **extra})
    return _make


@pytest.fixture
def make_group(db):
    def _make(name="IELTS 1", teacher_id=None, max_students=10, **extra):
        return db.insert("groups", {"name": name, "teacher_id": teacher_id, "max_students": max_students, **extra})
    return _make


@pytest.fixture
def make_student(db):
    def _make(full_name="Ali Valiyev", group_id=None, monthly_payment=500000, payment_status="paid", **extra):
        return db.insert("students", {
            "full_name": full_name,
            "group_id": group_id,
            "monthly_payment": monthly_payment,
            "payment_status": payment_status,
            **extra,
        })
    return _make
