"""
Pytest configuration and shared fixtures for testing.

Provides reusable test fixtures:
- test_db: In-memory SQLite database for isolated testing
- test_client: FastAPI TestClient for API integration tests
- franchise / store / admin_user / employee: seeded tenancy records
- admin_headers / employee_headers: bearer tokens for protected routes
- FakeRepository: in-memory HoursRepository for engine tests
"""

import os
import sys
from pathlib import Path

import pytest

# Keep the application engine off the filesystem during tests
os.environ.setdefault("DB_DSN", "sqlite://")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from app.auth.auth import build_claims, create_access_token, get_password_hash
from app.core.errors import EmployeeNotFound, ShiftNotFound, WorkConfigUnavailable
from app.core.hours import clear_calendar_cache
from app.core.models import WorkConfig as WorkConfigSnapshot
from app.database.database import Base, Franchise, Store, User, UserRole, WorkConfig, get_db
from app.main import app

ADMIN_PASSWORD = "adminpass123"
EMPLOYEE_ID = 42


class FakeRepository:
    """In-memory HoursRepository. Lists are filtered by employee and month like the real one."""

    def __init__(self, shifts=None, absences=None, novelties=None, templates=None, names=None, work_config=None):
        self.shifts = list(shifts or [])
        self.absences = list(absences or [])
        self.novelties = list(novelties or [])
        self.templates = dict(templates or {})
        self.names = dict(names or {EMPLOYEE_ID: "Ana Gómez"})
        self.work_config = work_config if work_config is not None else WorkConfigSnapshot()
        self.failing_months: set[int] = set()
        self.calls: list[tuple] = []

    def _for_month(self, items, employee_id, year, month):
        if month in self.failing_months:
            raise RuntimeError(f"storage unavailable for month {month}")
        return [
            item
            for item in items
            if item.employee_id == employee_id and item.date.year == year and item.date.month == month
        ]

    def assigned_shifts_for_employee_month(self, employee_id, year, month):
        self.calls.append(("assigned", employee_id, year, month))
        return self._for_month(self.shifts, employee_id, year, month)

    def absences_for_employee_month(self, employee_id, year, month):
        return self._for_month(self.absences, employee_id, year, month)

    def novelties_for_employee_month(self, employee_id, year, month):
        return self._for_month(self.novelties, employee_id, year, month)

    def shift_template_by_id(self, shift_id):
        if shift_id not in self.templates:
            raise ShiftNotFound(f"shift {shift_id} not found")
        return self.templates[shift_id]

    def employee_full_name(self, employee_id):
        if employee_id not in self.names:
            raise EmployeeNotFound(f"employee {employee_id} not found")
        return self.names[employee_id]

    def active_work_config(self):
        if self.work_config is False:
            raise WorkConfigUnavailable("no active work configuration")
        return self.work_config


@pytest.fixture(autouse=True)
def fresh_calendar_cache():
    """Every test starts with an empty holiday cache."""
    clear_calendar_cache()
    yield
    clear_calendar_cache()


@pytest.fixture(scope="function")
def test_db():
    """
    Create an in-memory SQLite database for testing.

    StaticPool keeps a single connection so the request threads used by
    TestClient see the same database as the test.

    Yields:
        SQLAlchemy Session: Database session for test use
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def test_client(test_db):
    """
    Create FastAPI TestClient with test database dependency override.

    Args:
        test_db: Test database session fixture

    Yields:
        TestClient: FastAPI test client for API testing
    """

    def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def franchise(test_db):
    """Franchise 1 with store 1, plus franchise 2 with store 2 for cross-tenant checks."""
    own = Franchise(id=1, name="Loopi Centro")
    other = Franchise(id=2, name="Loopi Norte")
    test_db.add_all([own, other])
    test_db.add_all([Store(id=1, franchise_id=1, name="Centro 1"), Store(id=2, franchise_id=2, name="Norte 1")])
    test_db.commit()
    return own


@pytest.fixture(scope="function")
def work_config(test_db):
    row = WorkConfig(diurnal_start="06:00", diurnal_end="21:00", daily_regular_hours=7.33, is_active=True)
    test_db.add(row)
    test_db.commit()
    test_db.refresh(row)
    return row


@pytest.fixture(scope="function")
def admin_user(test_db, franchise):
    """
    Admin of franchise 1, not bound to a store.

    - email: admin@loopi.test
    - password: adminpass123
    """
    admin = User(
        id=1,
        email="admin@loopi.test",
        password_hash=get_password_hash(ADMIN_PASSWORD),
        first_name="Admin",
        last_name="User",
        roles=[UserRole.ADMIN.value],
        franchise_id=1,
    )
    test_db.add(admin)
    test_db.commit()
    test_db.refresh(admin)
    return admin


@pytest.fixture(scope="function")
def employee(test_db, franchise):
    """Employee 42 of franchise 1, store 1."""
    user = User(
        id=EMPLOYEE_ID,
        email="ana@loopi.test",
        password_hash=get_password_hash("employeepass1"),
        first_name="Ana",
        last_name="Gómez",
        roles=[UserRole.EMPLOYEE.value],
        franchise_id=1,
        store_id=1,
    )
    test_db.add(user)
    test_db.commit()
    test_db.refresh(user)
    return user


@pytest.fixture(scope="function")
def foreign_employee(test_db, franchise):
    """Employee of franchise 2."""
    user = User(
        id=77,
        email="luis@loopi.test",
        password_hash=get_password_hash("employeepass2"),
        first_name="Luis",
        last_name="Pérez",
        roles=[UserRole.EMPLOYEE.value],
        franchise_id=2,
        store_id=2,
    )
    test_db.add(user)
    test_db.commit()
    return user


@pytest.fixture(scope="function")
def admin_headers(admin_user, work_config):
    """
    Bearer headers for the franchise 1 admin.

    Returns:
        dict: Headers with Authorization bearer token
    """
    token = create_access_token(build_claims(admin_user))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def employee_headers(employee):
    """Bearer headers for a user without the admin role."""
    token = create_access_token(build_claims(employee))
    return {"Authorization": f"Bearer {token}"}
