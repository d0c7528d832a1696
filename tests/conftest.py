"""Pytest configuration and fixtures."""

import os
from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from admin_console.api.dependencies import get_controller
from admin_console.config import Settings
from admin_console.database import Base
from admin_console.errors import StoreError
from admin_console.main import app
from admin_console.models import (
    MealPlan,
    NutritionLog,
    Profile,
    Recipe,
    UserMealPlan,
    WaterIntake,
)
from admin_console.services.dashboard_controller import DashboardController
from admin_console.services.sql_store import SqlStore

# Use test database - PostgreSQL when TEST_DATABASE_URL is set, SQLite locally
SQLALCHEMY_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///./test.db")

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

BASE_TIME = datetime(2026, 1, 1, tzinfo=UTC)


class FlakyStore(SqlStore):
    """SqlStore whose reads or writes fail for chosen relations."""

    def __init__(self, session_factory, failing_reads=(), failing_writes=()):
        super().__init__(session_factory)
        self.failing_reads = set(failing_reads)
        self.failing_writes = set(failing_writes)

    def _check(self, relation, failing):
        if relation in failing:
            raise StoreError(f"connection reset while reading {relation}", status_code=503)

    async def select(self, relation, columns, order_by=None, descending=False):
        self._check(relation, self.failing_reads)
        return await super().select(relation, columns, order_by, descending)

    async def count(self, relation):
        self._check(relation, self.failing_reads)
        return await super().count(relation)

    async def insert(self, relation, row):
        self._check(relation, self.failing_writes)
        return await super().insert(relation, row)

    async def upsert(self, relation, row, on_conflict):
        self._check(relation, self.failing_writes)
        return await super().upsert(relation, row, on_conflict)

    async def delete(self, relation, match):
        self._check(relation, self.failing_writes)
        return await super().delete(relation, match)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def settings():
    return Settings(_env_file=None, environment="development", store_backend="sql")


@pytest.fixture
def store():
    return SqlStore(TestingSessionLocal)


@pytest.fixture
def controller(store, settings):
    return DashboardController(store, settings)


@pytest.fixture
def flaky_store():
    return FlakyStore(TestingSessionLocal)


@pytest.fixture(scope="function")
def client(controller):
    """Create a test client bound to the test controller."""
    app.dependency_overrides[get_controller] = lambda: controller
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_plan(db):
    """Insert a plan. Later calls are newer unless created_at is given."""
    created = []

    def _make_plan(name, calories=2000, protein=150, meals=3, created_at=None):
        plan = MealPlan(
            name=name,
            calories=calories,
            protein=protein,
            meals=meals,
            created_at=created_at or BASE_TIME + timedelta(minutes=len(created)),
        )
        db.add(plan)
        db.commit()
        created.append(plan)
        return plan

    return _make_plan


@pytest.fixture
def make_profile(db):
    def _make_profile(full_name="Test User", email="test@example.com"):
        profile = Profile(full_name=full_name, email=email)
        db.add(profile)
        db.commit()
        return profile

    return _make_profile


@pytest.fixture
def make_assignment(db):
    def _make_assignment(profile, plan):
        assignment = UserMealPlan(user_id=profile.id, plan_id=plan.id)
        db.add(assignment)
        db.commit()
        return assignment

    return _make_assignment


@pytest.fixture
def make_logs(db):
    """Insert nutrition logs, water logs and recipes."""

    def _make_logs(calories=(), water=(), recipes=0):
        db.add_all(NutritionLog(calories=value) for value in calories)
        db.add_all(WaterIntake(amount_ml=value) for value in water)
        db.add_all(Recipe(name=f"Recipe {index}") for index in range(recipes))
        db.commit()

    return _make_logs
