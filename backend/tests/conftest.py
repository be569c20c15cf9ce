"""
Shared fixtures for backend tests.
"""
import os
import tempfile

# Must be set before backend.database / backend.main are imported
os.environ.setdefault("HABIT_TRACKER_DATABASE_URL", "sqlite://")
os.environ.setdefault("HABIT_TRACKER_LOG_DIR", tempfile.mkdtemp(prefix="habit-tracker-logs-"))

import pytest
from datetime import date, timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.database import Base
from backend import models
from backend.schemas import CheckboxDefinition, CheckboxType, DailyLogRecord


@pytest.fixture
def db_session():
    """Fresh in-memory database per test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def client(db_session):
    """FastAPI test client bound to the test database"""
    from fastapi.testclient import TestClient
    from backend.main import app
    from backend.database import get_db

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def today():
    return date.today()


@pytest.fixture
def yesterday(today):
    return today - timedelta(days=1)


def make_checkbox(
    id: int,
    name: str,
    points: int = 1,
    type: CheckboxType = CheckboxType.DAILY,
    weekly_threshold=None,
    is_active: bool = True
) -> CheckboxDefinition:
    return CheckboxDefinition(
        id=id,
        name=name,
        label=name.replace("_", " ").capitalize(),
        points=points,
        type=type,
        weekly_threshold=weekly_threshold,
        display_order=id,
        is_active=is_active
    )


def make_log(log_date: date, is_completed: bool = True, user_id: int = 1, **states) -> DailyLogRecord:
    return DailyLogRecord(
        user_id=user_id,
        log_date=log_date,
        checkbox_states=states,
        is_completed=is_completed
    )


@pytest.fixture
def default_checkboxes():
    """Four 1-point daily checkboxes and a 3-point gym checkbox needing 3 sessions a week"""
    return [
        make_checkbox(1, "logged_food"),
        make_checkbox(2, "within_calorie_limit"),
        make_checkbox(3, "protein_goal_met"),
        make_checkbox(4, "no_cheat_foods"),
        make_checkbox(5, "gym_session", points=3, type=CheckboxType.WEEKLY, weekly_threshold=3),
    ]


def add_checkbox_rows(db_session, checkboxes):
    """Persist snapshot definitions as database rows"""
    for checkbox in checkboxes:
        db_session.add(models.CheckboxDefinition(
            name=checkbox.name,
            label=checkbox.label,
            points=checkbox.points,
            type=checkbox.type.value,
            weekly_threshold=checkbox.weekly_threshold,
            display_order=checkbox.display_order,
            is_active=checkbox.is_active
        ))
    db_session.commit()


def add_log_row(db_session, log_date: date, is_completed: bool = True, user_id: int = 1, **states):
    """Persist a daily log row"""
    if db_session.get(models.User, user_id) is None:
        db_session.add(models.User(id=user_id))
    db_session.add(models.DailyLog(
        user_id=user_id,
        log_date=log_date,
        checkbox_states=states,
        is_completed=is_completed
    ))
    db_session.commit()
