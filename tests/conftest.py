"""
Test configuration for the medication safety engine.
"""
import os

# Point the application at a throwaway database before it is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from medsafety.database import get_db
from medsafety.models import Base
from medsafety.main import app
from medsafety.alerts.notifier import AlertNotifier, get_notifier
from medsafety.medications.schemas import MedicationCreate
from medsafety.medications.service import create_medication

# Test database URL
TEST_DATABASE_URL = "sqlite://"

# Create test database engine
engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class RecordingNotifier(AlertNotifier):
    """Notifier that keeps every alert it receives."""
    def __init__(self):
        self.alerts = []

    def notify(self, alert):
        self.alerts.append(alert)


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    # Drop tables after test
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def notifier():
    return RecordingNotifier()


@pytest.fixture(scope="function")
def client(db, notifier):
    """
    Create a test client with a test database session and recording notifier.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    # Override the dependencies
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier

    # Create test client
    with TestClient(app) as client:
        yield client

    # Remove dependency overrides
    app.dependency_overrides = {}


@pytest.fixture
def now():
    return datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def prescribe(db, notifier):
    """
    Factory fixture that prescribes a medication through the registry.

    Returns the (medication, interactions, alerts) tuple of create_medication.
    """
    def _prescribe(name="Warfarin", patient_id="patient-1", frequency="once_daily", **overrides):
        data = {
            "patient_id": patient_id,
            "prescribed_by": "reviewer-1",
            "medication_name": name,
            "dosage": "5mg",
            "frequency": frequency,
            "instructions": "Take with water",
        }
        data.update(overrides)
        return create_medication(db, MedicationCreate(**data), notifier)
    return _prescribe
