"""
Tests for per-patient write locking.
"""
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from medsafety.config import settings
from medsafety.core.locks import _local_lock_for, advisory_key, patient_lock
from medsafety.exceptions import InfrastructureException
from medsafety.models import Base
from medsafety.alerts.models import MedicationAlert
from medsafety.alerts.notifier import LoggingNotifier
from medsafety.interactions.models import InteractionType
from medsafety.interactions.seed import seed_default_interactions
from medsafety.medications.schemas import MedicationCreate
from medsafety.medications.service import create_medication, discontinue_medication


def test_advisory_key_is_stable_and_signed_64_bit():
    key = advisory_key("patient-1")

    assert key == advisory_key("patient-1")
    assert key != advisory_key("patient-2")
    assert -(2 ** 63) <= key < 2 ** 63


def test_lock_is_released_after_block(db):
    with patient_lock(db, "patient-1"):
        pass
    with patient_lock(db, "patient-1"):
        pass


def test_busy_patient_lock_times_out(db, monkeypatch):
    monkeypatch.setattr(settings, "lock_timeout_seconds", 0.01)
    held = _local_lock_for("patient-busy")
    held.acquire()
    try:
        with pytest.raises(InfrastructureException) as exc:
            with patient_lock(db, "patient-busy"):
                pass
        assert exc.value.retryable is True
    finally:
        held.release()


def test_other_patients_are_not_blocked(db, monkeypatch):
    monkeypatch.setattr(settings, "lock_timeout_seconds", 0.01)
    held = _local_lock_for("patient-busy")
    held.acquire()
    try:
        with patient_lock(db, "patient-free"):
            pass
    finally:
        held.release()


def test_concurrent_prescriptions_see_each_other(tmp_path):
    """
    Warfarin and Aspirin prescribed for one patient at the same moment:
    whichever commits second must find the interaction with the first.
    """
    engine = create_engine(
        f"sqlite:///{tmp_path / 'concurrent.db'}",
        connect_args={"check_same_thread": False, "timeout": 10},
    )
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    setup = Session()
    seed_default_interactions(setup)
    setup.close()

    barrier = threading.Barrier(2)

    def prescribe_concurrently(name):
        session = Session()
        try:
            barrier.wait()
            medication, interactions, alerts = create_medication(session, MedicationCreate(
                patient_id="patient-race",
                prescribed_by="reviewer-1",
                medication_name=name,
                dosage="5mg",
                frequency="once_daily",
                instructions="Morning",
            ), LoggingNotifier())
            return [i.interaction_type for i in interactions], len(alerts)
        finally:
            session.close()

    try:
        with ThreadPoolExecutor(max_workers=2) as pool:
            results = list(pool.map(prescribe_concurrently, ["Warfarin", "Aspirin"]))

        assert sorted(results, key=lambda result: result[1]) == [([], 0), ([InteractionType.MAJOR], 1)]

        check = Session()
        assert check.query(MedicationAlert).filter(MedicationAlert.patient_id == "patient-race").count() == 1
        check.close()
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def test_interaction_alerts_are_raised_while_lock_is_held(db, prescribe, monkeypatch):
    from medsafety.alerts import service as alert_service

    held = []
    create_alert = alert_service.create_alert

    def recording_create_alert(session, data, notifier=None):
        held.append(_local_lock_for(data.patient_id).locked())
        return create_alert(session, data, notifier)

    monkeypatch.setattr("medsafety.alerts.service.create_alert", recording_create_alert)
    prescribe(name="Warfarin", patient_id="patient-held")
    medication, _, _ = prescribe(name="Aspirin", patient_id="patient-held")
    discontinue_medication(db, medication.id, "reviewer-1")

    assert held == [True, True]
