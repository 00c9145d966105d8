"""
Tests for the administration log and missed-dose alerts.
"""
from datetime import datetime, timezone

import pytest

from medsafety.exceptions import InfrastructureException, ResourceNotFoundException, ValidationException
from medsafety.administrations.models import AdministrationStatus, MedicationAdministration
from medsafety.administrations.schemas import AdministrationCreate
from medsafety.administrations.service import list_administrations, record_administration
from medsafety.alerts.models import AlertSeverity, AlertType, MedicationAlert

SLOT = datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)


def _event(medication, status, **overrides):
    data = {
        "medication_id": medication.id,
        "patient_id": medication.patient_id,
        "administered_by": "caregiver-1",
        "scheduled_time": SLOT,
        "status": status,
    }
    data.update(overrides)
    return AdministrationCreate(**data)


def _missed_dose_alerts(db):
    return db.query(MedicationAlert).filter(MedicationAlert.alert_type == AlertType.MISSED_DOSE).all()


def test_missed_dose_raises_exactly_one_alert(db, prescribe, notifier):
    medication, _, _ = prescribe()

    record_administration(db, _event(medication, "missed", notes="Patient asleep"), notifier)

    alerts = _missed_dose_alerts(db)
    assert len(alerts) == 1
    assert alerts[0].severity == AlertSeverity.MEDIUM
    assert alerts[0].message == "Medication dose missed: Patient asleep"
    assert alerts[0].medication_id == medication.id
    assert [a.id for a in notifier.alerts] == [alerts[0].id]


def test_refused_dose_without_notes(db, prescribe):
    medication, _, _ = prescribe()

    record_administration(db, _event(medication, "refused"))

    alerts = _missed_dose_alerts(db)
    assert [a.message for a in alerts] == ["Medication dose refused: No reason provided"]


@pytest.mark.parametrize("status", ["administered", "partial", "delayed", "cancelled", "pending"])
def test_other_statuses_raise_no_alert(db, prescribe, status):
    medication, _, _ = prescribe()

    record_administration(db, _event(medication, status))

    assert _missed_dose_alerts(db) == []


def test_events_for_the_same_slot_are_all_kept(db, prescribe):
    """
    A partial dose followed by a correction are two records for one slot.
    """
    medication, _, _ = prescribe()

    first = record_administration(db, _event(medication, "partial", dosage_given="2.5mg"))
    second = record_administration(db, _event(medication, "administered", dosage_given="2.5mg"))

    events = list_administrations(db, medication.patient_id, medication.id)
    assert [e.id for e in events] == [first.id, second.id]
    assert [e.status for e in events] == [AdministrationStatus.PARTIAL, AdministrationStatus.ADMINISTERED]


def test_event_fields_are_stored(db, prescribe):
    medication, _, _ = prescribe()

    event = record_administration(db, _event(
        medication,
        "administered",
        administered_time=datetime(2026, 10, 19, 8, 10, tzinfo=timezone.utc),
        side_effects_observed=["nausea"],
        patient_response="fair",
        witnessed_by="nurse-2",
    ))

    stored = db.query(MedicationAdministration).filter(MedicationAdministration.id == event.id).one()
    assert stored.side_effects_observed == ["nausea"]
    assert stored.patient_response.value == "fair"
    assert stored.witnessed_by == "nurse-2"


def test_unknown_medication(db):
    with pytest.raises(ResourceNotFoundException):
        record_administration(db, AdministrationCreate(
            medication_id="missing",
            patient_id="patient-1",
            scheduled_time=SLOT,
            status="administered",
        ))


def test_medication_of_another_patient(db, prescribe):
    medication, _, _ = prescribe(patient_id="patient-a")
    with pytest.raises(ValidationException):
        record_administration(db, _event(medication, "administered", patient_id="patient-b"))


def test_event_is_kept_when_alert_cannot_be_stored(db, prescribe, monkeypatch):
    medication, _, _ = prescribe()

    def failing_create_alert(*args, **kwargs):
        raise InfrastructureException("alert store down")

    monkeypatch.setattr("medsafety.alerts.service.create_alert", failing_create_alert)
    event = record_administration(db, _event(medication, "missed"))

    assert event.status == AdministrationStatus.MISSED
    assert len(list_administrations(db, medication.patient_id)) == 1


def test_record_endpoint(client):
    medication = client.post("/api/v1/medications/", json={
        "patient_id": "patient-5",
        "prescribed_by": "reviewer-1",
        "medication_name": "Amlodipine",
        "dosage": "5mg",
        "frequency": "once_daily",
        "instructions": "Morning",
    }).json()["medication"]

    response = client.post("/api/v1/administrations/", json={
        "medication_id": medication["id"],
        "patient_id": "patient-5",
        "scheduled_time": "2026-10-19T08:00:00Z",
        "status": "missed",
        "notes": "Out of stock",
    })
    assert response.status_code == 201

    alerts = client.get("/api/v1/alerts/", params={"patient_id": "patient-5"}).json()
    assert [a["alert_type"] for a in alerts] == ["missed_dose"]

    response = client.post("/api/v1/administrations/", json={
        "medication_id": medication["id"],
        "patient_id": "patient-5",
        "scheduled_time": "2026-10-19T08:00:00Z",
        "status": "forgotten",
    })
    assert response.status_code == 422

    events = client.get("/api/v1/administrations/", params={"patient_id": "patient-5"}).json()
    assert len(events) == 1
