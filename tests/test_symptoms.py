"""
Tests for symptom intake, follow-up flagging and review.
"""
import pytest

from medsafety.exceptions import ResourceNotFoundException, ValidationException
from medsafety.alerts.models import AlertSeverity, AlertType, MedicationAlert
from medsafety.symptoms.models import PatientSymptomReport
from medsafety.symptoms.schemas import SymptomReportCreate, SymptomReview
from medsafety.symptoms.service import (
    get_symptom_report,
    list_symptom_reports,
    report_symptom,
    review_symptom_report,
)


def _report(db, severity, notifier=None, **overrides):
    data = {
        "patient_id": "patient-1",
        "symptoms": ["dizziness", "nausea"],
        "severity": severity,
        "description": "Since the morning dose",
    }
    data.update(overrides)
    return report_symptom(db, SymptomReportCreate(**data), notifier)


def _side_effect_alerts(db):
    return db.query(MedicationAlert).filter(MedicationAlert.alert_type == AlertType.SIDE_EFFECT).all()


def test_severity_five_raises_critical_alert(db, notifier):
    report = _report(db, 5, notifier)

    alerts = _side_effect_alerts(db)
    assert report.follow_up_required is True
    assert report.is_resolved is False
    assert len(alerts) == 1
    assert alerts[0].severity == AlertSeverity.CRITICAL
    assert alerts[0].message == "Severe symptoms reported: dizziness, nausea"
    assert alerts[0].action_required == "Immediate medical review required"
    assert notifier.alerts == alerts


def test_severity_four_raises_high_alert(db):
    _report(db, 4)
    assert [a.severity for a in _side_effect_alerts(db)] == [AlertSeverity.HIGH]


@pytest.mark.parametrize("severity, follow_up", [(3, True), (2, False), (1, False)])
def test_lower_severities_raise_no_alert(db, severity, follow_up):
    report = _report(db, severity)

    assert report.follow_up_required is follow_up
    assert _side_effect_alerts(db) == []


@pytest.mark.parametrize("severity", [0, 6, -1])
def test_out_of_range_severity_is_rejected(db, severity):
    with pytest.raises(ValidationException):
        _report(db, severity)
    assert db.query(PatientSymptomReport).count() == 0


def test_report_linked_to_medication(db, prescribe):
    medication, _, _ = prescribe()
    report = _report(db, 4, medication_id=medication.id)

    assert report.medication_id == medication.id
    assert _side_effect_alerts(db)[0].medication_id == medication.id


def test_report_linked_to_unknown_medication(db):
    with pytest.raises(ResourceNotFoundException):
        _report(db, 2, medication_id="missing")


def test_review_marks_resolved(db):
    report = _report(db, 3)

    reviewed = review_symptom_report(db, report.id, SymptomReview(
        reviewed_by="reviewer-1",
        review_notes="Dose reduced",
        action_taken="Halved dose",
        is_resolved=True,
    ))

    assert reviewed.is_resolved is True
    assert reviewed.resolved_at is not None
    assert reviewed.reviewed_at is not None
    assert reviewed.action_taken == "Halved dose"
    assert reviewed.follow_up_required is True


def test_review_without_resolution_leaves_it_open(db):
    report = _report(db, 2)

    reviewed = review_symptom_report(db, report.id, SymptomReview(reviewed_by="reviewer-1", review_notes="Watch"))

    assert reviewed.is_resolved is False
    assert reviewed.resolved_at is None
    assert reviewed.follow_up_required is False


def test_review_can_reopen(db):
    report = _report(db, 3)
    review_symptom_report(db, report.id, SymptomReview(reviewed_by="r1", review_notes="ok", is_resolved=True))

    reopened = review_symptom_report(db, report.id, SymptomReview(reviewed_by="r2", review_notes="recurred", is_resolved=False))

    assert reopened.is_resolved is False
    assert reopened.resolved_at is None
    assert reopened.reviewed_by == "r2"


def test_review_unknown_report(db):
    with pytest.raises(ResourceNotFoundException):
        review_symptom_report(db, "missing", SymptomReview(reviewed_by="r", review_notes="n"))


def test_list_and_get(db):
    report = _report(db, 2)
    _report(db, 2, patient_id="patient-2")

    assert [r.id for r in list_symptom_reports(db, "patient-1")] == [report.id]
    assert get_symptom_report(db, report.id).id == report.id


def test_symptom_endpoints(client):
    response = client.post("/api/v1/symptom-reports/", json={
        "patient_id": "patient-4",
        "symptoms": ["rash"],
        "severity": 5,
    })
    assert response.status_code == 201
    report = response.json()
    assert report["follow_up_required"] is True

    alerts = client.get("/api/v1/alerts/", params={"patient_id": "patient-4"}).json()
    assert [(a["alert_type"], a["severity"]) for a in alerts] == [("side_effect", "critical")]

    response = client.post(f"/api/v1/symptom-reports/{report['id']}/review", json={
        "reviewed_by": "reviewer-1",
        "review_notes": "Antihistamine given",
        "is_resolved": True,
    })
    assert response.status_code == 200
    assert response.json()["resolved_at"] is not None

    response = client.post("/api/v1/symptom-reports/", json={
        "patient_id": "patient-4",
        "symptoms": ["rash"],
        "severity": 6,
    })
    assert response.status_code == 422
