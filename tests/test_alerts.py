"""
Tests for alert severity, storage, acknowledgement and notification.
"""
import json

import httpx
import pytest

from medsafety.exceptions import ResourceNotFoundException
from medsafety.alerts.models import AlertSeverity, AlertType, MedicationAlert
from medsafety.alerts.notifier import AlertNotifier, LoggingNotifier, WebhookNotifier
from medsafety.alerts.schemas import AlertCreate
from medsafety.alerts.service import (
    acknowledge_alert,
    create_alert,
    list_alerts,
    severity_for_interaction,
    severity_for_symptom,
)
from medsafety.interactions.models import InteractionType


def _alert(db, notifier=None, patient_id="patient-1", severity=AlertSeverity.MEDIUM):
    return create_alert(db, AlertCreate(
        patient_id=patient_id,
        alert_type=AlertType.OTHER,
        severity=severity,
        message="Pharmacy called about refill",
    ), notifier or LoggingNotifier())


@pytest.mark.parametrize("interaction_type, expected", [
    (InteractionType.CONTRAINDICATED, AlertSeverity.CRITICAL),
    (InteractionType.MAJOR, AlertSeverity.HIGH),
    (InteractionType.MODERATE, AlertSeverity.MEDIUM),
    (InteractionType.MINOR, AlertSeverity.LOW),
])
def test_interaction_severity(interaction_type, expected):
    assert severity_for_interaction(interaction_type) == expected


@pytest.mark.parametrize("score, expected", [
    (5, AlertSeverity.CRITICAL),
    (4, AlertSeverity.HIGH),
    (3, None),
    (1, None),
])
def test_symptom_severity(score, expected):
    assert severity_for_symptom(score) == expected


def test_new_alert_is_unacknowledged_and_notified(db, notifier):
    alert = _alert(db, notifier)

    assert alert.is_acknowledged is False
    assert alert.acknowledged_by is None
    assert notifier.alerts == [alert]


def test_acknowledge_is_idempotent(db):
    """
    A second acknowledgement keeps the first reviewer and timestamp and does
    not create anything new.
    """
    alert = _alert(db)

    first = acknowledge_alert(db, alert.id, "reviewer-1")
    acknowledged_at = first.acknowledged_at
    second = acknowledge_alert(db, alert.id, "reviewer-2")

    assert second.is_acknowledged is True
    assert second.acknowledged_by == "reviewer-1"
    assert second.acknowledged_at == acknowledged_at
    assert db.query(MedicationAlert).count() == 1


def test_acknowledge_unknown_alert(db):
    with pytest.raises(ResourceNotFoundException):
        acknowledge_alert(db, "missing", "reviewer-1")


def test_list_hides_acknowledged_on_request(db):
    kept = _alert(db)
    done = _alert(db)
    _alert(db, patient_id="patient-2")
    acknowledge_alert(db, done.id, "reviewer-1")

    assert {a.id for a in list_alerts(db, "patient-1")} == {kept.id, done.id}
    assert [a.id for a in list_alerts(db, "patient-1", unacknowledged_only=True)] == [kept.id]


def test_notifier_failure_does_not_lose_alert(db):
    class BrokenNotifier(LoggingNotifier):
        def notify(self, alert):
            raise RuntimeError("pager offline")

    alert = _alert(db, BrokenNotifier())

    assert db.query(MedicationAlert).filter(MedicationAlert.id == alert.id).count() == 1


def test_webhook_notifier_posts_alert(db):
    received = []

    def handler(request):
        received.append(json.loads(request.content))
        return httpx.Response(202)

    alert = _alert(db, severity=AlertSeverity.HIGH)
    webhook = WebhookNotifier("https://alerts.test/hook", client=httpx.Client(transport=httpx.MockTransport(handler)))
    webhook.notify(alert)

    assert len(received) == 1
    assert received[0]["id"] == alert.id
    assert received[0]["severity"] == "high"
    assert received[0]["is_acknowledged"] is False


def test_webhook_notifier_logs_delivery_errors(db):
    def handler(request):
        return httpx.Response(500)

    alert = _alert(db)
    webhook = WebhookNotifier("https://alerts.test/hook", client=httpx.Client(transport=httpx.MockTransport(handler)))

    webhook.notify(alert)


def test_alert_endpoints(client, db):
    alert = _alert(db, patient_id="patient-3")

    response = client.get("/api/v1/alerts/", params={"patient_id": "patient-3"})
    assert [a["id"] for a in response.json()] == [alert.id]

    response = client.post(f"/api/v1/alerts/{alert.id}/acknowledge", json={"acknowledged_by": "reviewer-1"})
    assert response.status_code == 200
    assert response.json()["acknowledged_by"] == "reviewer-1"

    response = client.post(f"/api/v1/alerts/{alert.id}/acknowledge", json={"acknowledged_by": "reviewer-2"})
    assert response.status_code == 200
    assert response.json()["acknowledged_by"] == "reviewer-1"

    response = client.get("/api/v1/alerts/", params={"patient_id": "patient-3", "unacknowledged_only": True})
    assert response.json() == []

    assert client.get("/api/v1/alerts/missing").status_code == 404
    assert client.post("/api/v1/alerts/missing/acknowledge", json={"acknowledged_by": "r"}).status_code == 404


def test_notifier_interface_requires_notify():
    class SilentNotifier(AlertNotifier):
        pass

    with pytest.raises(TypeError):
        SilentNotifier()
