"""
Alert Service - Alert creation, severity classification and acknowledgement.

All components raise alerts through this module so severity vocabulary stays
consistent. Alerts are never deduplicated here; acknowledgement is the only
change an alert ever receives.
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from ..database import commit_or_raise
from ..exceptions import InfrastructureException, ResourceNotFoundException
from ..core.timeutils import utcnow
from ..interactions.models import InteractionType
from .models import AlertSeverity, MedicationAlert
from .notifier import AlertNotifier, get_notifier
from .schemas import AlertCreate

# Set up logging
logger = logging.getLogger(__name__)

INTERACTION_SEVERITY = {
    InteractionType.CONTRAINDICATED: AlertSeverity.CRITICAL,
    InteractionType.MAJOR: AlertSeverity.HIGH,
    InteractionType.MODERATE: AlertSeverity.MEDIUM,
}
MISSED_DOSE_SEVERITY = AlertSeverity.MEDIUM
DISCONTINUATION_SEVERITY = AlertSeverity.MEDIUM

def severity_for_interaction(interaction_type: InteractionType) -> AlertSeverity:
    """contraindicated -> critical, major -> high, moderate -> medium, anything else -> low"""
    return INTERACTION_SEVERITY.get(interaction_type, AlertSeverity.LOW)

def severity_for_symptom(severity: int) -> Optional[AlertSeverity]:
    """
    Alert severity for a patient-reported symptom score.

    Args:
        severity: Symptom severity from 1 (mild) to 5 (severe)

    Returns:
        Optional[AlertSeverity]: critical for 5, high for 4, None below 4
    """
    if severity >= 5:
        return AlertSeverity.CRITICAL
    if severity == 4:
        return AlertSeverity.HIGH
    return None

def create_alert(
    db: Session,
    data: AlertCreate,
    notifier: Optional[AlertNotifier] = None,
) -> MedicationAlert:
    """
    Persist a new, unacknowledged alert and hand it to the notifier.

    Args:
        db: Database session
        data: Alert fields
        notifier: Notification collaborator; the configured one when omitted

    Returns:
        MedicationAlert: Stored alert

    Raises:
        InfrastructureException: If the alert cannot be stored
    """
    alert = MedicationAlert(**data.model_dump(), is_acknowledged=False)
    db.add(alert)
    commit_or_raise(db, "creating a medication alert")
    db.refresh(alert)
    logger.info(f"Alert {alert.id} ({alert.alert_type.value}, {alert.severity.value}) created for patient {alert.patient_id}")

    try:
        (notifier or get_notifier()).notify(alert)
    except Exception as e:
        logger.error(f"Notifier failed for alert {alert.id}: {str(e)}")
    return alert

def raise_alert(
    db: Session,
    data: AlertCreate,
    notifier: Optional[AlertNotifier] = None,
) -> Optional[MedicationAlert]:
    """
    Best-effort alert creation for side effects of other operations.

    A failure to store the alert is logged and reported as None so the
    triggering write (prescription, administration, symptom report) still
    succeeds.
    """
    try:
        return create_alert(db, data, notifier)
    except InfrastructureException as e:
        logger.warning(
            f"Dropped {data.alert_type.value} alert for patient {data.patient_id}: {e.detail}"
        )
        return None

def get_alert(db: Session, alert_id: str) -> MedicationAlert:
    alert = db.query(MedicationAlert).filter(MedicationAlert.id == alert_id).first()
    if not alert:
        raise ResourceNotFoundException("Alert not found")
    return alert

def list_alerts(db: Session, patient_id: str, unacknowledged_only: bool = False) -> List[MedicationAlert]:
    """
    List a patient's alerts, newest first.

    Args:
        db: Database session
        patient_id: Patient to list alerts for
        unacknowledged_only: Hide alerts that have been acknowledged
    """
    query = db.query(MedicationAlert).filter(MedicationAlert.patient_id == patient_id)
    if unacknowledged_only:
        query = query.filter(MedicationAlert.is_acknowledged.is_(False))
    return query.order_by(MedicationAlert.created_at.desc()).all()

def acknowledge_alert(db: Session, alert_id: str, acknowledged_by: str) -> MedicationAlert:
    """
    Acknowledge an alert.

    Acknowledging twice is not an error: the alert is returned with its
    original acknowledgement untouched.

    Args:
        db: Database session
        alert_id: ID of the alert
        acknowledged_by: ID of the acknowledging user

    Returns:
        MedicationAlert: Acknowledged alert

    Raises:
        ResourceNotFoundException: If the alert does not exist
    """
    alert = get_alert(db, alert_id)
    if alert.is_acknowledged:
        logger.info(f"Alert {alert_id} already acknowledged by {alert.acknowledged_by}")
        return alert

    alert.is_acknowledged = True
    alert.acknowledged_by = acknowledged_by
    alert.acknowledged_at = utcnow()
    commit_or_raise(db, "acknowledging a medication alert")
    db.refresh(alert)
    logger.info(f"Alert {alert_id} acknowledged by {acknowledged_by}")
    return alert
