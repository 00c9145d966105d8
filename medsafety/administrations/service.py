"""
Administration Service - Append-only recording of dose events.

Every event is stored as given. Whether a slot was already covered is a
question for queries, not for the recorder: partial doses, corrections and
late entries are all legitimate extra records against one slot.
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from ..database import commit_or_raise
from ..exceptions import ValidationException
from ..core.timeutils import ensure_utc
from ..alerts.models import AlertType
from ..alerts.notifier import AlertNotifier
from ..alerts.schemas import AlertCreate
from ..alerts.service import MISSED_DOSE_SEVERITY, raise_alert
from ..medications.service import get_medication
from .models import AdministrationStatus, MedicationAdministration
from .schemas import AdministrationCreate

# Set up logging
logger = logging.getLogger(__name__)

ALERTING_STATUSES = (AdministrationStatus.MISSED, AdministrationStatus.REFUSED)

def record_administration(
    db: Session,
    data: AdministrationCreate,
    notifier: Optional[AlertNotifier] = None,
) -> MedicationAdministration:
    """
    Append a dose event to the administration log.

    A missed or refused dose raises one missed_dose alert carrying the
    event's notes as the reason. The event is stored even if the alert
    cannot be.

    Args:
        db: Database session
        data: Dose event
        notifier: Notification collaborator for the alert

    Returns:
        MedicationAdministration: Stored event

    Raises:
        ResourceNotFoundException: If the medication does not exist
        ValidationException: If the medication belongs to another patient
    """
    medication = get_medication(db, data.medication_id)
    if medication.patient_id != data.patient_id:
        raise ValidationException("Medication does not belong to this patient")

    values = data.model_dump()
    values["scheduled_time"] = ensure_utc(values["scheduled_time"])
    values["administered_time"] = ensure_utc(values["administered_time"])

    administration = MedicationAdministration(**values)
    db.add(administration)
    commit_or_raise(db, "recording a medication administration")
    db.refresh(administration)
    logger.info(
        f"Administration {administration.id} recorded for medication {data.medication_id}: "
        f"{data.status.value}"
    )

    if data.status in ALERTING_STATUSES:
        raise_alert(
            db,
            AlertCreate(
                patient_id=data.patient_id,
                medication_id=data.medication_id,
                alert_type=AlertType.MISSED_DOSE,
                severity=MISSED_DOSE_SEVERITY,
                message=f"Medication dose {data.status.value}: {data.notes or 'No reason provided'}",
            ),
            notifier,
        )

    return administration

def list_administrations(
    db: Session,
    patient_id: str,
    medication_id: Optional[str] = None,
) -> List[MedicationAdministration]:
    """
    List dose events for a patient in scheduled order.

    Args:
        db: Database session
        patient_id: Patient to list events for
        medication_id: Optional medication filter
    """
    query = db.query(MedicationAdministration).filter(MedicationAdministration.patient_id == patient_id)
    if medication_id:
        query = query.filter(MedicationAdministration.medication_id == medication_id)
    return query.order_by(MedicationAdministration.scheduled_time, MedicationAdministration.created_at).all()
