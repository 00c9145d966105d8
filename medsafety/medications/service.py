"""
Medication Service - Prescription lifecycle.

This module creates, updates and discontinues medications. Creation and
discontinuation are multi-step writes (medication, schedule, alerts) and run
under the per-patient lock; the medication and schedule are committed
together, while alerts are raised best-effort afterwards.
"""
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
import logging

from ..config import settings
from ..database import commit_or_raise, generate_uuid
from ..exceptions import ResourceNotFoundException, ValidationException
from ..core.locks import patient_lock
from ..core.timeutils import ensure_utc, utcnow
from ..alerts.models import AlertType, MedicationAlert
from ..alerts.notifier import AlertNotifier
from ..alerts.schemas import AlertCreate
from ..alerts.service import DISCONTINUATION_SEVERITY, raise_alert, severity_for_interaction
from ..interactions.models import MedicationInteraction
from ..interactions.seed import seed_default_interactions
from ..interactions.service import check_interactions
from ..schedules.service import build_schedule, deactivate_schedules, regenerate_schedule
from .models import Medication
from .schemas import MedicationCreate, MedicationUpdate

# Set up logging
logger = logging.getLogger(__name__)

REQUIRED_TEXT_FIELDS = ("medication_name", "dosage", "instructions")
NON_NULLABLE_FIELDS = REQUIRED_TEXT_FIELDS + ("frequency", "route", "category", "priority", "is_prn")

def _blank_fields(values: dict) -> List[str]:
    return [
        field for field in REQUIRED_TEXT_FIELDS
        if field in values and not (values[field] or "").strip()
    ]

def get_medication(db: Session, medication_id: str) -> Medication:
    """
    Get a medication by ID.

    Args:
        db: Database session
        medication_id: ID of the medication

    Returns:
        Medication: Medication record

    Raises:
        ResourceNotFoundException: If the medication does not exist
    """
    medication = db.query(Medication).filter(Medication.id == medication_id).first()
    if not medication:
        raise ResourceNotFoundException("Medication not found")
    return medication

def list_medications(db: Session, patient_id: str, active_only: bool = False) -> List[Medication]:
    query = db.query(Medication).filter(Medication.patient_id == patient_id)
    if active_only:
        query = query.filter(Medication.is_active.is_(True))
    return query.order_by(Medication.created_at).all()

def _active_medications(db: Session, patient_id: str, exclude_id: str) -> List[Medication]:
    return (
        db.query(Medication)
        .filter(
            Medication.patient_id == patient_id,
            Medication.is_active.is_(True),
            Medication.id != exclude_id,
        )
        .all()
    )

def create_medication(
    db: Session,
    data: MedicationCreate,
    notifier: Optional[AlertNotifier] = None,
) -> Tuple[Medication, List[MedicationInteraction], List[MedicationAlert]]:
    """
    Prescribe a medication.

    The medication and, unless it is PRN, its dosing schedule are stored in
    one commit. The patient's other active medications are then checked for
    interactions and each interaction raises an alert. Interactions never
    block the prescription; they are returned so the caller can react.

    Args:
        db: Database session
        data: Prescription fields
        notifier: Notification collaborator for raised alerts

    Returns:
        Tuple containing:
        - The stored medication
        - Interactions with other active medications
        - Alerts raised for those interactions

    Raises:
        ValidationException: If name, dosage or instructions are blank
        InfrastructureException: If the write fails or the patient lock times out
    """
    values = data.model_dump()
    blank = _blank_fields(values)
    if blank:
        raise ValidationException(f"Missing required fields: {', '.join(blank)}")

    for field in REQUIRED_TEXT_FIELDS:
        values[field] = values[field].strip()
    values["start_date"] = ensure_utc(values["start_date"]) if values["start_date"] is not None else utcnow()
    values["end_date"] = ensure_utc(values["end_date"])

    # Seeding runs outside the patient lock
    if settings.seed_interactions:
        seed_default_interactions(db)

    with patient_lock(db, data.patient_id):
        medication = Medication(
            id=generate_uuid(),
            is_active=True,
            last_modified_by=data.prescribed_by,
            **values,
        )
        others = _active_medications(db, medication.patient_id, medication.id)
        interactions = check_interactions(db, medication, others)

        db.add(medication)
        db.flush()
        if not medication.is_prn:
            db.add(build_schedule(medication))
        commit_or_raise(db, "creating a medication")
        db.refresh(medication)
        logger.info(
            f"Medication {medication.id} ({medication.medication_name}) prescribed for patient "
            f"{medication.patient_id} by {medication.prescribed_by}"
        )

        alerts = []
        for interaction in interactions:
            alert = raise_alert(
                db,
                AlertCreate(
                    patient_id=medication.patient_id,
                    medication_id=medication.id,
                    alert_type=AlertType.INTERACTION,
                    severity=severity_for_interaction(interaction.interaction_type),
                    message=f"Drug interaction detected: {interaction.description}",
                    action_required=interaction.recommendation,
                ),
                notifier,
            )
            if alert is not None:
                alerts.append(alert)

    return medication, interactions, alerts

def update_medication(
    db: Session,
    medication_id: str,
    changes: MedicationUpdate,
    updated_by: str,
) -> Medication:
    """
    Apply a partial update to a medication.

    When the frequency or PRN flag changes, the active schedule is deleted
    and generated again from the new values.

    Args:
        db: Database session
        medication_id: ID of the medication
        changes: Fields to change; unset fields are left alone
        updated_by: ID of the user making the update

    Returns:
        Medication: Updated medication

    Raises:
        ResourceNotFoundException: If the medication does not exist
        ValidationException: If a required field is set to null or blank
    """
    medication = get_medication(db, medication_id)

    update_data = changes.model_dump(exclude_unset=True)
    nulled = [field for field in NON_NULLABLE_FIELDS if field in update_data and update_data[field] is None]
    if nulled:
        raise ValidationException(f"Fields cannot be null: {', '.join(nulled)}")
    blank = _blank_fields(update_data)
    if blank:
        raise ValidationException(f"Fields cannot be blank: {', '.join(blank)}")
    if "end_date" in update_data:
        update_data["end_date"] = ensure_utc(update_data["end_date"])

    reschedule = (
        ("frequency" in update_data and update_data["frequency"] != medication.frequency)
        or ("is_prn" in update_data and update_data["is_prn"] != medication.is_prn)
    )

    for field, value in update_data.items():
        setattr(medication, field, value.strip() if field in REQUIRED_TEXT_FIELDS else value)
    medication.touch(updated_by)

    if reschedule:
        regenerate_schedule(db, medication)

    commit_or_raise(db, f"updating medication {medication_id}")
    db.refresh(medication)
    logger.info(f"Medication {medication_id} updated by {updated_by}")
    return medication

def discontinue_medication(
    db: Session,
    medication_id: str,
    discontinued_by: str,
    reason: Optional[str] = None,
    notifier: Optional[AlertNotifier] = None,
) -> Medication:
    """
    Discontinue a medication.

    The medication is deactivated with an end date, the reason is appended to
    its notes and its schedule is deactivated, all in one commit. A
    discontinuation alert follows; if the alert cannot be stored the
    discontinuation still stands.

    Args:
        db: Database session
        medication_id: ID of the medication
        discontinued_by: ID of the user discontinuing it
        reason: Optional free-text reason
        notifier: Notification collaborator for the alert

    Returns:
        Medication: Discontinued medication

    Raises:
        ResourceNotFoundException: If the medication does not exist
        ValidationException: If the medication is already discontinued
    """
    medication = get_medication(db, medication_id)

    with patient_lock(db, medication.patient_id):
        db.refresh(medication)
        if not medication.is_active:
            raise ValidationException("Medication is already discontinued")

        now = utcnow()
        entry = f"Discontinued: {reason or 'No reason specified'}"
        medication.notes = f"{medication.notes}\n\n{entry}" if medication.notes else entry
        medication.is_active = False
        medication.end_date = now
        medication.touch(discontinued_by)
        deactivate_schedules(db, medication.id)
        commit_or_raise(db, f"discontinuing medication {medication_id}")
        db.refresh(medication)
        logger.info(f"Medication {medication_id} discontinued by {discontinued_by}")

        raise_alert(
            db,
            AlertCreate(
                patient_id=medication.patient_id,
                medication_id=medication.id,
                alert_type=AlertType.DISCONTINUATION,
                severity=DISCONTINUATION_SEVERITY,
                message=f"Medication {medication.medication_name} has been discontinued",
                action_required="Inform patient and update care plan",
            ),
            notifier,
        )

    return medication
