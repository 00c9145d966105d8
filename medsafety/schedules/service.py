"""
Schedule Service - Persistence of generated dosing schedules.

These helpers only stage changes on the session; the calling medication
operation owns the commit so medication and schedule change together.
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from ..medications.models import Medication
from .generator import generate_scheduled_times
from .models import MedicationSchedule

# Set up logging
logger = logging.getLogger(__name__)

def get_active_schedule(db: Session, medication_id: str) -> Optional[MedicationSchedule]:
    """
    Get the active schedule of a medication, if any.

    Args:
        db: Database session
        medication_id: ID of the medication

    Returns:
        Optional[MedicationSchedule]: Active schedule or None
    """
    return (
        db.query(MedicationSchedule)
        .filter(
            MedicationSchedule.medication_id == medication_id,
            MedicationSchedule.is_active.is_(True),
        )
        .order_by(MedicationSchedule.created_at.desc())
        .first()
    )

def list_schedules(db: Session, patient_id: str, active_only: bool = True) -> List[MedicationSchedule]:
    query = db.query(MedicationSchedule).filter(MedicationSchedule.patient_id == patient_id)
    if active_only:
        query = query.filter(MedicationSchedule.is_active.is_(True))
    return query.order_by(MedicationSchedule.created_at).all()

def build_schedule(medication: Medication) -> MedicationSchedule:
    """
    Create an active schedule for a non-PRN medication.

    Args:
        medication: Medication to schedule; its id must already be assigned

    Returns:
        MedicationSchedule: Unsaved schedule with times from the frequency table
    """
    return MedicationSchedule(
        medication_id=medication.id,
        patient_id=medication.patient_id,
        scheduled_times=generate_scheduled_times(medication.frequency),
        is_active=True,
    )

def regenerate_schedule(db: Session, medication: Medication) -> Optional[MedicationSchedule]:
    """
    Replace a medication's active schedule.

    The previous active schedule is deleted, never patched. A new one is
    staged only while the medication is active and not PRN.

    Args:
        db: Database session
        medication: Medication whose schedule is rebuilt

    Returns:
        Optional[MedicationSchedule]: The new schedule, or None when none applies
    """
    for schedule in (
        db.query(MedicationSchedule)
        .filter(
            MedicationSchedule.medication_id == medication.id,
            MedicationSchedule.is_active.is_(True),
        )
        .all()
    ):
        db.delete(schedule)

    if not medication.is_active or medication.is_prn:
        logger.info(f"Schedule removed for medication {medication.id}")
        return None

    schedule = build_schedule(medication)
    db.add(schedule)
    logger.info(f"Schedule regenerated for medication {medication.id}: {schedule.scheduled_times}")
    return schedule

def deactivate_schedules(db: Session, medication_id: str) -> int:
    """
    Deactivate every active schedule of a medication.

    Returns:
        int: Number of schedules deactivated
    """
    schedules = (
        db.query(MedicationSchedule)
        .filter(
            MedicationSchedule.medication_id == medication_id,
            MedicationSchedule.is_active.is_(True),
        )
        .all()
    )
    for schedule in schedules:
        schedule.deactivate()
    return len(schedules)
