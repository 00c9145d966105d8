"""
Compliance Service - Time-windowed adherence statistics.

The number of scheduled doses is approximated as days-in-window times doses
per day of the currently active schedule. It does not walk the calendar, so a
schedule change inside the window is not reflected. Reported adherence
figures depend on this approximation; keep it unless they are meant to change.

Nothing in this module writes to the database.
"""
from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy.orm import Session

from ..exceptions import ResourceNotFoundException, ScheduleUndefinedException
from ..core.timeutils import ensure_utc, utcnow
from ..administrations.models import AdministrationStatus, MedicationAdministration
from ..medications.service import get_medication
from ..schedules.service import get_active_schedule
from .schemas import ComplianceReport, ComplianceWindow, MissedDose

WINDOW_DAYS = {
    ComplianceWindow.LAST_24_HOURS: 1,
    ComplianceWindow.LAST_7_DAYS: 7,
    ComplianceWindow.LAST_30_DAYS: 30,
    ComplianceWindow.LAST_90_DAYS: 90,
}

TAKEN_STATUSES = (AdministrationStatus.ADMINISTERED, AdministrationStatus.PARTIAL)

def compliance_rate(total_administered: int, total_scheduled: int) -> float:
    if total_scheduled <= 0:
        return 0.0
    return total_administered / total_scheduled * 100

def calculate_compliance(
    db: Session,
    patient_id: str,
    medication_id: str,
    window: ComplianceWindow,
    now: Optional[datetime] = None,
) -> ComplianceReport:
    """
    Calculate adherence for one medication over a time window.

    Args:
        db: Database session
        patient_id: Patient the medication belongs to
        medication_id: ID of the medication
        window: 24h, 7d, 30d or 90d
        now: Reference time; defaults to the current time

    Returns:
        ComplianceReport: Counts, rate and missed doses for the window

    Raises:
        ResourceNotFoundException: If the medication does not exist for this patient
        ScheduleUndefinedException: If the medication has no active schedule (e.g. PRN)
    """
    window = ComplianceWindow(window)
    now = ensure_utc(now) if now is not None else utcnow()

    medication = get_medication(db, medication_id)
    if medication.patient_id != patient_id:
        raise ResourceNotFoundException("Medication not found")

    schedule = get_active_schedule(db, medication_id)
    if schedule is None:
        raise ScheduleUndefinedException(
            f"Compliance is undefined for {medication.medication_name}: no active schedule"
        )

    days = WINDOW_DAYS[window]
    window_start = now - timedelta(days=days)
    total_scheduled = days * len(schedule.scheduled_times)

    events = [
        event
        for event in (
            db.query(MedicationAdministration)
            .filter(
                MedicationAdministration.patient_id == patient_id,
                MedicationAdministration.medication_id == medication_id,
            )
            .order_by(MedicationAdministration.scheduled_time)
            .all()
        )
        if ensure_utc(event.scheduled_time) >= window_start
    ]

    total_administered = sum(1 for e in events if e.status in TAKEN_STATUSES)
    total_missed = sum(1 for e in events if e.status == AdministrationStatus.MISSED)
    total_refused = sum(1 for e in events if e.status == AdministrationStatus.REFUSED)

    missed_doses = []
    for event in events:
        if event.status != AdministrationStatus.MISSED:
            continue
        scheduled = ensure_utc(event.scheduled_time)
        missed_doses.append(
            MissedDose(
                date=scheduled.strftime("%Y-%m-%d"),
                time=scheduled.strftime("%H:%M"),
                reason=event.notes or "No reason provided",
            )
        )

    return ComplianceReport(
        patient_id=patient_id,
        medication_id=medication_id,
        time_range=window,
        window_start=window_start,
        total_scheduled=total_scheduled,
        total_administered=total_administered,
        total_missed=total_missed,
        total_refused=total_refused,
        compliance_rate=compliance_rate(total_administered, total_scheduled),
        missed_doses=missed_doses,
        generated_at=now,
    )
