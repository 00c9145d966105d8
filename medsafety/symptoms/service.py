"""
Symptom Service - Symptom intake and review.
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from ..database import commit_or_raise
from ..exceptions import ResourceNotFoundException, ValidationException
from ..core.timeutils import ensure_utc, utcnow
from ..alerts.models import AlertType
from ..alerts.notifier import AlertNotifier
from ..alerts.schemas import AlertCreate
from ..alerts.service import raise_alert, severity_for_symptom
from ..medications.service import get_medication
from .models import PatientSymptomReport
from .schemas import SymptomReportCreate, SymptomReview

# Set up logging
logger = logging.getLogger(__name__)

MIN_SEVERITY = 1
MAX_SEVERITY = 5
FOLLOW_UP_THRESHOLD = 3

def report_symptom(
    db: Session,
    data: SymptomReportCreate,
    notifier: Optional[AlertNotifier] = None,
) -> PatientSymptomReport:
    """
    Store a patient's symptom report.

    Follow-up is required from severity 3 upwards. Severity 4 raises a high
    side-effect alert and severity 5 a critical one.

    Args:
        db: Database session
        data: Report fields
        notifier: Notification collaborator for the alert

    Returns:
        PatientSymptomReport: Stored report

    Raises:
        ValidationException: If severity is outside 1-5
        ResourceNotFoundException: If the linked medication does not exist
    """
    if not MIN_SEVERITY <= data.severity <= MAX_SEVERITY:
        raise ValidationException(f"Severity must be between {MIN_SEVERITY} and {MAX_SEVERITY}")
    if data.medication_id:
        get_medication(db, data.medication_id)

    report = PatientSymptomReport(
        patient_id=data.patient_id,
        medication_id=data.medication_id,
        symptoms=list(data.symptoms),
        severity=data.severity,
        description=data.description,
        started_at=ensure_utc(data.started_at),
        reported_at=utcnow(),
        is_resolved=False,
        follow_up_required=data.severity >= FOLLOW_UP_THRESHOLD,
    )
    db.add(report)
    commit_or_raise(db, "storing a symptom report")
    db.refresh(report)
    logger.info(f"Symptom report {report.id} (severity {report.severity}) stored for patient {report.patient_id}")

    alert_severity = severity_for_symptom(data.severity)
    if alert_severity is not None:
        raise_alert(
            db,
            AlertCreate(
                patient_id=data.patient_id,
                medication_id=data.medication_id,
                alert_type=AlertType.SIDE_EFFECT,
                severity=alert_severity,
                message=f"Severe symptoms reported: {', '.join(data.symptoms)}",
                action_required="Immediate medical review required",
            ),
            notifier,
        )

    return report

def get_symptom_report(db: Session, report_id: str) -> PatientSymptomReport:
    report = db.query(PatientSymptomReport).filter(PatientSymptomReport.id == report_id).first()
    if not report:
        raise ResourceNotFoundException("Symptom report not found")
    return report

def list_symptom_reports(db: Session, patient_id: str) -> List[PatientSymptomReport]:
    return (
        db.query(PatientSymptomReport)
        .filter(PatientSymptomReport.patient_id == patient_id)
        .order_by(PatientSymptomReport.reported_at.desc())
        .all()
    )

def review_symptom_report(db: Session, report_id: str, review: SymptomReview) -> PatientSymptomReport:
    """
    Record a reviewer's assessment of a symptom report.

    follow_up_required is left as computed at creation. resolved_at is set
    only when is_resolved is explicitly true and cleared when it is
    explicitly false.

    Args:
        db: Database session
        report_id: ID of the report
        review: Review fields

    Returns:
        PatientSymptomReport: Reviewed report

    Raises:
        ResourceNotFoundException: If the report does not exist
    """
    report = get_symptom_report(db, report_id)
    now = utcnow()

    report.reviewed_by = review.reviewed_by
    report.review_notes = review.review_notes
    report.reviewed_at = now
    if review.action_taken is not None:
        report.action_taken = review.action_taken
    if review.follow_up_date is not None:
        report.follow_up_date = ensure_utc(review.follow_up_date)
    if review.is_resolved is True:
        report.is_resolved = True
        report.resolved_at = now
    elif review.is_resolved is False:
        report.is_resolved = False
        report.resolved_at = None

    commit_or_raise(db, f"reviewing symptom report {report_id}")
    db.refresh(report)
    logger.info(f"Symptom report {report_id} reviewed by {review.reviewed_by}")
    return report
