"""
Compliance Router - Adherence queries.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from .schemas import ComplianceReport, ComplianceWindow
from .service import calculate_compliance

router = APIRouter()

@router.get("/{patient_id}/{medication_id}", response_model=ComplianceReport)
def read_compliance(
    patient_id: str,
    medication_id: str,
    window: ComplianceWindow = Query(ComplianceWindow.LAST_7_DAYS, description="24h, 7d, 30d or 90d"),
    db: Session = Depends(get_db)
):
    """
    Get medication adherence over a time window

    Returns 409 for medications without an active schedule (PRN or discontinued).
    """
    return calculate_compliance(db, patient_id, medication_id, window)
