"""
Administration Router - API endpoints for recording dose events.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..alerts.notifier import AlertNotifier, get_notifier
from .schemas import AdministrationCreate, AdministrationResponse
from .service import record_administration, list_administrations

router = APIRouter()

@router.post("/", response_model=AdministrationResponse, status_code=status.HTTP_201_CREATED)
def record_dose(
    data: AdministrationCreate,
    db: Session = Depends(get_db),
    notifier: AlertNotifier = Depends(get_notifier)
):
    """
    Record a dose event

    Missed and refused doses raise a missed-dose alert.
    """
    return record_administration(db, data, notifier)

@router.get("/", response_model=List[AdministrationResponse])
def read_administrations(
    patient_id: str = Query(..., description="Patient whose dose events to list"),
    medication_id: Optional[str] = Query(None, description="Filter by medication"),
    db: Session = Depends(get_db)
):
    """
    List dose events for a patient
    """
    return list_administrations(db, patient_id, medication_id)
