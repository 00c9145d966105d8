"""
Alert Router - Listing and acknowledging medication alerts.
"""
from typing import List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from .schemas import AlertAcknowledge, AlertResponse
from .service import list_alerts, get_alert, acknowledge_alert

router = APIRouter()

@router.get("/", response_model=List[AlertResponse])
def read_alerts(
    patient_id: str = Query(..., description="Patient whose alerts to list"),
    unacknowledged_only: bool = Query(False, description="Hide acknowledged alerts"),
    db: Session = Depends(get_db)
):
    """
    List a patient's alerts, newest first
    """
    return list_alerts(db, patient_id, unacknowledged_only)

@router.get("/{alert_id}", response_model=AlertResponse)
def read_alert(alert_id: str, db: Session = Depends(get_db)):
    return get_alert(db, alert_id)

@router.post("/{alert_id}/acknowledge", response_model=AlertResponse)
def acknowledge(alert_id: str, request: AlertAcknowledge, db: Session = Depends(get_db)):
    """
    Acknowledge an alert

    Repeating the call is safe; the first acknowledgement is kept.
    """
    return acknowledge_alert(db, alert_id, request.acknowledged_by)
