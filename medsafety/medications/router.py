"""
Medication Router - API endpoints for the prescription lifecycle.
"""
from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from ..exceptions import ResourceNotFoundException
from ..alerts.notifier import AlertNotifier, get_notifier
from ..alerts.schemas import AlertResponse
from ..interactions.schemas import InteractionResponse
from ..schedules.service import get_active_schedule
from .schemas import (
    MedicationCreate,
    MedicationUpdateRequest,
    DiscontinueRequest,
    MedicationResponse,
    PrescriptionResult,
    ScheduleResponse,
)
from .service import (
    create_medication,
    get_medication,
    list_medications,
    update_medication,
    discontinue_medication,
)

router = APIRouter()

@router.post("/", response_model=PrescriptionResult, status_code=status.HTTP_201_CREATED)
def prescribe_medication(
    data: MedicationCreate,
    db: Session = Depends(get_db),
    notifier: AlertNotifier = Depends(get_notifier)
):
    """
    Prescribe a medication

    The prescription is always stored. Interactions with the patient's other
    active medications and the alerts raised for them are returned alongside
    so the client can ask for an override.
    """
    medication, interactions, alerts = create_medication(db, data, notifier)
    return PrescriptionResult(
        medication=MedicationResponse.model_validate(medication),
        interactions=[InteractionResponse.model_validate(i) for i in interactions],
        alerts=[AlertResponse.model_validate(a) for a in alerts],
    )

@router.get("/", response_model=List[MedicationResponse])
def list_patient_medications(
    patient_id: str = Query(..., description="Patient whose medications to list"),
    active_only: bool = Query(False, description="Only return active medications"),
    db: Session = Depends(get_db)
):
    """
    List a patient's medications
    """
    return list_medications(db, patient_id, active_only)

@router.get("/{medication_id}", response_model=MedicationResponse)
def read_medication(medication_id: str, db: Session = Depends(get_db)):
    """
    Get a medication by ID
    """
    return get_medication(db, medication_id)

@router.get("/{medication_id}/schedule", response_model=ScheduleResponse)
def read_medication_schedule(medication_id: str, db: Session = Depends(get_db)):
    """
    Get the active dosing schedule of a medication

    PRN and discontinued medications have no active schedule.
    """
    get_medication(db, medication_id)
    schedule = get_active_schedule(db, medication_id)
    if schedule is None:
        raise ResourceNotFoundException("Medication has no active schedule")
    return schedule

@router.patch("/{medication_id}", response_model=MedicationResponse)
def modify_medication(
    medication_id: str,
    request: MedicationUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Update a medication

    Changing the frequency regenerates the dosing schedule.
    """
    return update_medication(db, medication_id, request.changes, request.updated_by)

@router.post("/{medication_id}/discontinue", response_model=MedicationResponse)
def discontinue(
    medication_id: str,
    request: DiscontinueRequest,
    db: Session = Depends(get_db),
    notifier: AlertNotifier = Depends(get_notifier)
):
    """
    Discontinue a medication

    Deactivates the medication and its schedule and raises a discontinuation alert.
    """
    return discontinue_medication(db, medication_id, request.discontinued_by, request.reason, notifier)
