"""
Medication Schemas - Pydantic models for prescription data validation and serialization.

Required free-text fields are checked for blankness by the registry service so
that direct callers and API callers get the same ValidationException.
"""
from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import datetime
from .models import MedicationFrequency, MedicationRoute, MedicationCategory, MedicationPriority
from ..alerts.schemas import AlertResponse
from ..interactions.schemas import InteractionResponse

class MedicationCreate(BaseModel):
    """
    Medication Create Schema - Used when prescribing a medication

    Fields:
    - patient_id: Patient receiving the prescription
    - prescribed_by: Reviewer prescribing it
    - medication_name: Drug name used for interaction checks
    - dosage: Dosage string
    - frequency: Frequency code; ignored for scheduling when is_prn is set
    - route: Administration route
    - instructions: Administration instructions
    - is_prn: As-needed medication without a fixed schedule
    """
    patient_id: str = Field(..., min_length=1)
    prescribed_by: str = Field(..., min_length=1)
    medication_name: str
    generic_name: Optional[str] = None
    dosage: str
    frequency: MedicationFrequency
    route: MedicationRoute = MedicationRoute.ORAL
    category: MedicationCategory = MedicationCategory.OTHER
    priority: MedicationPriority = MedicationPriority.MEDIUM
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    instructions: str
    is_prn: bool = False
    prn_condition: Optional[str] = None
    max_daily_doses: Optional[int] = Field(None, ge=1)
    notes: Optional[str] = None

    class Config:
        """Configuration for Pydantic model"""
        json_schema_extra = {
            "example": {
                "patient_id": "patient-123",
                "prescribed_by": "reviewer-7",
                "medication_name": "Warfarin",
                "dosage": "5mg",
                "frequency": "once_daily",
                "route": "oral",
                "instructions": "Take with water in the morning",
                "is_prn": False
            }
        }

class MedicationUpdate(BaseModel):
    """
    Medication Update Schema - Partial update; only fields that are set are applied

    Changing frequency (or the PRN flag) regenerates the dosing schedule.
    """
    medication_name: Optional[str] = None
    generic_name: Optional[str] = None
    dosage: Optional[str] = None
    frequency: Optional[MedicationFrequency] = None
    route: Optional[MedicationRoute] = None
    category: Optional[MedicationCategory] = None
    priority: Optional[MedicationPriority] = None
    end_date: Optional[datetime] = None
    instructions: Optional[str] = None
    is_prn: Optional[bool] = None
    prn_condition: Optional[str] = None
    max_daily_doses: Optional[int] = Field(None, ge=1)
    notes: Optional[str] = None

class MedicationUpdateRequest(BaseModel):
    updated_by: str = Field(..., min_length=1)
    changes: MedicationUpdate

class DiscontinueRequest(BaseModel):
    discontinued_by: str = Field(..., min_length=1)
    reason: Optional[str] = None

class MedicationResponse(BaseModel):
    id: str
    patient_id: str
    prescribed_by: str
    medication_name: str
    generic_name: Optional[str] = None
    dosage: str
    frequency: MedicationFrequency
    route: MedicationRoute
    category: MedicationCategory
    priority: MedicationPriority
    start_date: datetime
    end_date: Optional[datetime] = None
    is_active: bool
    is_prn: bool
    prn_condition: Optional[str] = None
    max_daily_doses: Optional[int] = None
    instructions: str
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    last_modified_by: Optional[str] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True

class PrescriptionResult(BaseModel):
    """
    Prescription Result Schema - Returned when a medication is created

    Fields:
    - medication: The stored medication
    - interactions: Interactions with the patient's other active medications
    - alerts: Alerts raised for those interactions
    """
    medication: MedicationResponse
    interactions: List[InteractionResponse]
    alerts: List[AlertResponse]

class ScheduleResponse(BaseModel):
    id: str
    medication_id: str
    patient_id: str
    scheduled_times: List[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True
