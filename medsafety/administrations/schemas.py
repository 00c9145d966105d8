"""
Administration Schemas - Pydantic models for dose events.
"""
from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import datetime
from .models import AdministrationStatus, PatientResponse

class AdministrationCreate(BaseModel):
    """
    Administration Create Schema - Used when a caregiver records a dose event

    Fields:
    - medication_id: Medication the dose belongs to
    - patient_id: Patient receiving the dose; must own the medication
    - scheduled_time: Slot being recorded
    - status: administered, partial, missed, refused, delayed, cancelled or pending
    - notes: For missed and refused doses this is the reason carried into the alert
    """
    medication_id: str = Field(..., min_length=1)
    patient_id: str = Field(..., min_length=1)
    administered_by: Optional[str] = None
    scheduled_time: datetime
    administered_time: Optional[datetime] = None
    status: AdministrationStatus
    dosage_given: Optional[str] = None
    notes: Optional[str] = None
    side_effects_observed: List[str] = Field(default_factory=list)
    patient_response: Optional[PatientResponse] = None
    witnessed_by: Optional[str] = None

    class Config:
        """Configuration for Pydantic model"""
        json_schema_extra = {
            "example": {
                "medication_id": "6f1c2d0e-3b1a-4f7e-9a55-0d2b7f1c9e10",
                "patient_id": "patient-123",
                "administered_by": "caregiver-4",
                "scheduled_time": "2026-10-19T08:00:00Z",
                "administered_time": "2026-10-19T08:05:00Z",
                "status": "administered",
                "dosage_given": "5mg"
            }
        }

class AdministrationResponse(BaseModel):
    id: str
    medication_id: str
    patient_id: str
    administered_by: Optional[str] = None
    scheduled_time: datetime
    administered_time: Optional[datetime] = None
    status: AdministrationStatus
    dosage_given: Optional[str] = None
    notes: Optional[str] = None
    side_effects_observed: List[str] = []
    patient_response: Optional[PatientResponse] = None
    witnessed_by: Optional[str] = None
    created_at: datetime

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True
