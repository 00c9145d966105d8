"""
Symptom Schemas - Pydantic models for symptom reports and their review.

Severity is range-checked by the symptom service rather than here so that
out-of-range values surface as the engine's ValidationException.
"""
from typing import List, Optional
from pydantic import BaseModel, Field
from datetime import datetime

class SymptomReportCreate(BaseModel):
    """
    Symptom Report Create Schema

    Fields:
    - patient_id: Reporting patient
    - medication_id: Medication suspected of causing the symptoms, if any
    - symptoms: Symptom tags, e.g. ["nausea", "dizziness"]
    - severity: 1 (mild) to 5 (severe)
    - description: Free-text description
    - started_at: When the symptoms started
    """
    patient_id: str = Field(..., min_length=1)
    medication_id: Optional[str] = None
    symptoms: List[str] = Field(default_factory=list)
    severity: int
    description: str = ""
    started_at: Optional[datetime] = None

    class Config:
        """Configuration for Pydantic model"""
        json_schema_extra = {
            "example": {
                "patient_id": "patient-123",
                "symptoms": ["dizziness", "nausea"],
                "severity": 4,
                "description": "Dizzy since this morning's dose",
                "started_at": "2026-10-19T09:00:00Z"
            }
        }

class SymptomReview(BaseModel):
    """
    Symptom Review Schema - Reviewer's assessment of a report

    Fields:
    - reviewed_by: Reviewer ID
    - review_notes: Assessment notes
    - action_taken: What was done
    - is_resolved: Set true to mark the report resolved now; false reopens it
    - follow_up_date: Planned follow-up
    """
    reviewed_by: str = Field(..., min_length=1)
    review_notes: str
    action_taken: Optional[str] = None
    is_resolved: Optional[bool] = None
    follow_up_date: Optional[datetime] = None

class SymptomReportResponse(BaseModel):
    id: str
    patient_id: str
    medication_id: Optional[str] = None
    symptoms: List[str]
    severity: int
    description: str
    started_at: Optional[datetime] = None
    reported_at: datetime
    follow_up_required: bool
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    review_notes: Optional[str] = None
    action_taken: Optional[str] = None
    follow_up_date: Optional[datetime] = None
    is_resolved: bool
    resolved_at: Optional[datetime] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True
