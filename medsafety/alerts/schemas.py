"""
Alert Schemas - Pydantic models for alert data validation and serialization.
"""
from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
from .models import AlertType, AlertSeverity

class AlertCreate(BaseModel):
    """
    Alert Create Schema - Used by the engine components to raise an alert

    Fields:
    - patient_id: Patient the alert concerns
    - medication_id: Related medication, if any
    - alert_type: interaction, missed_dose, side_effect, discontinuation or other
    - severity: low, medium, high or critical
    - message: Summary shown to reviewers
    - action_required: Suggested follow-up action
    """
    patient_id: str = Field(..., min_length=1)
    medication_id: Optional[str] = None
    alert_type: AlertType
    severity: AlertSeverity
    message: str = Field(..., min_length=1)
    action_required: Optional[str] = None

class AlertAcknowledge(BaseModel):
    acknowledged_by: str = Field(..., min_length=1, description="ID of the user acknowledging the alert")

class AlertResponse(BaseModel):
    id: str
    patient_id: str
    medication_id: Optional[str] = None
    alert_type: AlertType
    severity: AlertSeverity
    message: str
    action_required: Optional[str] = None
    is_acknowledged: bool
    acknowledged_by: Optional[str] = None
    acknowledged_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True
