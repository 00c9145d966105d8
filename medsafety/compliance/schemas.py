"""
Compliance Schemas - Adherence report returned by the compliance calculator.
"""
import enum
from typing import List
from pydantic import BaseModel
from datetime import datetime


class ComplianceWindow(str, enum.Enum):
    LAST_24_HOURS = "24h"
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"


class MissedDose(BaseModel):
    """
    Missed Dose Schema - One missed slot for display

    Fields:
    - date: Scheduled date (YYYY-MM-DD, UTC)
    - time: Scheduled time (HH:MM, UTC)
    - reason: Notes recorded with the event
    """
    date: str
    time: str
    reason: str


class ComplianceReport(BaseModel):
    """
    Compliance Report Schema - Adherence over a time window

    Fields:
    - time_range: Window the report covers
    - total_scheduled: Days in the window times doses per day
    - total_administered: Administered and partial events
    - total_missed / total_refused: Missed and refused events
    - compliance_rate: administered / scheduled * 100, or 0 when nothing is scheduled
    - missed_doses: Missed events in the window
    - generated_at: Reference time used for the window
    """
    patient_id: str
    medication_id: str
    time_range: ComplianceWindow
    window_start: datetime
    total_scheduled: int
    total_administered: int
    total_missed: int
    total_refused: int
    compliance_rate: float
    missed_doses: List[MissedDose]
    generated_at: datetime
