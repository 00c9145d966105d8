"""
Medication Model - One row per prescribing decision.

A medication is never deleted; discontinuing it clears the active flag and
sets the end date so the prescribing history stays intact.
"""
import enum
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, Enum
from ..database import Base, generate_uuid
from ..core.timeutils import utcnow


class MedicationFrequency(str, enum.Enum):
    """Prescribed dosing frequency codes"""
    ONCE_DAILY = "once_daily"
    TWICE_DAILY = "twice_daily"
    THREE_TIMES_DAILY = "three_times_daily"
    FOUR_TIMES_DAILY = "four_times_daily"
    EVERY_6_HOURS = "every_6_hours"
    EVERY_8_HOURS = "every_8_hours"
    EVERY_12_HOURS = "every_12_hours"
    WEEKLY = "weekly"
    TWICE_WEEKLY = "twice_weekly"
    MONTHLY = "monthly"
    AS_NEEDED = "as_needed"
    CUSTOM = "custom"


class MedicationRoute(str, enum.Enum):
    """Administration routes"""
    ORAL = "oral"
    SUBLINGUAL = "sublingual"
    INJECTION_IM = "injection_im"
    INJECTION_IV = "injection_iv"
    INJECTION_SC = "injection_sc"
    TOPICAL = "topical"
    INHALATION = "inhalation"
    RECTAL = "rectal"
    NASAL = "nasal"
    EYE_DROPS = "eye_drops"
    EAR_DROPS = "ear_drops"
    PATCH = "patch"


class MedicationCategory(str, enum.Enum):
    """Therapeutic category used for grouping on care plans"""
    PAIN_RELIEF = "pain_relief"
    ANTIBIOTICS = "antibiotics"
    HEART_MEDICATION = "heart_medication"
    BLOOD_PRESSURE = "blood_pressure"
    DIABETES = "diabetes"
    MENTAL_HEALTH = "mental_health"
    VITAMINS = "vitamins"
    SUPPLEMENTS = "supplements"
    RESPIRATORY = "respiratory"
    GASTROINTESTINAL = "gastrointestinal"
    HORMONAL = "hormonal"
    OTHER = "other"


class MedicationPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Medication(Base):
    """
    Medication Model - Stores a patient's prescription

    Fields:
    - id: UUID primary key
    - patient_id: Patient the prescription belongs to
    - prescribed_by: Reviewer who prescribed it
    - medication_name / generic_name: Drug names; interaction lookups use medication_name
    - dosage: Free-form dosage string, e.g. "10mg" or "1 tablet"
    - frequency: Frequency code driving the dosing schedule
    - route, category, priority: Enumerated descriptors
    - start_date / end_date: Prescription period; end_date is set on discontinuation
    - is_active: False once discontinued
    - is_prn: As-needed medication with no fixed schedule
    - prn_condition / max_daily_doses: PRN usage limits
    - instructions / notes: Free text; discontinuation reasons are appended to notes
    - created_at / updated_at / last_modified_by: Audit fields
    """
    __tablename__ = "medications"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    patient_id = Column(String, nullable=False, index=True)
    prescribed_by = Column(String, nullable=False)
    medication_name = Column(String, nullable=False)
    generic_name = Column(String, nullable=True)
    dosage = Column(String, nullable=False)
    frequency = Column(Enum(MedicationFrequency), nullable=False)
    route = Column(Enum(MedicationRoute), nullable=False, default=MedicationRoute.ORAL)
    category = Column(Enum(MedicationCategory), nullable=False, default=MedicationCategory.OTHER)
    priority = Column(Enum(MedicationPriority), nullable=False, default=MedicationPriority.MEDIUM)
    start_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    end_date = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    is_prn = Column(Boolean, nullable=False, default=False)
    prn_condition = Column(String, nullable=True)
    max_daily_doses = Column(Integer, nullable=True)
    instructions = Column(Text, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    last_modified_by = Column(String, nullable=True)

    def __repr__(self):
        """String representation of the Medication model"""
        return f"<Medication(id={self.id}, patient_id={self.patient_id}, name='{self.medication_name}')>"

    def touch(self, actor: str) -> None:
        """
        Stamp the audit fields for a modification.

        Args:
            actor: Id of the user making the change
        """
        self.last_modified_by = actor
        self.updated_at = utcnow()
