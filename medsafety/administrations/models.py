"""
Medication Administration Model - Append-only log of dose events.

Rows are never updated or deleted. Corrections and late entries are recorded
as new events against the same scheduled slot.
"""
import enum
from sqlalchemy import Column, String, DateTime, Text, ForeignKey, JSON, Enum
from ..database import Base, generate_uuid
from ..core.timeutils import utcnow


class AdministrationStatus(str, enum.Enum):
    PENDING = "pending"
    ADMINISTERED = "administered"
    PARTIAL = "partial"
    MISSED = "missed"
    REFUSED = "refused"
    DELAYED = "delayed"
    CANCELLED = "cancelled"


class PatientResponse(str, enum.Enum):
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    ADVERSE = "adverse"


class MedicationAdministration(Base):
    """
    Medication Administration Model - One dose event

    Fields:
    - id: UUID primary key
    - medication_id / patient_id: What was due and for whom
    - administered_by: Caregiver recording the event
    - scheduled_time: Slot the event refers to
    - administered_time: When the dose was actually given
    - status: Outcome of the slot
    - dosage_given: Actual dosage, which may differ for partial doses
    - notes: Free text; used as the reason for missed and refused doses
    - side_effects_observed: Observed side effects
    - patient_response: good, fair, poor or adverse
    - witnessed_by: Witness for controlled substances
    - created_at: When the event was recorded
    """
    __tablename__ = "medication_administrations"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    medication_id = Column(String(36), ForeignKey("medications.id", ondelete="CASCADE"), nullable=False, index=True)
    patient_id = Column(String, nullable=False, index=True)
    administered_by = Column(String, nullable=True)
    scheduled_time = Column(DateTime(timezone=True), nullable=False, index=True)
    administered_time = Column(DateTime(timezone=True), nullable=True)
    status = Column(Enum(AdministrationStatus), nullable=False)
    dosage_given = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    side_effects_observed = Column(JSON, nullable=False, default=list)
    patient_response = Column(Enum(PatientResponse), nullable=True)
    witnessed_by = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return (
            f"<MedicationAdministration(id={self.id}, medication_id={self.medication_id}, "
            f"status={self.status}, scheduled_time={self.scheduled_time})>"
        )
