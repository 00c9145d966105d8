"""
Medication Schedule Model - Daily clock times at which a medication is due.
"""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from ..database import Base, generate_uuid
from ..medications.models import Medication
from ..core.timeutils import utcnow

class MedicationSchedule(Base):
    """
    Medication Schedule Model - Derived from a non-PRN medication

    Fields:
    - id: UUID primary key
    - medication_id: Medication the schedule was generated for
    - patient_id: Owning patient, denormalized for per-patient queries
    - scheduled_times: Ordered list of "HH:MM" strings
    - is_active: Only one active schedule exists per active medication
    - created_at / updated_at: Audit fields
    """
    __tablename__ = "medication_schedules"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    medication_id = Column(String(36), ForeignKey("medications.id", ondelete="CASCADE"), nullable=False, index=True)
    patient_id = Column(String, nullable=False, index=True)
    scheduled_times = Column(JSON, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    # Relationships
    medication = relationship(Medication)

    def __repr__(self):
        return f"<MedicationSchedule(id={self.id}, medication_id={self.medication_id}, times={self.scheduled_times})>"

    def deactivate(self) -> None:
        self.is_active = False
        self.updated_at = utcnow()
