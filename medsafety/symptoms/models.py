"""
Patient Symptom Report Model - Structured, patient-submitted observations.
"""
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text, ForeignKey, JSON
from ..database import Base, generate_uuid
from ..core.timeutils import utcnow

class PatientSymptomReport(Base):
    """
    Patient Symptom Report Model

    Fields:
    - id: UUID primary key
    - patient_id: Reporting patient
    - medication_id: Medication suspected of causing the symptoms, if any
    - symptoms: Symptom tags
    - severity: 1 (mild) to 5 (severe)
    - description: Patient's own description; stored, not interpreted
    - started_at / reported_at: When symptoms began and were reported
    - follow_up_required: severity >= 3, fixed at creation
    - reviewed_by / reviewed_at / review_notes / action_taken / follow_up_date: Review fields
    - is_resolved / resolved_at: Resolution state
    """
    __tablename__ = "patient_symptom_reports"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    patient_id = Column(String, nullable=False, index=True)
    medication_id = Column(String(36), ForeignKey("medications.id", ondelete="SET NULL"), nullable=True)
    symptoms = Column(JSON, nullable=False, default=list)
    severity = Column(Integer, nullable=False)
    description = Column(Text, nullable=False, default="")
    started_at = Column(DateTime(timezone=True), nullable=True)
    reported_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    follow_up_required = Column(Boolean, nullable=False)
    reviewed_by = Column(String, nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    review_notes = Column(Text, nullable=True)
    action_taken = Column(Text, nullable=True)
    follow_up_date = Column(DateTime(timezone=True), nullable=True)
    is_resolved = Column(Boolean, nullable=False, default=False)
    resolved_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<PatientSymptomReport(id={self.id}, patient_id={self.patient_id}, severity={self.severity})>"
