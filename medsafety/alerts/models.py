"""
Medication Alert Model - Engine-generated, acknowledgeable safety notices.
"""
import enum
from sqlalchemy import Column, String, Boolean, DateTime, Text, ForeignKey, Enum
from ..database import Base, generate_uuid
from ..core.timeutils import utcnow


class AlertType(str, enum.Enum):
    INTERACTION = "interaction"
    MISSED_DOSE = "missed_dose"
    SIDE_EFFECT = "side_effect"
    DISCONTINUATION = "discontinuation"
    OTHER = "other"


class AlertSeverity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class MedicationAlert(Base):
    """
    Medication Alert Model - One alert per triggering event

    Fields:
    - id: UUID primary key
    - patient_id: Patient the alert concerns
    - medication_id: Related medication, if any
    - alert_type / severity: Closed vocabularies
    - message: Human-readable summary
    - action_required: What the reviewer should do
    - is_acknowledged / acknowledged_by / acknowledged_at: The only mutable state
    - created_at: When the alert was raised
    """
    __tablename__ = "medication_alerts"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    patient_id = Column(String, nullable=False, index=True)
    medication_id = Column(String(36), ForeignKey("medications.id", ondelete="SET NULL"), nullable=True, index=True)
    alert_type = Column(Enum(AlertType), nullable=False)
    severity = Column(Enum(AlertSeverity), nullable=False)
    message = Column(Text, nullable=False)
    action_required = Column(Text, nullable=True)
    is_acknowledged = Column(Boolean, nullable=False, default=False)
    acknowledged_by = Column(String, nullable=True)
    acknowledged_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)

    def __repr__(self):
        return (
            f"<MedicationAlert(id={self.id}, patient_id={self.patient_id}, "
            f"type={self.alert_type}, severity={self.severity})>"
        )
