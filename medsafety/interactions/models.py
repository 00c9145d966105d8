"""
Medication Interaction Model - Reference data for drug-drug interactions.
"""
import enum
from sqlalchemy import Column, String, Boolean, DateTime, Text, Enum
from ..database import Base, generate_uuid
from ..core.timeutils import utcnow


class InteractionType(str, enum.Enum):
    """Clinical risk tier of combining two medications"""
    MINOR = "minor"
    MODERATE = "moderate"
    MAJOR = "major"
    CONTRAINDICATED = "contraindicated"


class MedicationInteraction(Base):
    """
    Medication Interaction Model - One interacting pair

    Fields:
    - id: UUID primary key
    - medication_1 / medication_2: Drug names; the pair is unordered
    - interaction_type: Severity tier
    - description: What happens when the drugs are combined
    - recommendation: Suggested clinical action
    - is_active: Inactive rows are ignored by lookups
    - created_at / updated_at: Audit fields
    """
    __tablename__ = "medication_interactions"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    medication_1 = Column(String, nullable=False, index=True)
    medication_2 = Column(String, nullable=False, index=True)
    interaction_type = Column(Enum(InteractionType), nullable=False)
    description = Column(Text, nullable=False)
    recommendation = Column(Text, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    def __repr__(self):
        return (
            f"<MedicationInteraction(id={self.id}, pair='{self.medication_1}'+'{self.medication_2}', "
            f"type={self.interaction_type})>"
        )

    @property
    def pair_key(self) -> frozenset:
        """Order- and case-independent identity of the drug pair"""
        return pair_key(self.medication_1, self.medication_2)

    def involves(self, first: str, second: str) -> bool:
        """Check whether this row describes the given pair in either order"""
        return self.pair_key == pair_key(first, second)


def normalize_name(name: str) -> str:
    return (name or "").strip().lower()


def pair_key(first: str, second: str) -> frozenset:
    return frozenset((normalize_name(first), normalize_name(second)))
