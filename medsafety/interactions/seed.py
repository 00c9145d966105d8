"""
Built-in interaction table.

Deployments are expected to replace or extend it from a formulary through
the import endpoint; it is only loaded into an empty table.
"""
import logging
from sqlalchemy.orm import Session

from ..database import commit_or_raise
from .models import InteractionType, MedicationInteraction

# Set up logging
logger = logging.getLogger(__name__)

DEFAULT_INTERACTIONS = [
    {
        "medication_1": "warfarin",
        "medication_2": "aspirin",
        "interaction_type": InteractionType.MAJOR,
        "description": "Increased risk of bleeding when warfarin is combined with aspirin",
        "recommendation": "Monitor closely for signs of bleeding. Consider alternative pain relief.",
    },
    {
        "medication_1": "metformin",
        "medication_2": "insulin",
        "interaction_type": InteractionType.MODERATE,
        "description": "Combined use may increase risk of hypoglycemia",
        "recommendation": "Monitor blood glucose levels closely and adjust dosages as needed.",
    },
    {
        "medication_1": "lisinopril",
        "medication_2": "spironolactone",
        "interaction_type": InteractionType.MODERATE,
        "description": "Increased risk of hyperkalemia (high potassium)",
        "recommendation": "Monitor potassium levels regularly.",
    },
]

def seed_default_interactions(db: Session) -> int:
    """
    Load the built-in interactions if the table is empty.

    Args:
        db: Database session

    Returns:
        int: Number of rows inserted (0 when the table already had data)
    """
    if db.query(MedicationInteraction.id).first() is not None:
        return 0

    for row in DEFAULT_INTERACTIONS:
        db.add(MedicationInteraction(is_active=True, **row))
    commit_or_raise(db, "seeding the interaction table")
    logger.info(f"Seeded {len(DEFAULT_INTERACTIONS)} default medication interactions")
    return len(DEFAULT_INTERACTIONS)
