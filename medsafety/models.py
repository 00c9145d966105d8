"""
Imports every table model so the metadata is complete for create_all,
Alembic autogeneration and foreign key resolution.
"""
from .database import Base
from .medications.models import Medication
from .schedules.models import MedicationSchedule
from .interactions.models import MedicationInteraction
from .administrations.models import MedicationAdministration
from .alerts.models import MedicationAlert
from .symptoms.models import PatientSymptomReport

__all__ = [
    "Base",
    "Medication",
    "MedicationSchedule",
    "MedicationInteraction",
    "MedicationAdministration",
    "MedicationAlert",
    "PatientSymptomReport",
]
