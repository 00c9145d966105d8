"""
Interaction Service - Drug-drug interaction lookup and reference data upkeep.

Interactions are findings, not errors: the checker returns them and the
medication registry turns each one into an alert.
"""
import logging
from typing import Iterable, List
from sqlalchemy.orm import Session

from ..database import commit_or_raise
from ..core.timeutils import utcnow
from ..medications.models import Medication
from .models import MedicationInteraction, pair_key
from .schemas import InteractionCreate, InteractionImport, InteractionImportResult

# Set up logging
logger = logging.getLogger(__name__)

def find_interactions(
    candidate_name: str,
    other_names: Iterable[str],
    reference: Iterable[MedicationInteraction],
) -> List[MedicationInteraction]:
    """
    Match a candidate drug against other drugs using a reference table.

    Matching is case-insensitive and order-independent. Each other drug
    contributes at most one interaction (the first active row for the pair);
    there is no suppression across drugs, so three interacting drugs yield
    three results even when they are the same reference row.

    Args:
        candidate_name: Name of the medication being prescribed
        other_names: Names of the patient's other active medications
        reference: Interaction rows to search

    Returns:
        List[MedicationInteraction]: Matches in the order of other_names
    """
    active_rows = [row for row in reference if row.is_active]
    found = []
    for other_name in other_names:
        match = next((row for row in active_rows if row.involves(candidate_name, other_name)), None)
        if match is not None:
            found.append(match)
    return found

def check_interactions(
    db: Session,
    candidate: Medication,
    active_others: List[Medication],
) -> List[MedicationInteraction]:
    """
    Check a medication against a patient's other active medications.

    Args:
        db: Database session
        candidate: Medication being prescribed
        active_others: The patient's other active medications

    Returns:
        List[MedicationInteraction]: Interactions found, one per interacting medication
    """
    if not active_others:
        return []

    reference = db.query(MedicationInteraction).filter(MedicationInteraction.is_active.is_(True)).all()
    interactions = find_interactions(
        candidate.medication_name,
        (other.medication_name for other in active_others),
        reference,
    )
    if interactions:
        logger.warning(
            f"{len(interactions)} interaction(s) found for {candidate.medication_name} "
            f"(patient {candidate.patient_id})"
        )
    return interactions

def list_interactions(db: Session, active_only: bool = False) -> List[MedicationInteraction]:
    query = db.query(MedicationInteraction)
    if active_only:
        query = query.filter(MedicationInteraction.is_active.is_(True))
    return query.order_by(MedicationInteraction.medication_1, MedicationInteraction.medication_2).all()

def create_interaction(db: Session, data: InteractionCreate) -> MedicationInteraction:
    """
    Add a single interaction row.

    Args:
        db: Database session
        data: Interaction fields

    Returns:
        MedicationInteraction: Created row
    """
    interaction = MedicationInteraction(**data.model_dump())
    db.add(interaction)
    commit_or_raise(db, "creating a medication interaction")
    db.refresh(interaction)
    logger.info(f"Interaction {interaction.id} added for {interaction.medication_1} + {interaction.medication_2}")
    return interaction

def import_interactions(db: Session, feed: InteractionImport) -> InteractionImportResult:
    """
    Upsert a formulary feed into the interaction table.

    Rows are matched on the unordered, case-insensitive drug pair. With
    replace set, existing rows missing from the feed are deactivated rather
    than deleted.

    Args:
        db: Database session
        feed: Interactions to load

    Returns:
        InteractionImportResult: Counts of created, updated and deactivated rows
    """
    existing = {row.pair_key: row for row in db.query(MedicationInteraction).all()}
    seen = set()
    created = updated = deactivated = 0
    now = utcnow()

    for item in feed.interactions:
        key = pair_key(item.medication_1, item.medication_2)
        seen.add(key)
        row = existing.get(key)
        if row is None:
            row = MedicationInteraction(**item.model_dump())
            db.add(row)
            existing[key] = row
            created += 1
            continue
        for field, value in item.model_dump().items():
            setattr(row, field, value)
        row.updated_at = now
        updated += 1

    if feed.replace:
        for key, row in existing.items():
            if key not in seen and row.is_active:
                row.is_active = False
                row.updated_at = now
                deactivated += 1

    commit_or_raise(db, "importing medication interactions")
    logger.info(f"Interaction import: {created} created, {updated} updated, {deactivated} deactivated")
    return InteractionImportResult(created=created, updated=updated, deactivated=deactivated)
