"""
Interaction Router - Reference data endpoints for the formulary collaborator.
"""
from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from ..database import get_db
from .schemas import InteractionCreate, InteractionImport, InteractionImportResult, InteractionResponse
from .service import list_interactions, create_interaction, import_interactions

router = APIRouter()

@router.get("/", response_model=List[InteractionResponse])
def read_interactions(
    active_only: bool = Query(False, description="Only return active interactions"),
    db: Session = Depends(get_db)
):
    """
    List the interaction reference table
    """
    return list_interactions(db, active_only)

@router.post("/", response_model=InteractionResponse, status_code=status.HTTP_201_CREATED)
def add_interaction(data: InteractionCreate, db: Session = Depends(get_db)):
    """
    Add one interaction to the reference table
    """
    return create_interaction(db, data)

@router.put("/import", response_model=InteractionImportResult)
def import_formulary(feed: InteractionImport, db: Session = Depends(get_db)):
    """
    Upsert interactions from a formulary feed

    Rows are matched on the drug pair regardless of order or case. With
    `replace` set, rows missing from the feed are deactivated.
    """
    return import_interactions(db, feed)
