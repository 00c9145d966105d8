"""
Interaction Schemas - Pydantic models for interaction reference data.
"""
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from .models import InteractionType

class InteractionBase(BaseModel):
    """
    Interaction Base Schema - Shared fields of an interaction row

    Fields:
    - medication_1 / medication_2: Interacting drug names, in any order
    - interaction_type: minor, moderate, major or contraindicated
    - description: Clinical effect of the combination
    - recommendation: Suggested action for the reviewer
    """
    medication_1: str = Field(..., min_length=1)
    medication_2: str = Field(..., min_length=1)
    interaction_type: InteractionType
    description: str = Field(..., min_length=1)
    recommendation: str = Field(..., min_length=1)

    @field_validator("medication_1", "medication_2")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Medication name must not be blank")
        return v

class InteractionCreate(InteractionBase):
    is_active: bool = True

    class Config:
        """Configuration for Pydantic model"""
        json_schema_extra = {
            "example": {
                "medication_1": "warfarin",
                "medication_2": "aspirin",
                "interaction_type": "major",
                "description": "Increased risk of bleeding when warfarin is combined with aspirin",
                "recommendation": "Monitor closely for signs of bleeding.",
                "is_active": True
            }
        }

class InteractionImport(BaseModel):
    """
    Interaction Import Schema - Formulary feed

    Fields:
    - interactions: Rows to upsert, matched on the unordered drug pair
    - replace: Deactivate existing rows that are absent from the feed
    """
    interactions: List[InteractionCreate]
    replace: bool = False

class InteractionImportResult(BaseModel):
    created: int
    updated: int
    deactivated: int

class InteractionResponse(InteractionBase):
    id: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        """Configuration for Pydantic model to enable ORM mode"""
        from_attributes = True
