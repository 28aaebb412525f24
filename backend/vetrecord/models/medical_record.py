"""
Medical record (timeline entry) models.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from enum import Enum


class RecordType(str, Enum):
    """Kinds of timeline entries."""
    CONSULTATION = "consultation"
    VACCINE = "vaccine"
    PROCEDURE = "procedure"


class MedicalRecordBase(BaseModel):
    """Base medical record model."""
    type: RecordType = RecordType.CONSULTATION
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=5000)
    professional: str = Field(..., min_length=1, max_length=100)
    date: datetime = Field(default_factory=datetime.utcnow)


class MedicalRecordCreate(MedicalRecordBase):
    """Create a new medical record for a patient."""
    patient_id: str


class MedicalRecordUpdate(BaseModel):
    """Medical record update model (all fields optional)."""
    type: Optional[RecordType] = None
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=5000)
    professional: Optional[str] = Field(None, min_length=1, max_length=100)
    date: Optional[datetime] = None


class MedicalRecord(MedicalRecordBase):
    """Medical record response model."""
    id: str = Field(..., alias="_id")
    patient_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        populate_by_name = True
