"""
Patient models.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from enum import Enum

from .owner import Owner


class Species(str, Enum):
    """Species offered by the patient form."""
    DOG = "dog"
    CAT = "cat"
    BIRD = "bird"
    OTHER = "other"


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"


class TagType(str, Enum):
    ALLERGY = "allergy"
    CHRONIC = "chronic"


class TagSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PatientTag(BaseModel):
    """Allergy or chronic condition badge shown on the patient record."""
    label: str = Field(..., min_length=1, max_length=100)
    type: TagType
    severity: Optional[TagSeverity] = None


class PatientBase(BaseModel):
    """Base patient model."""
    name: str = Field(..., min_length=1, max_length=100, description="Pet name")
    species: Species
    breed: str = Field(..., min_length=1, max_length=100)
    age: float = Field(..., ge=0, description="Age in years")
    weight: float = Field(..., ge=0, description="Weight in kilograms")
    sex: Sex = Sex.MALE
    photo_url: Optional[str] = None
    owner_id: Optional[str] = None
    tags: List[PatientTag] = Field(default_factory=list)


class PatientCreate(PatientBase):
    """Patient creation model."""
    pass


class PatientUpdate(BaseModel):
    """Patient update model (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    species: Optional[Species] = None
    breed: Optional[str] = Field(None, min_length=1, max_length=100)
    age: Optional[float] = Field(None, ge=0)
    weight: Optional[float] = Field(None, ge=0)
    sex: Optional[Sex] = None
    photo_url: Optional[str] = None
    owner_id: Optional[str] = None
    tags: Optional[List[PatientTag]] = None


class Patient(PatientBase):
    """Patient response model, with the owner when it was joined."""
    id: str = Field(..., alias="_id")
    owner: Optional[Owner] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        populate_by_name = True
