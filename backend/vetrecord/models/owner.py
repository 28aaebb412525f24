"""
Owner (tutor) models.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class OwnerBase(BaseModel):
    """Base owner model."""
    name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=30)
    email: str = Field(..., min_length=3, max_length=200)
    address: str = Field(..., min_length=1, max_length=300)


class OwnerCreate(OwnerBase):
    """Owner creation model."""
    pass


class OwnerUpdate(BaseModel):
    """Owner update model (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = Field(None, min_length=1, max_length=30)
    email: Optional[str] = Field(None, min_length=3, max_length=200)
    address: Optional[str] = Field(None, min_length=1, max_length=300)


class Owner(OwnerBase):
    """Owner response model."""
    id: str = Field(..., alias="_id")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        populate_by_name = True
