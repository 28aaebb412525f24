"""
Composite read models for the owner panel and patient record screens.
"""

from pydantic import BaseModel, Field
from typing import List, Optional

from .owner import Owner
from .patient import Patient, PatientTag
from .medical_record import MedicalRecord

NO_OWNER_TEXT = "Nenhum tutor cadastrado"


class OwnerWithPatients(Owner):
    """Owner with the patients linked to it."""
    patients: List[Patient] = Field(default_factory=list)


class PatientRecordView(BaseModel):
    """Everything the patient record screen shows."""
    patient: Patient
    owner: Optional[Owner] = None
    owner_display: str
    tags: List[PatientTag] = Field(default_factory=list)
    timeline: List[MedicalRecord] = Field(default_factory=list)

    @classmethod
    def build(cls, patient: Patient, timeline: List[MedicalRecord]) -> "PatientRecordView":
        owner = patient.owner
        return cls(
            patient=patient,
            owner=owner,
            owner_display=owner.name if owner else NO_OWNER_TEXT,
            tags=patient.tags,
            timeline=timeline
        )
