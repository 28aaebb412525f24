"""
Patient management service.
"""

from datetime import datetime
from typing import Optional, List, Mapping

from ..exceptions import RecordValidationError
from ..models.patient import Patient, PatientCreate, PatientUpdate
from ..store.table_store import table_store, to_object_id
from .query_composer import PATIENTS, OWNER_JOIN, search_patients

# Fields a partial update may explicitly clear
NULLABLE_FIELDS = {"owner_id", "photo_url"}


def _owner_ref(owner_id: Optional[str]):
    if owner_id is None:
        return None
    oid = to_object_id(owner_id)
    if oid is None:
        raise RecordValidationError(f"Invalid owner id: {owner_id}")
    return oid


class PatientService:
    """Patient management service."""

    @classmethod
    async def list_patients(cls) -> List[Patient]:
        """All patients with their owners."""
        return await search_patients()

    @classmethod
    async def search_patients(
        cls,
        query: str = "",
        filters: Optional[Mapping[str, str]] = None
    ) -> List[Patient]:
        """Search patients by name/breed text and filter selections."""
        return await search_patients(query, filters)

    @classmethod
    async def get_patient(cls, patient_id: str) -> Optional[Patient]:
        """Get patient by ID, owner included."""
        patient = await table_store.get_record(PATIENTS, patient_id, joins=[OWNER_JOIN])
        if not patient:
            return None
        return Patient(**patient)

    @classmethod
    async def create_patient(cls, patient_data: PatientCreate) -> Patient:
        """Create a new patient record."""
        patient_doc = patient_data.model_dump(mode="json")
        patient_doc["owner_id"] = _owner_ref(patient_data.owner_id)
        patient_doc["created_at"] = datetime.utcnow()
        patient_doc["updated_at"] = None

        patient = await table_store.insert_record(PATIENTS, patient_doc)
        return Patient(**patient)

    @classmethod
    async def update_patient(cls, patient_id: str, updates: PatientUpdate) -> Optional[Patient]:
        """Update the supplied patient fields."""
        update_data = {
            k: v for k, v in updates.model_dump(mode="json", exclude_unset=True).items()
            if v is not None or k in NULLABLE_FIELDS
        }
        if "owner_id" in update_data:
            update_data["owner_id"] = _owner_ref(update_data["owner_id"])
        if update_data:
            update_data["updated_at"] = datetime.utcnow()

        updated = await table_store.update_record(PATIENTS, patient_id, update_data)
        if not updated:
            return None
        return await cls.get_patient(patient_id)

    @classmethod
    async def delete_patient(cls, patient_id: str) -> bool:
        """Delete patient record."""
        return await table_store.delete_record(PATIENTS, patient_id)
