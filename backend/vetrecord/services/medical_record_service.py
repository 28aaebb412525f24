"""
Medical records (timeline) service.
"""

from datetime import datetime
from typing import Optional, List

from ..exceptions import RecordValidationError
from ..models.medical_record import MedicalRecord, MedicalRecordCreate, MedicalRecordUpdate
from ..store.predicates import Equals
from ..store.table_store import table_store, to_object_id
from .query_composer import PATIENTS

MEDICAL_RECORDS = "medical_records"


class MedicalRecordService:
    """Medical records management service."""

    @classmethod
    async def get_patient_records(cls, patient_id: str) -> List[MedicalRecord]:
        """All records of a patient, newest first."""
        records = await table_store.query_table(
            MEDICAL_RECORDS,
            filters=[Equals("patient_id", patient_id)],
            sort=[("date", -1)]
        )
        return [MedicalRecord(**record) for record in records]

    @classmethod
    async def get_record(cls, record_id: str) -> Optional[MedicalRecord]:
        """Get medical record by ID."""
        record = await table_store.get_record(MEDICAL_RECORDS, record_id)
        if not record:
            return None
        return MedicalRecord(**record)

    @classmethod
    async def create_record(cls, record_data: MedicalRecordCreate) -> MedicalRecord:
        """Create a record for an existing patient."""
        if to_object_id(record_data.patient_id) is None:
            raise RecordValidationError(f"Invalid patient id: {record_data.patient_id}")
        if not await table_store.get_record(PATIENTS, record_data.patient_id):
            raise RecordValidationError(f"Patient {record_data.patient_id} does not exist")

        record_doc = record_data.model_dump()
        record_doc["type"] = record_data.type.value
        record_doc["created_at"] = datetime.utcnow()
        record_doc["updated_at"] = None

        record = await table_store.insert_record(MEDICAL_RECORDS, record_doc)
        return MedicalRecord(**record)

    @classmethod
    async def update_record(cls, record_id: str, updates: MedicalRecordUpdate) -> Optional[MedicalRecord]:
        """Update the supplied record fields."""
        update_data = {k: v for k, v in updates.model_dump(exclude_unset=True).items() if v is not None}
        if "type" in update_data:
            update_data["type"] = updates.type.value
        if update_data:
            update_data["updated_at"] = datetime.utcnow()

        record = await table_store.update_record(MEDICAL_RECORDS, record_id, update_data)
        if not record:
            return None
        return MedicalRecord(**record)

    @classmethod
    async def delete_record(cls, record_id: str) -> bool:
        """Delete medical record."""
        return await table_store.delete_record(MEDICAL_RECORDS, record_id)
