"""
Medical record (timeline) API routes.
"""

from typing import List
from fastapi import APIRouter, HTTPException, status

from ..models.medical_record import MedicalRecord, MedicalRecordCreate, MedicalRecordUpdate
from ..models.notification import Mutation, Notification
from ..services.medical_record_service import MedicalRecordService
from .errors import notify_failure

router = APIRouter(prefix="/medical-records", tags=["Medical Records"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Medical record not found"
    )


@router.post("/", response_model=Mutation[MedicalRecord], response_model_by_alias=False, status_code=status.HTTP_201_CREATED)
async def create_medical_record(record_data: MedicalRecordCreate):
    """Add an entry to a patient's timeline."""
    with notify_failure("Erro ao criar registro médico. Tente novamente."):
        record = await MedicalRecordService.create_record(record_data)
    return Mutation(data=record, notification=Notification.success("Registro médico criado com sucesso."))


@router.get("/patient/{patient_id}", response_model=List[MedicalRecord], response_model_by_alias=False)
async def get_patient_records(patient_id: str):
    """A patient's timeline, newest first."""
    with notify_failure("Erro ao carregar histórico médico. Tente novamente."):
        return await MedicalRecordService.get_patient_records(patient_id)


@router.get("/{record_id}", response_model=MedicalRecord, response_model_by_alias=False)
async def get_medical_record(record_id: str):
    """Get medical record by ID."""
    with notify_failure("Erro ao carregar registro médico. Tente novamente."):
        record = await MedicalRecordService.get_record(record_id)
    if not record:
        raise _not_found()
    return record


@router.put("/{record_id}", response_model=Mutation[MedicalRecord], response_model_by_alias=False)
async def update_medical_record(record_id: str, updates: MedicalRecordUpdate):
    """Update medical record."""
    with notify_failure("Erro ao atualizar registro médico. Tente novamente."):
        record = await MedicalRecordService.update_record(record_id, updates)
    if not record:
        raise _not_found()
    return Mutation(data=record, notification=Notification.success("Registro médico atualizado com sucesso."))


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_medical_record(record_id: str):
    """Delete medical record."""
    with notify_failure("Erro ao remover registro médico. Tente novamente."):
        deleted = await MedicalRecordService.delete_record(record_id)
    if not deleted:
        raise _not_found()
