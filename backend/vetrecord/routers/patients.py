"""
Patient management API routes.
"""

from typing import List
from fastapi import APIRouter, HTTPException, status, Query, UploadFile, File

from ..models.notification import Mutation, Notification
from ..models.patient import Patient, PatientCreate, PatientUpdate
from ..models.search import ALL, DEFAULT_FILTERS, SearchFilter
from ..models.views import PatientRecordView
from ..services.medical_record_service import MedicalRecordService
from ..services.patient_service import PatientService
from ..services.photo_service import photo_service
from .errors import notify_failure

router = APIRouter(prefix="/patients", tags=["Patients"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Patient not found"
    )


@router.get("/filters", response_model=List[SearchFilter])
async def list_filters():
    """Filters offered by the search bar."""
    return DEFAULT_FILTERS


@router.get("/", response_model=List[Patient], response_model_by_alias=False)
async def search_patients(
    q: str = Query("", description="Text contained in the name or breed"),
    species: str = Query(ALL, description="Species, or 'all'"),
    breed: str = Query(ALL, description="Breed, or 'all'"),
    age: str = Query(ALL, description="Age bracket: puppy, young, adult, senior or 'all'")
):
    """Search patients with their owners."""
    selected = {"species": species, "breed": breed, "age": age}
    for search_filter in DEFAULT_FILTERS:
        value = selected[search_filter.name.value]
        if not search_filter.accepts(value):
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Invalid {search_filter.name.value}: {value}"
            )

    with notify_failure("Erro ao buscar pacientes. Tente novamente."):
        return await PatientService.search_patients(q, selected)


@router.post("/", response_model=Mutation[Patient], response_model_by_alias=False, status_code=status.HTTP_201_CREATED)
async def create_patient(patient_data: PatientCreate):
    """Register a new patient."""
    with notify_failure("Erro ao cadastrar paciente. Tente novamente."):
        patient = await PatientService.create_patient(patient_data)
    return Mutation(data=patient, notification=Notification.success("Paciente cadastrado com sucesso."))


@router.delete("/photo", status_code=status.HTTP_204_NO_CONTENT)
async def delete_photo(url: str = Query(..., description="Public URL of the photo")):
    """Remove a stored pet photo."""
    with notify_failure("Erro ao remover a foto. Tente novamente."):
        await photo_service.delete_pet_photo(url)


@router.get("/{patient_id}", response_model=Patient, response_model_by_alias=False)
async def get_patient(patient_id: str):
    """Get patient by ID."""
    with notify_failure("Erro ao carregar paciente. Tente novamente."):
        patient = await PatientService.get_patient(patient_id)
    if not patient:
        raise _not_found()
    return patient


@router.get("/{patient_id}/record", response_model=PatientRecordView, response_model_by_alias=False)
async def get_patient_record(patient_id: str):
    """Patient record screen: details, owner, tags and medical timeline."""
    with notify_failure("Erro ao carregar paciente. Tente novamente."):
        patient = await PatientService.get_patient(patient_id)
    if not patient:
        raise _not_found()

    with notify_failure("Erro ao carregar histórico médico. Tente novamente."):
        timeline = await MedicalRecordService.get_patient_records(patient.id)
    return PatientRecordView.build(patient, timeline)


@router.put("/{patient_id}", response_model=Mutation[Patient], response_model_by_alias=False)
async def update_patient(patient_id: str, updates: PatientUpdate):
    """Update patient information."""
    with notify_failure("Erro ao atualizar paciente. Tente novamente."):
        patient = await PatientService.update_patient(patient_id, updates)
    if not patient:
        raise _not_found()
    return Mutation(data=patient, notification=Notification.success("Paciente atualizado com sucesso."))


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_patient(patient_id: str):
    """Delete patient record."""
    with notify_failure("Erro ao remover paciente. Tente novamente."):
        deleted = await PatientService.delete_patient(patient_id)
    if not deleted:
        raise _not_found()


@router.post("/{patient_id}/photo", response_model=Mutation[str], status_code=status.HTTP_201_CREATED)
async def upload_photo(patient_id: str, file: UploadFile = File(...)):
    """
    Upload a pet photo and return its public URL.

    Only images up to the configured size are accepted. The URL still has to
    be saved on the patient through the update endpoint.
    """
    content = await file.read()
    with notify_failure("Erro ao fazer upload da foto. Tente novamente."):
        url = await photo_service.upload_pet_photo(patient_id, file.filename, file.content_type, content)
    return Mutation(data=url, notification=Notification.success("Foto enviada com sucesso."))
