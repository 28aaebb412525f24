"""Services package for VetRecord."""

from .patient_service import PatientService
from .owner_service import OwnerService
from .medical_record_service import MedicalRecordService
from .photo_service import PhotoService, photo_service
from .search_controller import DebouncedSearchController, SearchPhase

__all__ = [
    "PatientService",
    "OwnerService",
    "MedicalRecordService",
    "PhotoService",
    "photo_service",
    "DebouncedSearchController",
    "SearchPhase"
]
