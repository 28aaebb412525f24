"""Pydantic models for VetRecord."""

from .owner import Owner, OwnerCreate, OwnerUpdate
from .patient import Patient, PatientCreate, PatientUpdate, PatientTag, Species, Sex, TagType, TagSeverity
from .medical_record import MedicalRecord, MedicalRecordCreate, MedicalRecordUpdate, RecordType
from .search import (
    ALL,
    AGE_RANGES,
    AgeBracket,
    DEFAULT_FILTERS,
    FilterName,
    FilterOption,
    SearchFilter,
    SearchState
)
from .notification import Mutation, Notification, NotificationVariant
from .views import OwnerWithPatients, PatientRecordView, NO_OWNER_TEXT

__all__ = [
    # Owner
    "Owner", "OwnerCreate", "OwnerUpdate",
    # Patient
    "Patient", "PatientCreate", "PatientUpdate", "PatientTag", "Species", "Sex", "TagType", "TagSeverity",
    # Medical records
    "MedicalRecord", "MedicalRecordCreate", "MedicalRecordUpdate", "RecordType",
    # Search
    "ALL", "AGE_RANGES", "AgeBracket", "DEFAULT_FILTERS", "FilterName", "FilterOption",
    "SearchFilter", "SearchState",
    # Notifications
    "Mutation", "Notification", "NotificationVariant",
    # Views
    "OwnerWithPatients", "PatientRecordView", "NO_OWNER_TEXT"
]
