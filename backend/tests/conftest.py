import asyncio
import os
import tempfile

# Settings are read once, on first import of the package
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="vetrecord-uploads-"))
os.environ.setdefault("PUBLIC_BASE_URL", "http://testserver")
os.environ.setdefault("SEARCH_DEBOUNCE_MS", "50")
os.environ.setdefault("LOG_JSON", "false")

import pytest
from mongomock_motor import AsyncMongoMockClient

from vetrecord.database import Database
from vetrecord.models.owner import OwnerCreate
from vetrecord.models.patient import PatientCreate
from vetrecord.services.owner_service import OwnerService
from vetrecord.services.patient_service import PatientService


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def db(monkeypatch):
    database = AsyncMongoMockClient()["vetrecord_test"]
    monkeypatch.setattr(Database, "db", database)
    return database


@pytest.fixture
def client(db):
    from fastapi.testclient import TestClient
    from vetrecord.main import app

    # No context manager: the lifespan would connect to a real MongoDB
    return TestClient(app)


def make_owner(name="João Silva"):
    return run(OwnerService.create_owner(OwnerCreate(
        name=name,
        phone="(11) 99999-9999",
        email="joao.silva@email.com",
        address="Rua das Flores, 123 - São Paulo, SP",
    )))


def make_patient(name, species="dog", breed="Labrador", age=5, weight=25, owner_id=None, **extra):
    return run(PatientService.create_patient(PatientCreate(
        name=name,
        species=species,
        breed=breed,
        age=age,
        weight=weight,
        owner_id=owner_id,
        **extra,
    )))


@pytest.fixture
def clinic(db):
    """A small patient base covering every species filter and age bracket."""
    owner = make_owner()
    patients = {
        "max": make_patient("Max", "dog", "Labrador", 5, 25, owner_id=owner.id),
        "labrador": make_patient("Labrador", "dog", "Vira-lata", 0.5, 8),
        "lab_cat": make_patient("Lab", "cat", "Siamês", 2, 4),
        "mia": make_patient("Mia", "cat", "Persa", 9, 5, owner_id=owner.id),
        "bolt": make_patient("Bolt", "dog", "Poodle", 1, 6),
        "kiwi": make_patient("Kiwi", "bird", "Calopsita", 3, 0.1),
    }
    return {"owner": owner, "patients": patients}
