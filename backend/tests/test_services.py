from datetime import datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from conftest import make_owner, make_patient, run
from vetrecord.exceptions import RecordValidationError
from vetrecord.models.medical_record import MedicalRecordCreate, MedicalRecordUpdate, RecordType
from vetrecord.models.owner import OwnerUpdate
from vetrecord.models.patient import PatientTag, PatientUpdate
from vetrecord.services.medical_record_service import MedicalRecordService
from vetrecord.services.owner_service import OwnerService
from vetrecord.services.patient_service import PatientService


def _record(patient_id, title, date, type=RecordType.CONSULTATION):
    return run(MedicalRecordService.create_record(MedicalRecordCreate(
        patient_id=patient_id,
        type=type,
        title=title,
        description="Exame de rotina",
        professional="Dra. Ana",
        date=date,
    )))


def test_text_age_and_weight_are_stored_as_numbers(db):
    patient = make_patient("Max", age="5", weight="25.5")

    stored = run(db.patients.find_one({"name": "Max"}))

    assert patient.age == 5
    assert stored["age"] == 5
    assert stored["weight"] == 25.5


def test_get_patient_includes_owner(db):
    owner = make_owner()
    patient = make_patient("Max", owner_id=owner.id)

    fetched = run(PatientService.get_patient(patient.id))

    assert fetched.owner_id == owner.id
    assert fetched.owner.phone == "(11) 99999-9999"


def test_get_patient_with_malformed_id_returns_none(db):
    assert run(PatientService.get_patient("not-an-id")) is None


def test_create_patient_with_malformed_owner_id_is_rejected(db):
    with pytest.raises(RecordValidationError):
        make_patient("Max", owner_id="nope")


def test_partial_update_changes_only_given_fields(db):
    patient = make_patient("Max", tags=[PatientTag(label="Diabetes", type="chronic", severity="medium")])

    updated = run(PatientService.update_patient(patient.id, PatientUpdate(weight=27)))

    assert updated.weight == 27
    assert updated.name == "Max"
    assert updated.tags[0].label == "Diabetes"
    assert updated.updated_at is not None


def test_update_can_link_and_unlink_owner(db):
    owner = make_owner()
    patient = make_patient("Max")

    linked = run(PatientService.update_patient(patient.id, PatientUpdate(owner_id=owner.id)))
    unlinked = run(PatientService.update_patient(patient.id, PatientUpdate(owner_id=None)))

    assert linked.owner.name == owner.name
    assert unlinked.owner is None


def test_update_and_delete_missing_patient(db):
    missing = "65a000000000000000000000"

    assert run(PatientService.update_patient(missing, PatientUpdate(name="Rex"))) is None
    assert run(PatientService.delete_patient(missing)) is False


def test_delete_patient(db):
    patient = make_patient("Max")

    assert run(PatientService.delete_patient(patient.id)) is True
    assert run(PatientService.get_patient(patient.id)) is None


def test_owners_are_listed_with_their_patients(db):
    owner = make_owner()
    make_owner("Maria Souza")
    make_patient("Max", owner_id=owner.id)
    make_patient("Mia", species="cat", breed="Persa", owner_id=owner.id)

    owners = {o.name: o for o in run(OwnerService.list_owners())}

    assert sorted(p.name for p in owners["João Silva"].patients) == ["Max", "Mia"]
    assert owners["Maria Souza"].patients == []


def test_update_models_reject_blank_text():
    with pytest.raises(PydanticValidationError):
        PatientUpdate(name="")
    with pytest.raises(PydanticValidationError):
        OwnerUpdate(phone="")
    with pytest.raises(PydanticValidationError):
        MedicalRecordUpdate(title="")


def test_owner_update_and_delete(db):
    owner = make_owner()

    updated = run(OwnerService.update_owner(owner.id, OwnerUpdate(phone="(21) 98888-7777")))

    assert updated.phone == "(21) 98888-7777"
    assert updated.email == owner.email
    assert run(OwnerService.delete_owner(owner.id)) is True
    assert run(OwnerService.get_owner(owner.id)) is None


def test_medical_records_are_listed_newest_first(db):
    patient = make_patient("Max")
    other = make_patient("Mia", species="cat", breed="Persa")
    _record(patient.id, "Consulta inicial", datetime(2024, 1, 10))
    _record(patient.id, "Vacina V10", datetime(2024, 3, 5), RecordType.VACCINE)
    _record(patient.id, "Castração", datetime(2024, 2, 1), RecordType.PROCEDURE)
    _record(other.id, "Consulta", datetime(2024, 4, 1))

    records = run(MedicalRecordService.get_patient_records(patient.id))

    assert [r.title for r in records] == ["Vacina V10", "Castração", "Consulta inicial"]
    assert records[0].type is RecordType.VACCINE


def test_medical_record_requires_existing_patient(db):
    with pytest.raises(RecordValidationError):
        _record("65a000000000000000000000", "Consulta", datetime(2024, 1, 1))
    with pytest.raises(RecordValidationError):
        _record("bad-id", "Consulta", datetime(2024, 1, 1))


def test_medical_record_update_and_delete(db):
    patient = make_patient("Max")
    record = _record(patient.id, "Consulta", datetime(2024, 1, 1))

    updated = run(MedicalRecordService.update_record(
        record.id, MedicalRecordUpdate(type=RecordType.PROCEDURE, title="Curativo")
    ))

    assert updated.type is RecordType.PROCEDURE
    assert updated.title == "Curativo"
    assert updated.professional == "Dra. Ana"
    assert run(MedicalRecordService.delete_record(record.id)) is True
    assert run(MedicalRecordService.get_record(record.id)) is None
