import asyncio
import sys
from datetime import datetime

from vetrecord.database import Database
from vetrecord.models import MedicalRecordCreate, OwnerCreate, PatientCreate, PatientTag, RecordType
from vetrecord.services import MedicalRecordService, OwnerService, PatientService


async def seed_demo():
    print("Connecting to MongoDB...")
    await Database.connect()

    try:
        if await Database.get_collection("patients").count_documents({}):
            print("Patients already exist, nothing to do.")
            return

        owner = await OwnerService.create_owner(OwnerCreate(
            name="João Silva",
            phone="(11) 99999-9999",
            email="joao.silva@email.com",
            address="Rua das Flores, 123 - São Paulo, SP"
        ))

        max_ = await PatientService.create_patient(PatientCreate(
            name="Max",
            species="dog",
            breed="Labrador",
            age=5,
            weight=25,
            sex="male",
            owner_id=owner.id,
            tags=[
                PatientTag(label="Alergia a Penicilina", type="allergy", severity="high"),
                PatientTag(label="Diabetes", type="chronic", severity="medium"),
                PatientTag(label="Alergia a Ração", type="allergy", severity="low"),
            ]
        ))
        await PatientService.create_patient(PatientCreate(
            name="Mia", species="cat", breed="Persa", age=9, weight=4.5, sex="female"
        ))

        await MedicalRecordService.create_record(MedicalRecordCreate(
            patient_id=max_.id,
            type=RecordType.VACCINE,
            title="Vacina V10",
            description="Dose anual",
            professional="Dra. Ana Costa",
            date=datetime(2024, 3, 5, 10, 0)
        ))

        print(f"Created owner {owner.name} and 2 patients.")
    except Exception as e:
        print(f"Error: {e}")
    finally:
        await Database.disconnect()


if __name__ == "__main__":
    if sys.platform == 'win32':
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    asyncio.run(seed_demo())
