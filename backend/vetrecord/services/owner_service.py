"""
Owner (tutor) management service.
"""

from datetime import datetime
from typing import Optional, List

from ..models.owner import Owner, OwnerCreate, OwnerUpdate
from ..models.views import OwnerWithPatients
from ..store.table_store import Join, table_store

OWNERS = "owners"
PATIENTS_JOIN = Join(table="patients", local_field="_id", foreign_field="owner_id", as_field="patients", many=True)


class OwnerService:
    """Owner management service."""

    @classmethod
    async def list_owners(cls) -> List[OwnerWithPatients]:
        """All owners with their patients."""
        owners = await table_store.query_table(OWNERS, joins=[PATIENTS_JOIN])
        return [OwnerWithPatients(**owner) for owner in owners]

    @classmethod
    async def get_owner(cls, owner_id: str) -> Optional[OwnerWithPatients]:
        """Get owner by ID with their patients."""
        owner = await table_store.get_record(OWNERS, owner_id, joins=[PATIENTS_JOIN])
        if not owner:
            return None
        return OwnerWithPatients(**owner)

    @classmethod
    async def create_owner(cls, owner_data: OwnerCreate) -> Owner:
        """Register a new owner."""
        owner_doc = owner_data.model_dump()
        owner_doc["created_at"] = datetime.utcnow()
        owner_doc["updated_at"] = None

        owner = await table_store.insert_record(OWNERS, owner_doc)
        return Owner(**owner)

    @classmethod
    async def update_owner(cls, owner_id: str, updates: OwnerUpdate) -> Optional[Owner]:
        """Update the supplied owner fields."""
        update_data = {k: v for k, v in updates.model_dump(exclude_unset=True).items() if v is not None}
        if update_data:
            update_data["updated_at"] = datetime.utcnow()

        owner = await table_store.update_record(OWNERS, owner_id, update_data)
        if not owner:
            return None
        return Owner(**owner)

    @classmethod
    async def delete_owner(cls, owner_id: str) -> bool:
        """Delete owner record. Linked patients keep a dangling owner id."""
        return await table_store.delete_record(OWNERS, owner_id)
