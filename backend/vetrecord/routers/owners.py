"""
Owner (tutor) API routes.
"""

from typing import List
from fastapi import APIRouter, HTTPException, status

from ..models.notification import Mutation, Notification
from ..models.owner import Owner, OwnerCreate, OwnerUpdate
from ..models.views import OwnerWithPatients
from ..services.owner_service import OwnerService
from .errors import notify_failure

router = APIRouter(prefix="/owners", tags=["Owners"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Owner not found"
    )


@router.get("/", response_model=List[OwnerWithPatients], response_model_by_alias=False)
async def list_owners():
    """All owners with their patients."""
    with notify_failure("Erro ao carregar tutores. Tente novamente."):
        return await OwnerService.list_owners()


@router.post("/", response_model=Mutation[Owner], response_model_by_alias=False, status_code=status.HTTP_201_CREATED)
async def create_owner(owner_data: OwnerCreate):
    """Register a new owner."""
    with notify_failure("Erro ao cadastrar tutor. Tente novamente."):
        owner = await OwnerService.create_owner(owner_data)
    return Mutation(data=owner, notification=Notification.success("Tutor cadastrado com sucesso."))


@router.get("/{owner_id}", response_model=OwnerWithPatients, response_model_by_alias=False)
async def get_owner(owner_id: str):
    """Get owner by ID with their patients."""
    with notify_failure("Erro ao carregar tutor. Tente novamente."):
        owner = await OwnerService.get_owner(owner_id)
    if not owner:
        raise _not_found()
    return owner


@router.put("/{owner_id}", response_model=Mutation[Owner], response_model_by_alias=False)
async def update_owner(owner_id: str, updates: OwnerUpdate):
    """Update owner information."""
    with notify_failure("Erro ao atualizar tutor. Tente novamente."):
        owner = await OwnerService.update_owner(owner_id, updates)
    if not owner:
        raise _not_found()
    return Mutation(data=owner, notification=Notification.success("Tutor atualizado com sucesso."))


@router.delete("/{owner_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_owner(owner_id: str):
    """Delete owner record."""
    with notify_failure("Erro ao remover tutor. Tente novamente."):
        deleted = await OwnerService.delete_owner(owner_id)
    if not deleted:
        raise _not_found()
