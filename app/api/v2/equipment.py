"""Equipment API - Air-conditioning units identified by patrimony."""
from fastapi import APIRouter, status
import logging

from app.api.deps import DbSession, PublicDbSession
from app.exceptions import NotFoundError
from app.schemas.equipment import (
    EquipmentCreate,
    EquipmentUpdate,
    EquipmentResponse,
    EquipmentListResponse,
)
from app.schemas.intervention import InterventionListResponse
from app.services.equipment_service import EquipmentService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=EquipmentListResponse)
async def list_equipment(db: PublicDbSession):
    """List all equipment ordered by patrimony."""
    items = await EquipmentService(db).list_equipment()
    return {"items": items, "total": len(items)}


@router.get("/{patrimony}", response_model=EquipmentResponse)
async def get_equipment(patrimony: str, db: PublicDbSession):
    """Get a single equipment record by patrimony."""
    equipment = await EquipmentService(db).get_by_patrimony(patrimony)
    if not equipment:
        raise NotFoundError("Equipment", patrimony)
    return equipment


@router.get("/{patrimony}/interventions", response_model=InterventionListResponse)
async def get_equipment_history(patrimony: str, db: PublicDbSession):
    """Intervention history of one equipment item, most recent first."""
    service = EquipmentService(db)
    if not await service.get_by_patrimony(patrimony):
        raise NotFoundError("Equipment", patrimony)
    items = await service.history(patrimony)
    return {"items": items, "total": len(items)}


@router.post("", response_model=EquipmentResponse, status_code=status.HTTP_201_CREATED)
async def create_equipment(equipment_data: EquipmentCreate, db: DbSession):
    """Register a new equipment item."""
    return await EquipmentService(db).create_equipment(equipment_data)


@router.patch("/{equipment_id}", response_model=EquipmentResponse)
async def update_equipment(equipment_id: int, equipment_data: EquipmentUpdate, db: DbSession):
    """Update an equipment item."""
    return await EquipmentService(db).update_equipment(equipment_id, equipment_data)
