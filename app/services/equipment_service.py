"""
Equipment Service

Single-record creation, update and lookup for equipment. Every write path
(the entry form, the edit form and the CSV importer) goes through here so
the patrimony uniqueness rule is checked in one place.
"""

from datetime import datetime, timezone
from typing import Optional, List
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, NotFoundError
from app.models.equipment import Equipment
from app.models.intervention import Intervention
from app.schemas.equipment import EquipmentCreate, EquipmentUpdate

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Current time as a naive UTC datetime, the form stored in the tables."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class EquipmentService:
    """Service class for equipment operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, equipment_id: int) -> Optional[Equipment]:
        result = await self.db.execute(select(Equipment).where(Equipment.id == equipment_id))
        return result.scalar_one_or_none()

    async def get_by_patrimony(self, patrimony: str) -> Optional[Equipment]:
        """Exact, case-sensitive lookup by asset tag."""
        result = await self.db.execute(select(Equipment).where(Equipment.patrimony == patrimony))
        return result.scalar_one_or_none()

    async def list_equipment(self) -> List[Equipment]:
        result = await self.db.execute(select(Equipment).order_by(Equipment.patrimony))
        return list(result.scalars().all())

    async def create_equipment(self, data: EquipmentCreate) -> Equipment:
        """Insert a new equipment item.

        Raises:
            ConflictError: the patrimony is already registered
        """
        if await self.get_by_patrimony(data.patrimony):
            logger.info(f"Rejected duplicate patrimony {data.patrimony}")
            raise ConflictError(f"Patrimony {data.patrimony} is already registered.")

        values = data.model_dump()
        if values.get("entry_date") is None:
            values["entry_date"] = utcnow()

        equipment = Equipment(**values)
        self.db.add(equipment)
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent insert of the same patrimony
            await self.db.rollback()
            logger.warning(f"Unique index rejected patrimony {data.patrimony}")
            raise ConflictError(f"Patrimony {data.patrimony} is already registered.")

        await self.db.refresh(equipment)
        logger.info(f"Registered equipment {equipment.patrimony} (id={equipment.id})")
        return equipment

    async def update_equipment(self, equipment_id: int, data: EquipmentUpdate) -> Equipment:
        """Apply the fields present in ``data`` to an existing item.

        Raises:
            NotFoundError: no equipment with this id
            ConflictError: the new patrimony belongs to another item
        """
        equipment = await self.get(equipment_id)
        if not equipment:
            raise NotFoundError("Equipment", str(equipment_id))

        update_data = data.model_dump(exclude_unset=True)
        # Required columns cannot be cleared
        for field in ("patrimony", "initial_location", "entry_date"):
            if field in update_data and update_data[field] is None:
                del update_data[field]

        new_patrimony = update_data.get("patrimony")
        if new_patrimony and new_patrimony != equipment.patrimony:
            other = await self.get_by_patrimony(new_patrimony)
            if other and other.id != equipment.id:
                raise ConflictError(f"Patrimony {new_patrimony} is already registered to another equipment.")

        for field, value in update_data.items():
            setattr(equipment, field, value)

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(f"Patrimony {new_patrimony} is already registered to another equipment.")

        await self.db.refresh(equipment)
        logger.info(f"Updated equipment {equipment.patrimony} (id={equipment.id})")
        return equipment

    async def history(self, patrimony: str) -> List[Intervention]:
        """Interventions recorded against one item, most recent start first."""
        result = await self.db.execute(
            select(Intervention)
            .where(Intervention.patrimony == patrimony)
            .order_by(Intervention.start_date.desc(), Intervention.id.desc())
        )
        return list(result.scalars().all())
