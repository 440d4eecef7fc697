"""
Intervention Service

Creation and lookup of interventions, plus the scheduled-events view: an
intervention whose start lies in the future and that has no end date is
treated as booked work that has not happened yet.
"""

from datetime import datetime
from typing import Optional, List
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import BusinessRuleError, NotFoundError
from app.models.equipment import Equipment
from app.models.intervention import Intervention
from app.schemas.intervention import InterventionCreate, ScheduledEvent
from app.services.equipment_service import utcnow

logger = logging.getLogger(__name__)


class InterventionService:
    """Service class for intervention operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_intervention(self, data: InterventionCreate) -> Intervention:
        """Record an intervention against a registered equipment item.

        Raises:
            BusinessRuleError: the patrimony does not match any equipment
        """
        result = await self.db.execute(select(Equipment.id).where(Equipment.patrimony == data.patrimony))
        if result.scalar_one_or_none() is None:
            logger.info(f"Rejected intervention for unknown patrimony {data.patrimony}")
            raise BusinessRuleError("Equipment not found.")

        values = data.model_dump()
        values["type"] = data.type.value
        if values.get("start_date") is None:
            values["start_date"] = utcnow()

        intervention = Intervention(**values)
        self.db.add(intervention)
        await self.db.commit()
        await self.db.refresh(intervention)

        logger.info(f"Registered {intervention.type} for {intervention.patrimony} (id={intervention.id})")
        return intervention

    async def list_interventions(self) -> List[Intervention]:
        """All interventions, most recent start first."""
        result = await self.db.execute(
            select(Intervention).order_by(Intervention.start_date.desc(), Intervention.id.desc())
        )
        return list(result.scalars().all())

    async def get_intervention(self, intervention_id: int) -> Intervention:
        result = await self.db.execute(select(Intervention).where(Intervention.id == intervention_id))
        intervention = result.scalar_one_or_none()
        if not intervention:
            raise NotFoundError("Intervention", str(intervention_id))
        return intervention

    async def scheduled_events(self, now: Optional[datetime] = None) -> List[ScheduledEvent]:
        """Open interventions starting after ``now``, soonest first."""
        now = now or utcnow()
        result = await self.db.execute(
            select(Intervention)
            .where(Intervention.start_date > now, Intervention.end_date.is_(None))
            .order_by(Intervention.start_date.asc(), Intervention.id.asc())
        )
        return [
            ScheduledEvent(
                id=item.id,
                type=item.type,
                description=item.description,
                scheduled_date=item.start_date,
                patrimony=item.patrimony,
            )
            for item in result.scalars().all()
        ]
