"""Location Service - the set of places equipment can be installed in."""

from typing import Iterable, List, Optional
import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError
from app.models.location import Location

logger = logging.getLogger(__name__)


class LocationService:
    """Service class for location operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_locations(self) -> List[Location]:
        result = await self.db.execute(select(Location).order_by(Location.name))
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> Optional[Location]:
        result = await self.db.execute(select(Location).where(Location.name == name))
        return result.scalars().first()

    async def create_location(self, name: str) -> Location:
        name = name.strip()
        if await self.get_by_name(name):
            raise ConflictError(f"Location {name} already exists.")

        location = Location(name=name)
        self.db.add(location)
        await self.db.commit()
        await self.db.refresh(location)
        logger.info(f"Created location {name}")
        return location

    async def ensure_locations(self, names: Iterable[str]) -> List[str]:
        """Create every location in ``names`` that is not known yet.

        Failures are logged and skipped; returns the names actually created.
        """
        created = []
        for name in names:
            name = (name or "").strip()
            if not name or name in created:
                continue
            try:
                if await self.get_by_name(name):
                    continue
                self.db.add(Location(name=name))
                await self.db.commit()
                created.append(name)
                logger.info(f"Created location {name}")
            except SQLAlchemyError as e:
                await self.db.rollback()
                logger.error(f"Failed to create location {name}: {e}")
        return created
