"""Locations API."""
from fastapi import APIRouter, status

from app.api.deps import DbSession, PublicDbSession
from app.schemas.location import LocationCreate, LocationResponse
from app.services.location_service import LocationService

router = APIRouter()


@router.get("", response_model=list[LocationResponse])
async def list_locations(db: PublicDbSession):
    """List locations ordered by name."""
    return await LocationService(db).list_locations()


@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
async def create_location(location_data: LocationCreate, db: DbSession):
    return await LocationService(db).create_location(location_data.name)
