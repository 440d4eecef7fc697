"""Interventions API - maintenance, complaints, reservations, relocations, uninstalls."""
from typing import Annotated, Any
from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
import logging

from app.api.deps import DbSession, PublicDbSession
from app.exceptions import RegistryException, format_validation_errors
from app.schemas.intervention import (
    InterventionCreate,
    InterventionResponse,
    InterventionListResponse,
    ScheduledEvent,
    RegisterResponse,
)
from app.services.intervention_service import InterventionService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=InterventionListResponse)
async def list_interventions(db: PublicDbSession):
    """List interventions, most recent start first."""
    items = await InterventionService(db).list_interventions()
    return {"items": items, "total": len(items)}


@router.get("/scheduled", response_model=list[ScheduledEvent])
async def get_scheduled_events(db: PublicDbSession):
    """Open interventions booked for the future, soonest first."""
    return await InterventionService(db).scheduled_events()


@router.post("", response_model=InterventionResponse, status_code=status.HTTP_201_CREATED)
async def create_intervention(intervention_data: InterventionCreate, db: DbSession):
    """Record an intervention against a registered equipment item."""
    return await InterventionService(db).create_intervention(intervention_data)


@router.post(
    "/register",
    response_model=RegisterResponse,
    responses={400: {"description": "Invalid intervention"}, 500: {"description": "Server error"}},
)
async def register_intervention(payload: Annotated[dict[str, Any], Body()], db: DbSession):
    """
    Register an intervention from the form's camelCase body.

    Answers ``{"message": ...}`` on success and ``{"error": ...}`` otherwise:
    400 when the body or a business rule rejects it, 500 for anything else.
    """
    try:
        intervention_data = InterventionCreate.model_validate(payload)
    except PydanticValidationError as e:
        return JSONResponse(status_code=400, content={"error": format_validation_errors(e.errors())})

    try:
        intervention = await InterventionService(db).create_intervention(intervention_data)
    except RegistryException as e:
        return JSONResponse(status_code=e.status_code, content={"error": e.detail})
    except Exception:
        logger.exception("Failed to register intervention")
        return JSONResponse(status_code=500, content={"error": "Failed to register the intervention."})

    return {"message": f"Intervention {intervention.id} registered successfully."}


@router.get("/{intervention_id}", response_model=InterventionResponse)
async def get_intervention(intervention_id: int, db: PublicDbSession):
    return await InterventionService(db).get_intervention(intervention_id)
