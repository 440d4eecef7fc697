"""Consultations API - filtered history, dashboard indicators and CSV export.

Records are loaded from the public store on every request, filtered in
memory and discarded; nothing is cached between requests.
"""
from datetime import date
from typing import Annotated, Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from pydantic import ValidationError as PydanticValidationError
import logging
import io

from app.api.deps import PublicDbSession
from app.config import settings
from app.exceptions import ValidationError
from app.schemas.consultation import ConsultationResponse, DashboardSummary, FilterCriteria
from app.services.aggregator import summarize
from app.services.equipment_service import EquipmentService
from app.services.export import build_history_csv, export_filename
from app.services.filter_engine import (
    build_equipment_index,
    filter_equipment,
    filter_interventions,
    sort_timeline,
)
from app.services.intervention_service import InterventionService

logger = logging.getLogger(__name__)
router = APIRouter()


def get_filter_criteria(
    patrimony: Optional[str] = None,
    types: list[str] = Query(default=[]),
    locations: list[str] = Query(default=[]),
    brand: Optional[str] = None,
    power: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> FilterCriteria:
    """Build the criteria from query parameters; repeat ``types``/``locations`` for several values."""
    try:
        return FilterCriteria(
            patrimony=patrimony,
            types=[t for t in types if t],
            locations=[loc for loc in locations if loc],
            brand=brand,
            power=power,
            start_date=start_date,
            end_date=end_date,
        )
    except PydanticValidationError as e:
        errors = [
            {"field": ".".join(str(loc) for loc in err["loc"]), "message": err["msg"], "type": err["type"]}
            for err in e.errors()
        ]
        raise ValidationError("Invalid filter criteria", errors=errors)


Criteria = Annotated[FilterCriteria, Depends(get_filter_criteria)]


async def _load(db):
    interventions = await InterventionService(db).list_interventions()
    equipment = await EquipmentService(db).list_equipment()
    return interventions, equipment


@router.get("/interventions", response_model=ConsultationResponse)
async def search_interventions(db: PublicDbSession, criteria: Criteria):
    """Interventions matching every given criterion, most recent first."""
    interventions, equipment = await _load(db)

    matched = filter_interventions(interventions, build_equipment_index(equipment), criteria)
    items = sort_timeline(matched)
    return {"items": items, "total": len(items)}


@router.get("/dashboard", response_model=DashboardSummary)
async def get_dashboard(
    db: PublicDbSession,
    criteria: Criteria,
    collapse_years: Optional[bool] = Query(None, description="Merge the same month of different years"),
):
    """Summary indicators over the filtered records."""
    interventions, equipment = await _load(db)

    matched = filter_interventions(interventions, build_equipment_index(equipment), criteria)
    if collapse_years is None:
        collapse_years = settings.MONTHLY_COSTS_COLLAPSE_YEARS
    return summarize(matched, filter_equipment(equipment, criteria), collapse_years=collapse_years)


@router.get("/export.csv")
async def export_interventions(db: PublicDbSession, criteria: Criteria):
    """Download the filtered history as CSV."""
    interventions, equipment = await _load(db)

    matched = sort_timeline(filter_interventions(interventions, build_equipment_index(equipment), criteria))
    content = build_history_csv(matched)
    filename = export_filename()
    logger.info(f"Exported {len(matched)} interventions to {filename}")

    return StreamingResponse(
        io.BytesIO(content.encode("utf-8")),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
