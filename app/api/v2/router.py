from fastapi import APIRouter
from app.api.v2 import (
    equipment,
    interventions,
    locations,
    consultations,
    import_data,
    catalog,
)

api_router = APIRouter()

# Include all v2 routers
api_router.include_router(equipment.router, prefix="/equipment", tags=["equipment"])
api_router.include_router(interventions.router, prefix="/interventions", tags=["interventions"])
api_router.include_router(locations.router, prefix="/locations", tags=["locations"])
api_router.include_router(consultations.router, prefix="/consultations", tags=["consultations"])
api_router.include_router(import_data.router, prefix="/import", tags=["import"])
api_router.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
