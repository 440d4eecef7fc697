# Services module
from app.services.equipment_service import EquipmentService
from app.services.intervention_service import InterventionService
from app.services.location_service import LocationService

__all__ = [
    "EquipmentService",
    "InterventionService",
    "LocationService",
]
