from app.models.equipment import Equipment
from app.models.intervention import Intervention
from app.models.location import Location

__all__ = [
    "Equipment",
    "Intervention",
    "Location",
]
