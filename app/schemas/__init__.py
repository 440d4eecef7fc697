from app.schemas.equipment import (
    EquipmentCreate,
    EquipmentUpdate,
    EquipmentResponse,
    EquipmentListResponse,
)
from app.schemas.intervention import (
    InterventionCreate,
    InterventionResponse,
    InterventionListResponse,
    ScheduledEvent,
    RegisterResponse,
)
from app.schemas.location import (
    LocationCreate,
    LocationResponse,
)
from app.schemas.consultation import (
    FilterCriteria,
    DashboardSummary,
    ConsultationResponse,
)
from app.schemas.catalog import (
    InterventionType,
    CatalogResponse,
)

__all__ = [
    "EquipmentCreate",
    "EquipmentUpdate",
    "EquipmentResponse",
    "EquipmentListResponse",
    "InterventionCreate",
    "InterventionResponse",
    "InterventionListResponse",
    "ScheduledEvent",
    "RegisterResponse",
    "LocationCreate",
    "LocationResponse",
    "FilterCriteria",
    "DashboardSummary",
    "ConsultationResponse",
    "InterventionType",
    "CatalogResponse",
]
