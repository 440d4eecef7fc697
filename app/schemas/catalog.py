"""Fixed enumerations shared by schemas, reports, exports and the catalog endpoint.

Stored values keep the slugs used by the data already in the tables; labels
are what the forms, charts and exports display.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class InterventionType(str, Enum):
    COMPLAINT = "reclamacao"
    PREVENTIVE_MAINTENANCE = "manutencao-preventiva"
    CORRECTIVE_MAINTENANCE = "manutencao-corretiva"
    RESERVATION = "reserva"
    RELOCATION = "movimentacao"
    UNINSTALL = "desinstalacao"


class EquipmentCategory(str, Enum):
    SPLIT = "split"
    WINDOW = "janela"
    CASSETTE = "cassete"
    FLOOR_CEILING = "piso-teto"
    PORTABLE = "portatil"


class Voltage(str, Enum):
    V110 = "110"
    V220 = "220"
    BIVOLT = "bivolt"


class Color(str, Enum):
    WHITE = "branco"
    BLACK = "preto"
    SILVER = "prata"
    BEIGE = "bege"


INTERVENTION_TYPE_LABELS = {
    InterventionType.COMPLAINT.value: "Reclamação",
    InterventionType.PREVENTIVE_MAINTENANCE.value: "Manutenção Preventiva",
    InterventionType.CORRECTIVE_MAINTENANCE.value: "Manutenção Corretiva",
    InterventionType.RESERVATION.value: "Reserva",
    InterventionType.RELOCATION.value: "Movimentação",
    InterventionType.UNINSTALL.value: "Desinstalação",
}

EQUIPMENT_CATEGORY_LABELS = {
    EquipmentCategory.SPLIT.value: "Split",
    EquipmentCategory.WINDOW.value: "Janela",
    EquipmentCategory.CASSETTE.value: "Cassete",
    EquipmentCategory.FLOOR_CEILING.value: "Piso-Teto",
    EquipmentCategory.PORTABLE.value: "Portátil",
}

VOLTAGE_LABELS = {
    Voltage.V110.value: "110V",
    Voltage.V220.value: "220V",
    Voltage.BIVOLT.value: "Bivolt",
}

COLOR_LABELS = {
    Color.WHITE.value: "Branco",
    Color.BLACK.value: "Preto",
    Color.SILVER.value: "Prata",
    Color.BEIGE.value: "Bege",
}

MAINTENANCE_TYPES = frozenset({
    InterventionType.PREVENTIVE_MAINTENANCE.value,
    InterventionType.CORRECTIVE_MAINTENANCE.value,
})

MONTH_LABELS = ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez"]


def format_intervention_type(value: Optional[str]) -> Optional[str]:
    """Label for an intervention type; unknown values pass through unchanged."""
    if isinstance(value, InterventionType):
        value = value.value
    return INTERVENTION_TYPE_LABELS.get(value, value)


class CatalogOption(BaseModel):
    value: str
    label: str


class CatalogResponse(BaseModel):
    """Every fixed enumeration, in form-ready order."""

    intervention_types: list[CatalogOption]
    equipment_categories: list[CatalogOption]
    voltages: list[CatalogOption]
    colors: list[CatalogOption]
    months: list[str]


def _options(labels: dict[str, str]) -> list[CatalogOption]:
    return [CatalogOption(value=value, label=label) for value, label in labels.items()]


def build_catalog() -> CatalogResponse:
    return CatalogResponse(
        intervention_types=_options(INTERVENTION_TYPE_LABELS),
        equipment_categories=_options(EQUIPMENT_CATEGORY_LABELS),
        voltages=_options(VOLTAGE_LABELS),
        colors=_options(COLOR_LABELS),
        months=list(MONTH_LABELS),
    )
