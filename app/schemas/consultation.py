"""Schemas for the query/reporting dashboard."""

from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import date
from typing import Optional

from app.schemas.catalog import INTERVENTION_TYPE_LABELS
from app.schemas.intervention import InterventionResponse


class FilterCriteria(BaseModel):
    """Optional predicates over the intervention history.

    Empty values switch a predicate off; every active predicate must match.
    """

    patrimony: Optional[str] = None
    types: list[str] = Field(default_factory=list)
    locations: list[str] = Field(default_factory=list)
    brand: Optional[str] = None
    power: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @field_validator("types")
    @classmethod
    def validate_types(cls, v: list[str]) -> list[str]:
        unknown = [t for t in v if t not in INTERVENTION_TYPE_LABELS]
        if unknown:
            raise ValueError(f"Unknown intervention type: {', '.join(unknown)}")
        return v

    @model_validator(mode="after")
    def check_date_range(self) -> "FilterCriteria":
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self

    @property
    def is_empty(self) -> bool:
        return not (
            self.patrimony or self.types or self.locations or self.brand
            or self.power or self.start_date or self.end_date
        )


class MonthlyCost(BaseModel):
    label: str
    month: int
    year: Optional[int] = None  # None when years are collapsed
    cost: float


class TypeCount(BaseModel):
    type: str
    label: str
    count: int


class TypeCost(BaseModel):
    type: str
    label: str
    cost: float


class CostReportRow(BaseModel):
    """Per-type cost line of the reports tab."""

    type: str
    label: str
    count: int
    total: float
    average: float


class DashboardSummary(BaseModel):
    total_equipment: int
    total_cost: float
    pending_maintenance: int
    active_equipment: int
    inactive_equipment: int
    monthly_costs: list[MonthlyCost]
    count_by_type: list[TypeCount]
    cost_by_type: list[TypeCost]
    cost_report: list[CostReportRow]


class ConsultationResponse(BaseModel):
    """Filtered interventions, most recent first."""

    items: list[InterventionResponse]
    total: int
