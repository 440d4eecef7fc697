"""Intervention schemas for request/response validation.

Request fields accept both the Python names and the camelCase names the
forms submit (``patrimonio``, ``dataInicio``, ...).
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import datetime
from typing import Optional

from app.schemas.catalog import InterventionType
from app.schemas.types import OptionalDateTime, OptionalNumber, OptionalText


class InterventionCreate(BaseModel):
    """Schema for creating an intervention."""

    patrimony: str = Field(..., min_length=1, alias="patrimonio")
    type: InterventionType = Field(..., alias="tipo")
    description: OptionalText = Field(None, alias="descricao")
    start_date: OptionalDateTime = Field(None, alias="dataInicio")  # defaults to now
    end_date: OptionalDateTime = Field(None, alias="dataTermino")
    origin: OptionalText = Field(None, max_length=255, alias="localOrigem")
    destination: OptionalText = Field(None, max_length=255, alias="localDestino")
    cost: OptionalNumber = Field(0.0, alias="custo")
    responsible: OptionalText = Field(None, max_length=255, alias="responsavel")
    notes: OptionalText = Field(None, alias="observacoes")

    class Config:
        populate_by_name = True

    @field_validator("patrimony", mode="before")
    @classmethod
    def strip_patrimony(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("cost")
    @classmethod
    def cost_defaults_to_zero(cls, v: Optional[float]) -> float:
        if v is None:
            return 0.0
        if v < 0:
            raise ValueError("Cost cannot be negative")
        return v

    @model_validator(mode="after")
    def check_type_requirements(self) -> "InterventionCreate":
        if self.type == InterventionType.RESERVATION and self.end_date is None:
            raise ValueError("A reservation requires an end date")
        if self.type == InterventionType.RELOCATION and not (self.origin and self.destination):
            raise ValueError("A relocation requires an origin and a destination")
        if self.type == InterventionType.UNINSTALL and not self.origin:
            raise ValueError("An uninstall requires an origin")
        return self


class InterventionResponse(BaseModel):
    """Schema for intervention response."""

    id: int
    patrimony: str
    type: str
    description: Optional[str] = None
    start_date: datetime
    end_date: Optional[datetime] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    cost: float = 0.0
    responsible: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class InterventionListResponse(BaseModel):
    """Intervention list response, most recent first."""

    items: list[InterventionResponse]
    total: int


class ScheduledEvent(BaseModel):
    """An intervention booked for the future that has not been closed."""

    id: int
    type: str
    description: Optional[str] = None
    scheduled_date: datetime
    patrimony: str


class RegisterResponse(BaseModel):
    message: str
