"""Equipment schemas for request/response validation."""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime

from app.schemas.types import OptionalDateTime, OptionalNumber, OptionalText

# Asset tags are 3-20 letters or digits, nothing else
PATRIMONY_PATTERN = r"^[A-Za-z0-9]{3,20}$"


class EquipmentBase(BaseModel):
    """Base equipment schema."""

    brand: OptionalText = Field(None, max_length=100)
    model: OptionalText = Field(None, max_length=100)
    serial_number: OptionalText = Field(None, max_length=100)
    weight: OptionalNumber = None
    color: OptionalText = Field(None, max_length=50)
    power: OptionalNumber = None
    capacity: OptionalNumber = None
    voltage: OptionalText = Field(None, max_length=20)
    category: OptionalText = Field(None, max_length=50)
    notes: OptionalText = None


class EquipmentCreate(EquipmentBase):
    """Schema for creating equipment."""

    patrimony: str = Field(..., pattern=PATRIMONY_PATTERN)
    initial_location: str = Field(..., min_length=1, max_length=255)
    entry_date: OptionalDateTime = None  # defaults to now

    @field_validator("initial_location", mode="before")
    @classmethod
    def strip_location(cls, v):
        return v.strip() if isinstance(v, str) else v


class EquipmentUpdate(EquipmentBase):
    """Schema for updating equipment (all fields optional)."""

    patrimony: Optional[str] = Field(None, pattern=PATRIMONY_PATTERN)
    initial_location: Optional[str] = Field(None, min_length=1, max_length=255)
    entry_date: OptionalDateTime = None

    @field_validator("initial_location", mode="before")
    @classmethod
    def strip_location(cls, v):
        return v.strip() if isinstance(v, str) else v


class EquipmentResponse(BaseModel):
    """Schema for equipment response."""

    id: int
    patrimony: str
    brand: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    weight: Optional[float] = None
    color: Optional[str] = None
    power: Optional[float] = None
    capacity: Optional[float] = None
    voltage: Optional[str] = None
    category: Optional[str] = None
    notes: Optional[str] = None
    initial_location: str
    entry_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class EquipmentListResponse(BaseModel):
    """Equipment list response, ordered by patrimony."""

    items: list[EquipmentResponse]
    total: int
