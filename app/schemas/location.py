from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional


class LocationCreate(BaseModel):
    """Schema for creating a location."""

    name: str = Field(..., min_length=1, max_length=255)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class LocationResponse(BaseModel):
    id: int
    name: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
