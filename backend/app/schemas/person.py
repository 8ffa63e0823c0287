"""
Pydantic schemas for Person entity.
"""
from pydantic import BaseModel, field_validator
from datetime import datetime
from app.core.utils import normalize_name


class PersonCreate(BaseModel):
    """Schema for adding a person to the roster."""
    name: str

    @field_validator("name")
    @classmethod
    def normalize(cls, v: str) -> str:
        name = normalize_name(v)
        if not name:
            raise ValueError("Name must not be empty")
        return name


class PersonResponse(BaseModel):
    """Schema for person response."""
    id: int
    name: str
    created_at: datetime

    class Config:
        from_attributes = True
