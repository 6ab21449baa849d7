"""Service schemas for request/response validation."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from queuedesk.models.service import ALLOWED_DURATIONS


class ServiceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    duration_minutes: int
    required_staff_type: str = Field(..., min_length=1, max_length=100)

    @field_validator("duration_minutes")
    @classmethod
    def check_duration(cls, v: int) -> int:
        if v not in ALLOWED_DURATIONS:
            raise ValueError(f"duration_minutes must be one of {list(ALLOWED_DURATIONS)}")
        return v


class ServiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    duration_minutes: int
    required_staff_type: str
    created_at: datetime
    updated_at: datetime
