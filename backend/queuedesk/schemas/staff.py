"""Staff schemas for request/response validation."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from queuedesk.models.staff import StaffAvailability


class StaffCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    service_type: str = Field(..., min_length=1, max_length=100)
    daily_capacity: Optional[int] = Field(None, ge=1)
    availability: StaffAvailability = StaffAvailability.AVAILABLE


class StaffUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    service_type: Optional[str] = Field(None, min_length=1, max_length=100)
    daily_capacity: Optional[int] = Field(None, ge=1)
    availability: Optional[StaffAvailability] = None


class StaffResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    service_type: str
    daily_capacity: int
    availability: str
    created_at: datetime
    updated_at: datetime
