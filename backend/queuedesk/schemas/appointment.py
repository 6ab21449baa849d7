from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from queuedesk.models.appointment import AppointmentStatus
from queuedesk.schemas.service import ServiceResponse
from queuedesk.schemas.staff import StaffResponse


class AppointmentCreate(BaseModel):
    # Required fields are checked by the service so that a missing value is
    # reported as a validation error rather than a schema error.
    customer_name: Optional[str] = Field(None, max_length=255)
    service_id: Optional[int] = None
    staff_id: Optional[int] = None
    appointment_date: Optional[datetime] = None


class AppointmentUpdate(BaseModel):
    status: Optional[AppointmentStatus] = None
    staff_id: Optional[int] = None
    appointment_date: Optional[datetime] = None


class AppointmentResponse(BaseModel):
    id: int
    customer_name: str
    service_id: int
    staff_id: Optional[int] = None
    appointment_date: datetime
    status: str
    queue_position: Optional[int] = None

    service: Optional[ServiceResponse] = None
    staff: Optional[StaffResponse] = None

    created_at: datetime
    updated_at: datetime

    @field_validator("appointment_date", "created_at", "updated_at", mode="after")
    @classmethod
    def force_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class AppointmentListResponse(BaseModel):
    appointments: List[AppointmentResponse]
    total: int


class MessageResponse(BaseModel):
    message: str
