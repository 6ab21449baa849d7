from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from queuedesk.schemas.appointment import AppointmentResponse


class ActivityLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    appointment_id: int
    action: str
    description: str
    timestamp: datetime
    appointment: Optional[AppointmentResponse] = None

    @field_validator("timestamp", mode="after")
    @classmethod
    def force_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class ActivityLogListResponse(BaseModel):
    logs: List[ActivityLogResponse]
