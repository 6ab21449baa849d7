from typing import List, Optional

from pydantic import BaseModel

from queuedesk.schemas.appointment import AppointmentResponse


class QueueAssignRequest(BaseModel):
    staff_id: Optional[int] = None


class QueueAssignResponse(BaseModel):
    assigned: bool
    message: str
    appointment: Optional[AppointmentResponse] = None


class QueueItem(BaseModel):
    appointment: AppointmentResponse
    queue_position: int
    waiting_minutes: int


class QueueListResponse(BaseModel):
    items: List[QueueItem]
    total: int
