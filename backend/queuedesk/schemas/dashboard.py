"""Dashboard schemas."""

from datetime import date
from typing import List

from pydantic import BaseModel


class StaffLoad(BaseModel):
    staff_id: int
    name: str
    capacity: int
    scheduled: int
    percentage: float


class DashboardStats(BaseModel):
    day: date
    total_appointments: int
    completed_appointments: int
    pending_appointments: int
    waiting_queue_count: int
    staff_load: List[StaffLoad]
