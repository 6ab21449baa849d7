"""API endpoints for dashboard statistics."""

from datetime import date, datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.config import settings
from queuedesk.database import get_db
from queuedesk.models.appointment import AppointmentStatus
from queuedesk.models.user import User
from queuedesk.repositories.appointment_repository import AppointmentRepository
from queuedesk.repositories.staff_repository import StaffRepository
from queuedesk.schemas.dashboard import DashboardStats, StaffLoad
from queuedesk.utils.security import get_current_user
from queuedesk.utils.timeutils import bounds_for_date

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    day: Optional[date] = Query(None, alias="date"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> DashboardStats:
    """Appointment counts for a day and each staff member's scheduled load."""
    tz = settings.business_tz
    if day is None:
        day = datetime.now(tz).date()
    start, end = bounds_for_date(day, tz)

    appointments = AppointmentRepository(db)
    counts = await appointments.count_by_status(current_user.id, start, end)

    staff_load = []
    for staff in await StaffRepository(db).list(current_user.id):
        scheduled = await appointments.count_for_staff(
            current_user.id,
            staff.id,
            start,
            end,
            [AppointmentStatus.SCHEDULED.value],
        )
        percentage = min(scheduled / staff.daily_capacity * 100, 100.0) if staff.daily_capacity else 0.0
        staff_load.append(
            StaffLoad(
                staff_id=staff.id,
                name=staff.name,
                capacity=staff.daily_capacity,
                scheduled=scheduled,
                percentage=round(percentage, 1),
            )
        )

    return DashboardStats(
        day=day,
        total_appointments=sum(counts.values()),
        completed_appointments=counts.get(AppointmentStatus.COMPLETED.value, 0),
        pending_appointments=counts.get(AppointmentStatus.SCHEDULED.value, 0),
        waiting_queue_count=counts.get(AppointmentStatus.WAITING.value, 0),
        staff_load=staff_load,
    )
