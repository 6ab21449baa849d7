"""Time-conflict detection for a staff member's bookings."""

from datetime import datetime, timedelta
from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.config import settings
from queuedesk.models.appointment import Appointment
from queuedesk.repositories.appointment_repository import AppointmentRepository
from queuedesk.utils.timeutils import to_utc_naive


class ConflictChecker:
    """Finds active bookings that collide with a proposed time window.

    An existing scheduled or waiting appointment of the same staff member
    collides when it starts inside ``[start - lookback, start + duration)``.
    The lookback (one hour by default) only extends backwards: neighbouring
    bookings have no known duration, so anything that started shortly
    before the proposed slot is treated as still running.
    """

    def __init__(self, db: AsyncSession, lookback_minutes: Optional[int] = None):
        self.appointments = AppointmentRepository(db)
        if lookback_minutes is None:
            lookback_minutes = settings.conflict_lookback_minutes
        self.lookback = timedelta(minutes=lookback_minutes)

    def window(self, proposed_start: datetime, duration_minutes: int) -> Tuple[datetime, datetime]:
        """Half-open range in which an existing start time collides."""
        start = to_utc_naive(proposed_start)
        return start - self.lookback, start + timedelta(minutes=duration_minutes)

    async def find_conflict(
        self,
        owner_id: int,
        staff_id: int,
        proposed_start: datetime,
        duration_minutes: int,
        exclude_appointment_id: Optional[int] = None,
    ) -> Optional[Appointment]:
        window_start, window_end = self.window(proposed_start, duration_minutes)
        return await self.appointments.find_active_in_window(
            owner_id,
            staff_id,
            window_start=window_start,
            window_end=window_end,
            exclude_id=exclude_appointment_id,
        )

    async def has_conflict(
        self,
        owner_id: int,
        staff_id: int,
        proposed_start: datetime,
        duration_minutes: int,
        exclude_appointment_id: Optional[int] = None,
    ) -> bool:
        conflict = await self.find_conflict(
            owner_id,
            staff_id,
            proposed_start,
            duration_minutes,
            exclude_appointment_id=exclude_appointment_id,
        )
        return conflict is not None
