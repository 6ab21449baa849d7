"""Daily capacity evaluation for staff members."""

from datetime import datetime
from typing import FrozenSet, Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.config import settings
from queuedesk.models.appointment import ACTIVE_STATUSES, AppointmentStatus
from queuedesk.models.staff import Staff
from queuedesk.repositories.appointment_repository import AppointmentRepository
from queuedesk.utils.timeutils import day_bounds, to_utc_naive

# Creation reserves room for waiting demand as well; promotion only counts
# confirmed bookings.
CREATION_COUNTED_STATUSES: FrozenSet[str] = ACTIVE_STATUSES
PROMOTION_COUNTED_STATUSES: FrozenSet[str] = frozenset({AppointmentStatus.SCHEDULED.value})


class CapacityEvaluator:
    def __init__(self, db: AsyncSession):
        self.appointments = AppointmentRepository(db)
        self.tz = settings.business_tz

    def day_bounds(self, when: datetime):
        return day_bounds(to_utc_naive(when), self.tz)

    async def count_active_for_day(
        self,
        owner_id: int,
        staff_id: int,
        when: datetime,
        statuses: Iterable[str],
    ) -> int:
        """Count the staff's appointments on ``when``'s calendar day with a status in ``statuses``."""
        start, end = self.day_bounds(when)
        return await self.appointments.count_for_staff(owner_id, staff_id, start, end, statuses)

    async def is_full(
        self,
        owner_id: int,
        staff: Staff,
        when: datetime,
        statuses: Iterable[str],
    ) -> bool:
        count = await self.count_active_for_day(owner_id, staff.id, when, statuses)
        return count >= staff.daily_capacity
