"""Appointment repository - owner-scoped queries over the appointments table."""

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from queuedesk.models.appointment import ACTIVE_STATUSES, Appointment, AppointmentStatus


class AppointmentRepository:
    """Filtered find, count, insert, update and delete for appointments."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, owner_id: int, appointment_id: int) -> Optional[Appointment]:
        result = await self.db.execute(
            select(Appointment).where(
                Appointment.id == appointment_id,
                Appointment.owner_id == owner_id,
            )
        )
        return result.scalar_one_or_none()

    async def list(
        self,
        owner_id: int,
        staff_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        status: Optional[str] = None,
    ) -> List[Appointment]:
        """Appointments ordered by appointment date, earliest first."""
        query = select(Appointment).where(Appointment.owner_id == owner_id)
        if staff_id is not None:
            query = query.where(Appointment.staff_id == staff_id)
        if start is not None:
            query = query.where(Appointment.appointment_date >= start)
        if end is not None:
            query = query.where(Appointment.appointment_date <= end)
        if status:
            query = query.where(Appointment.status == status)
        query = query.order_by(Appointment.appointment_date.asc(), Appointment.id.asc())
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def list_waiting(self, owner_id: int) -> List[Appointment]:
        return await self.list(owner_id, status=AppointmentStatus.WAITING.value)

    async def earliest_waiting(self, owner_id: int) -> Optional[Appointment]:
        """Head of the waiting queue: soonest appointment time, then lowest id."""
        result = await self.db.execute(
            select(Appointment)
            .where(
                Appointment.owner_id == owner_id,
                Appointment.status == AppointmentStatus.WAITING.value,
            )
            .order_by(Appointment.appointment_date.asc(), Appointment.id.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def find_active_in_window(
        self,
        owner_id: int,
        staff_id: int,
        window_start: datetime,
        window_end: datetime,
        exclude_id: Optional[int] = None,
    ) -> Optional[Appointment]:
        """First active appointment for the staff starting in [window_start, window_end)."""
        query = select(Appointment).where(
            Appointment.owner_id == owner_id,
            Appointment.staff_id == staff_id,
            Appointment.status.in_(ACTIVE_STATUSES),
            Appointment.appointment_date >= window_start,
            Appointment.appointment_date < window_end,
        )
        if exclude_id is not None:
            query = query.where(Appointment.id != exclude_id)
        result = await self.db.execute(query.order_by(Appointment.appointment_date).limit(1))
        return result.scalars().first()

    async def count_for_staff(
        self,
        owner_id: int,
        staff_id: int,
        start: datetime,
        end: datetime,
        statuses: Iterable[str],
    ) -> int:
        """Count the staff's appointments in [start, end] whose status is in ``statuses``."""
        result = await self.db.execute(
            select(func.count(Appointment.id)).where(
                Appointment.owner_id == owner_id,
                Appointment.staff_id == staff_id,
                Appointment.appointment_date >= start,
                Appointment.appointment_date <= end,
                Appointment.status.in_(list(statuses)),
            )
        )
        return result.scalar() or 0

    async def count_by_status(
        self, owner_id: int, start: datetime, end: datetime
    ) -> Dict[str, int]:
        result = await self.db.execute(
            select(Appointment.status, func.count(Appointment.id))
            .where(
                Appointment.owner_id == owner_id,
                Appointment.appointment_date >= start,
                Appointment.appointment_date <= end,
            )
            .group_by(Appointment.status)
        )
        return {status: count for status, count in result.all()}

    async def add(self, appointment: Appointment) -> Appointment:
        self.db.add(appointment)
        await self.db.flush()
        await self.db.refresh(appointment)
        return appointment

    async def save(self, appointment: Appointment) -> Appointment:
        await self.db.flush()
        await self.db.refresh(appointment)
        return appointment

    async def assign_if_below_capacity(
        self,
        owner_id: int,
        appointment_id: int,
        staff_id: int,
        daily_capacity: int,
        day_start: datetime,
        day_end: datetime,
    ) -> bool:
        """Atomically schedule a waiting appointment on a staff member.

        The row is updated only if it is still waiting and the staff's count
        of scheduled appointments for the day is below ``daily_capacity``;
        the check and the write are one UPDATE statement. Returns whether a
        row was updated.
        """
        other = aliased(Appointment)
        day_count = (
            select(func.count(other.id))
            .where(
                other.owner_id == owner_id,
                other.staff_id == staff_id,
                other.status == AppointmentStatus.SCHEDULED.value,
                other.appointment_date >= day_start,
                other.appointment_date <= day_end,
            )
            .scalar_subquery()
        )
        result = await self.db.execute(
            update(Appointment)
            .where(
                Appointment.id == appointment_id,
                Appointment.owner_id == owner_id,
                Appointment.status == AppointmentStatus.WAITING.value,
                day_count < daily_capacity,
            )
            .values(staff_id=staff_id, status=AppointmentStatus.SCHEDULED.value)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    async def current_status(self, owner_id: int, appointment_id: int) -> Optional[str]:
        """Stored status read straight from the table, bypassing the identity map."""
        result = await self.db.execute(
            select(Appointment.status).where(
                Appointment.id == appointment_id,
                Appointment.owner_id == owner_id,
            )
        )
        return result.scalar_one_or_none()

    async def refresh(self, appointment: Appointment) -> Appointment:
        await self.db.refresh(appointment)
        return appointment

    async def delete(self, appointment: Appointment) -> None:
        await self.db.delete(appointment)
        await self.db.flush()
