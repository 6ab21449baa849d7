"""Appointment lifecycle: assignment decisions at creation and manual edits."""

from datetime import date, datetime, timedelta
from typing import Any, List, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.config import settings
from queuedesk.models.activity_log import ActivityAction
from queuedesk.models.appointment import (
    ACTIVE_STATUSES,
    TERMINAL_STATUSES,
    Appointment,
    AppointmentStatus,
)
from queuedesk.models.service import Service
from queuedesk.models.staff import Staff
from queuedesk.repositories.appointment_repository import AppointmentRepository
from queuedesk.repositories.service_repository import ServiceRepository
from queuedesk.repositories.staff_repository import StaffRepository
from queuedesk.services.activity_service import ActivityService
from queuedesk.services.capacity import CREATION_COUNTED_STATUSES, CapacityEvaluator
from queuedesk.services.conflict_checker import ConflictChecker
from queuedesk.services.errors import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    require_owner,
)
from queuedesk.services.locks import staff_day_locks
from queuedesk.utils.logging import BookingLogger
from queuedesk.utils.timeutils import bounds_for_date, local_date, to_utc_naive

CONFLICT_MESSAGE = "This staff member already has an appointment at this time"


class AppointmentService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.appointments = AppointmentRepository(db)
        self.staff = StaffRepository(db)
        self.services = ServiceRepository(db)
        self.activity = ActivityService(db)
        self.conflicts = ConflictChecker(db)
        self.capacity = CapacityEvaluator(db)

    async def _get_service(self, owner_id: int, service_id: int) -> Service:
        service = await self.services.get(owner_id, service_id)
        if service is None:
            raise NotFoundError("Service not found")
        return service

    async def _get_staff(self, owner_id: int, staff_id: int) -> Staff:
        staff = await self.staff.get(owner_id, staff_id)
        if staff is None:
            raise NotFoundError("Staff not found")
        return staff

    async def get_appointment(self, owner_id: Optional[int], appointment_id: int) -> Appointment:
        owner_id = require_owner(owner_id)
        appointment = await self.appointments.get(owner_id, appointment_id)
        if appointment is None:
            raise NotFoundError("Appointment not found")
        return appointment

    async def list_appointments(
        self,
        owner_id: Optional[int],
        staff_id: Optional[int] = None,
        day: Optional[date] = None,
        status: Optional[str] = None,
    ) -> List[Appointment]:
        owner_id = require_owner(owner_id)
        start = end = None
        if day is not None:
            start, end = bounds_for_date(day, settings.business_tz)
        return await self.appointments.list(
            owner_id, staff_id=staff_id, start=start, end=end, status=status
        )

    async def create_appointment(
        self,
        owner_id: Optional[int],
        customer_name: Optional[str],
        service_id: Optional[int],
        appointment_date: Optional[datetime],
        staff_id: Optional[int] = None,
    ) -> Appointment:
        """Create an appointment, deciding whether it is scheduled or queued.

        Without a staff member the appointment always joins the waiting
        queue. With one, a time conflict aborts the creation, while a full
        day silently downgrades the request to the queue.
        """
        owner_id = require_owner(owner_id)
        customer_name = (customer_name or "").strip()
        if not customer_name or service_id is None or appointment_date is None:
            raise InvalidInputError("Missing required fields")

        service = await self._get_service(owner_id, service_id)
        when = to_utc_naive(appointment_date)

        if staff_id is None:
            appointment = await self._persist(
                owner_id, customer_name, service, None, when
            )
            await self.db.commit()
            return appointment

        staff = await self._get_staff(owner_id, staff_id)

        # Conflict check, capacity count and insert must not interleave with
        # another booking for the same staff member. The conflict window can
        # reach into the neighbouring day, so every day it touches is locked.
        window_start, window_end = self.conflicts.window(when, service.duration_minutes)
        tz = settings.business_tz
        days = {
            local_date(window_start, tz),
            local_date(when, tz),
            local_date(window_end - timedelta(microseconds=1), tz),
        }
        async with staff_day_locks.hold(owner_id, staff.id, days):
            if await self.conflicts.has_conflict(
                owner_id, staff.id, when, service.duration_minutes
            ):
                raise ConflictError(CONFLICT_MESSAGE)

            full = await self.capacity.is_full(
                owner_id, staff, when, CREATION_COUNTED_STATUSES
            )
            appointment = await self._persist(
                owner_id,
                customer_name,
                service,
                None if full else staff,
                when,
            )
            await self.db.commit()
        return appointment

    async def _persist(
        self,
        owner_id: int,
        customer_name: str,
        service: Service,
        staff: Optional[Staff],
        when: datetime,
    ) -> Appointment:
        status = (
            AppointmentStatus.WAITING.value
            if staff is None
            else AppointmentStatus.SCHEDULED.value
        )
        appointment = await self.appointments.add(
            Appointment(
                owner_id=owner_id,
                customer_name=customer_name,
                service_id=service.id,
                staff_id=staff.id if staff else None,
                appointment_date=when,
                status=status,
            )
        )

        if staff is None:
            action = ActivityAction.QUEUED
            description = f'Appointment for "{customer_name}" added to queue'
        else:
            action = ActivityAction.SCHEDULED
            description = f'Appointment for "{customer_name}" scheduled'
        await self.activity.record(owner_id, appointment.id, action, description)

        BookingLogger(owner_id).appointment_created(
            appointment.id, appointment.status, appointment.staff_id
        )
        return appointment

    async def update_appointment(
        self,
        owner_id: Optional[int],
        appointment_id: int,
        changes: Mapping[str, Any],
    ) -> Appointment:
        """Apply a trusted manual edit.

        No conflict or capacity checks are made. ``changes`` holds only the
        fields the caller sent; ``staff_id`` mapped to None clears the staff.
        A single ``status_changed`` entry is written when the stored status
        ends up different.
        """
        owner_id = require_owner(owner_id)
        appointment = await self.get_appointment(owner_id, appointment_id)
        old_status = appointment.status

        requested_status = changes.get("status")
        if requested_status is not None:
            requested_status = _coerce_status(requested_status)

        # Nothing is written to the appointment until the edit is known to be valid.
        new_staff_id = appointment.staff_id
        if "staff_id" in changes:
            new_staff_id = changes["staff_id"]
            if new_staff_id is not None:
                await self._get_staff(owner_id, new_staff_id)

        new_status = requested_status or old_status
        if new_status == AppointmentStatus.WAITING.value:
            if requested_status is not None:
                new_staff_id = None
            elif new_staff_id is not None:
                new_status = AppointmentStatus.SCHEDULED.value
        elif new_status == AppointmentStatus.SCHEDULED.value and new_staff_id is None:
            if requested_status is not None:
                raise InvalidInputError("A scheduled appointment needs a staff member")
            new_status = AppointmentStatus.WAITING.value

        appointment.staff_id = new_staff_id
        if changes.get("appointment_date") is not None:
            appointment.appointment_date = to_utc_naive(changes["appointment_date"])
        appointment.status = new_status
        await self.appointments.save(appointment)

        if new_status != old_status:
            await self.activity.record(
                owner_id,
                appointment.id,
                ActivityAction.STATUS_CHANGED,
                f"Status changed from {old_status} to {new_status}",
            )
            BookingLogger(owner_id).status_changed(appointment.id, old_status, new_status)
        return appointment

    async def complete_appointment(
        self, owner_id: Optional[int], appointment_id: int
    ) -> Appointment:
        owner_id = require_owner(owner_id)
        appointment = await self.get_appointment(owner_id, appointment_id)
        if appointment.status not in ACTIVE_STATUSES:
            raise InvalidInputError(f"Cannot complete a {appointment.status} appointment")

        old_status = appointment.status
        appointment.status = AppointmentStatus.COMPLETED.value
        await self.appointments.save(appointment)
        await self.activity.record(
            owner_id,
            appointment.id,
            ActivityAction.COMPLETED,
            f'Appointment for "{appointment.customer_name}" completed',
        )
        BookingLogger(owner_id).status_changed(appointment.id, old_status, appointment.status)
        return appointment

    async def cancel_appointment(
        self, owner_id: Optional[int], appointment_id: int
    ) -> Appointment:
        """Mark an appointment cancelled and keep the record."""
        owner_id = require_owner(owner_id)
        appointment = await self.get_appointment(owner_id, appointment_id)
        if appointment.status in TERMINAL_STATUSES:
            raise InvalidInputError(f"Cannot cancel a {appointment.status} appointment")

        old_status = appointment.status
        appointment.status = AppointmentStatus.CANCELLED.value
        await self.appointments.save(appointment)
        await self.activity.record(
            owner_id,
            appointment.id,
            ActivityAction.CANCELLED,
            f'Appointment for "{appointment.customer_name}" cancelled',
        )
        BookingLogger(owner_id).status_changed(appointment.id, old_status, appointment.status)
        return appointment

    async def delete_appointment(self, owner_id: Optional[int], appointment_id: int) -> None:
        """Cancel-and-remove: log the cancellation, then delete the record."""
        owner_id = require_owner(owner_id)
        appointment = await self.get_appointment(owner_id, appointment_id)
        await self.activity.record(
            owner_id,
            appointment.id,
            ActivityAction.CANCELLED,
            f'Appointment for "{appointment.customer_name}" cancelled',
        )
        await self.appointments.delete(appointment)
        BookingLogger(owner_id).log("appointment_deleted", appointment_id=appointment_id)

    async def purge_appointment(self, owner_id: Optional[int], appointment_id: int) -> None:
        """Remove the record whatever its status, without an activity entry."""
        owner_id = require_owner(owner_id)
        appointment = await self.get_appointment(owner_id, appointment_id)
        await self.appointments.delete(appointment)
        BookingLogger(owner_id).log("appointment_purged", appointment_id=appointment_id)


def _coerce_status(value: Any) -> str:
    if isinstance(value, AppointmentStatus):
        return value.value
    try:
        return AppointmentStatus(value).value
    except ValueError:
        raise InvalidInputError(f"Unknown status: {value}")
