"""Waiting-queue view and promotion of queued appointments to staff."""

from typing import Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.models.activity_log import ActivityAction
from queuedesk.models.appointment import Appointment, AppointmentStatus
from queuedesk.models.service import Service
from queuedesk.models.staff import Staff
from queuedesk.repositories.appointment_repository import AppointmentRepository
from queuedesk.repositories.service_repository import ServiceRepository
from queuedesk.repositories.staff_repository import StaffRepository
from queuedesk.services.activity_service import ActivityService
from queuedesk.services.capacity import PROMOTION_COUNTED_STATUSES, CapacityEvaluator
from queuedesk.services.errors import NotFoundError, require_owner
from queuedesk.utils.logging import BookingLogger
from queuedesk.utils.timeutils import utcnow

EMPTY_QUEUE_MESSAGE = "No appointments in queue"
NO_STAFF_MESSAGE = "No available staff for this service"
CAPACITY_REACHED_MESSAGE = "Staff has reached daily capacity"
QUEUE_CHANGED_MESSAGE = "Queue changed, please retry"

# A head taken by a concurrent promotion is replaced by the next one once.
MAX_PROMOTION_ATTEMPTS = 2


class PromotionResult:
    """Outcome of a single promotion attempt."""

    def __init__(self, assigned: bool, message: str, appointment: Optional[Appointment] = None):
        self.assigned = assigned
        self.message = message
        self.appointment = appointment

    def __repr__(self) -> str:
        return f"<PromotionResult assigned={self.assigned} {self.message!r}>"


class QueueService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.appointments = AppointmentRepository(db)
        self.staff = StaffRepository(db)
        self.services = ServiceRepository(db)
        self.activity = ActivityService(db)
        self.capacity = CapacityEvaluator(db)

    async def list_queue(self, owner_id: Optional[int]) -> List[Tuple[Appointment, int, int]]:
        """Waiting appointments in serving order as (appointment, position, minutes waited)."""
        owner_id = require_owner(owner_id)
        now = utcnow()
        waiting = await self.appointments.list_waiting(owner_id)
        items = []
        for position, appointment in enumerate(waiting, start=1):
            waited = max(0, int((now - appointment.created_at).total_seconds() // 60))
            items.append((appointment, position, waited))
        return items

    async def queue_positions(self, owner_id: int) -> Dict[int, int]:
        waiting = await self.appointments.list_waiting(owner_id)
        return {appointment.id: position for position, appointment in enumerate(waiting, start=1)}

    async def _match_staff(
        self,
        owner_id: int,
        appointment: Appointment,
        service: Optional[Service],
    ) -> Optional[Staff]:
        """First staff member, in store order, of the required type with room left that day."""
        if service is None:
            return None
        for staff in await self.staff.list(owner_id):
            if staff.service_type != service.required_staff_type:
                continue
            if not await self.capacity.is_full(
                owner_id, staff, appointment.appointment_date, PROMOTION_COUNTED_STATUSES
            ):
                return staff
        return None

    async def _staff_for(
        self,
        owner_id: int,
        head: Appointment,
        staff_id: Optional[int],
    ) -> Optional[Staff]:
        if staff_id is not None:
            staff = await self.staff.get(owner_id, staff_id)
            if staff is None:
                raise NotFoundError("Staff not found")
            return staff
        service = await self.services.get(owner_id, head.service_id)
        return await self._match_staff(owner_id, head, service)

    async def promote_next(
        self,
        owner_id: Optional[int],
        staff_id: Optional[int] = None,
    ) -> PromotionResult:
        """Assign the head of the waiting queue to a staff member.

        The head is the waiting appointment with the soonest appointment
        time. At most one appointment is promoted per call; every outcome
        other than an assignment leaves the store untouched.

        The assignment itself is a conditional update. When it matches no
        row, the head is checked again: if it is still waiting the staff
        member's day is full, otherwise another promotion took it and the
        next head is tried.
        """
        owner_id = require_owner(owner_id)
        booking_log = BookingLogger(owner_id)

        for _ in range(MAX_PROMOTION_ATTEMPTS):
            head = await self.appointments.earliest_waiting(owner_id)
            if head is None:
                booking_log.promotion_skipped("queue_empty")
                return PromotionResult(False, EMPTY_QUEUE_MESSAGE)

            staff = await self._staff_for(owner_id, head, staff_id)
            if staff is None:
                booking_log.promotion_skipped("no_matching_staff", appointment_id=head.id)
                return PromotionResult(False, NO_STAFF_MESSAGE)

            day_start, day_end = self.capacity.day_bounds(head.appointment_date)
            assigned = await self.appointments.assign_if_below_capacity(
                owner_id,
                head.id,
                staff.id,
                staff.daily_capacity,
                day_start,
                day_end,
            )
            if assigned:
                return await self._record_promotion(owner_id, head, staff, booking_log)

            status = await self.appointments.current_status(owner_id, head.id)
            if status == AppointmentStatus.WAITING.value:
                booking_log.promotion_skipped("capacity_reached", appointment_id=head.id)
                return PromotionResult(False, CAPACITY_REACHED_MESSAGE)
            booking_log.promotion_skipped("head_taken", appointment_id=head.id)

        return PromotionResult(False, QUEUE_CHANGED_MESSAGE)

    async def _record_promotion(
        self,
        owner_id: int,
        head: Appointment,
        staff: Staff,
        booking_log: BookingLogger,
    ) -> PromotionResult:
        await self.appointments.refresh(head)
        await self.activity.record(
            owner_id,
            head.id,
            ActivityAction.ASSIGNED_FROM_QUEUE,
            f'Appointment for "{head.customer_name}" assigned from queue to {staff.name}',
        )
        booking_log.queue_promoted(head.id, staff.id)
        return PromotionResult(
            True,
            f"Assigned {head.customer_name} to {staff.name}",
            appointment=head,
        )
