from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.config import settings
from queuedesk.models.activity_log import ActivityAction, ActivityLog
from queuedesk.models.appointment import Appointment
from queuedesk.repositories.activity_repository import ActivityRepository
from queuedesk.repositories.appointment_repository import AppointmentRepository

MAX_ACTIVITY_LIMIT = 100


class ActivityService:
    """Append-only recorder of appointment state transitions."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.logs = ActivityRepository(db)
        self.appointments = AppointmentRepository(db)

    async def record(
        self,
        owner_id: int,
        appointment_id: int,
        action: ActivityAction,
        description: str,
    ) -> ActivityLog:
        entry = ActivityLog(
            owner_id=owner_id,
            appointment_id=appointment_id,
            action=action.value,
            description=description,
        )
        return await self.logs.add(entry)

    async def list_recent(
        self,
        owner_id: int,
        limit: Optional[int] = None,
    ) -> List[Tuple[ActivityLog, Optional[Appointment]]]:
        """Newest entries first, each paired with its appointment if it still exists."""
        if limit is None:
            limit = settings.activity_log_default_limit
        limit = max(1, min(limit, MAX_ACTIVITY_LIMIT))

        entries = await self.logs.list_recent(owner_id, limit)
        resolved: List[Tuple[ActivityLog, Optional[Appointment]]] = []
        cache = {}
        for entry in entries:
            if entry.appointment_id not in cache:
                cache[entry.appointment_id] = await self.appointments.get(
                    owner_id, entry.appointment_id
                )
            resolved.append((entry, cache[entry.appointment_id]))
        return resolved

    async def history(self, owner_id: int, appointment_id: int) -> List[ActivityLog]:
        """Entries of one appointment in the order they were written."""
        return await self.logs.list_for_appointment(owner_id, appointment_id)
