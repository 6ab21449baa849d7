"""Activity log repository - append and read only."""

from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.models.activity_log import ActivityLog


class ActivityRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, entry: ActivityLog) -> ActivityLog:
        self.db.add(entry)
        await self.db.flush()
        await self.db.refresh(entry)
        return entry

    async def list_recent(self, owner_id: int, limit: int) -> List[ActivityLog]:
        result = await self.db.execute(
            select(ActivityLog)
            .where(ActivityLog.owner_id == owner_id)
            .order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def list_for_appointment(self, owner_id: int, appointment_id: int) -> List[ActivityLog]:
        result = await self.db.execute(
            select(ActivityLog)
            .where(
                ActivityLog.owner_id == owner_id,
                ActivityLog.appointment_id == appointment_id,
            )
            .order_by(ActivityLog.timestamp.asc(), ActivityLog.id.asc())
        )
        return list(result.scalars().all())
