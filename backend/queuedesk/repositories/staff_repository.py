"""Staff repository - owner-scoped staff lookups and writes."""

from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.models.staff import Staff


class StaffRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, owner_id: int, staff_id: int) -> Optional[Staff]:
        result = await self.db.execute(
            select(Staff).where(Staff.id == staff_id, Staff.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def list(self, owner_id: int) -> List[Staff]:
        """All staff of the owner in store order (insertion order)."""
        result = await self.db.execute(
            select(Staff).where(Staff.owner_id == owner_id).order_by(Staff.id.asc())
        )
        return list(result.scalars().all())

    async def get_many(self, owner_id: int) -> Dict[int, Staff]:
        return {staff.id: staff for staff in await self.list(owner_id)}

    async def exists_for_owner(self, owner_id: int) -> bool:
        result = await self.db.execute(
            select(Staff.id).where(Staff.owner_id == owner_id).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def add(self, staff: Staff) -> Staff:
        self.db.add(staff)
        await self.db.flush()
        await self.db.refresh(staff)
        return staff

    async def update(self, staff: Staff, **updates) -> Staff:
        for field, value in updates.items():
            setattr(staff, field, value)
        await self.db.flush()
        await self.db.refresh(staff)
        return staff
