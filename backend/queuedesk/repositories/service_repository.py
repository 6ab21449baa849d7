"""Service repository - owner-scoped service lookups and writes."""

from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.models.service import Service


class ServiceRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, owner_id: int, service_id: int) -> Optional[Service]:
        result = await self.db.execute(
            select(Service).where(Service.id == service_id, Service.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def list(self, owner_id: int) -> List[Service]:
        result = await self.db.execute(
            select(Service).where(Service.owner_id == owner_id).order_by(Service.id.asc())
        )
        return list(result.scalars().all())

    async def get_many(self, owner_id: int) -> Dict[int, Service]:
        return {service.id: service for service in await self.list(owner_id)}

    async def add(self, service: Service) -> Service:
        self.db.add(service)
        await self.db.flush()
        await self.db.refresh(service)
        return service
