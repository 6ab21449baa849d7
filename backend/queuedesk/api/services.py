"""Service catalogue API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.database import get_db
from queuedesk.models.service import Service
from queuedesk.models.user import User
from queuedesk.repositories.service_repository import ServiceRepository
from queuedesk.schemas.service import ServiceCreate, ServiceResponse
from queuedesk.services.errors import NotFoundError
from queuedesk.utils.security import get_current_user

router = APIRouter()


@router.post("/", response_model=ServiceResponse, status_code=status.HTTP_201_CREATED)
async def create_service(
    request: ServiceCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Service:
    service = Service(
        owner_id=current_user.id,
        name=request.name,
        duration_minutes=request.duration_minutes,
        required_staff_type=request.required_staff_type,
    )
    return await ServiceRepository(db).add(service)


@router.get("/", response_model=List[ServiceResponse])
async def list_services(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> List[Service]:
    return await ServiceRepository(db).list(current_user.id)


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(
    service_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Service:
    service = await ServiceRepository(db).get(current_user.id, service_id)
    if not service:
        raise NotFoundError("Service not found")
    return service
