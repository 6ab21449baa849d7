"""Staff API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.config import settings
from queuedesk.database import get_db
from queuedesk.models.staff import Staff
from queuedesk.models.user import User
from queuedesk.repositories.staff_repository import StaffRepository
from queuedesk.schemas.staff import StaffCreate, StaffResponse, StaffUpdate
from queuedesk.services.errors import NotFoundError
from queuedesk.utils.security import get_current_user

router = APIRouter()


@router.post("/", response_model=StaffResponse, status_code=status.HTTP_201_CREATED)
async def create_staff(
    request: StaffCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Staff:
    """Register a staff member."""
    staff = Staff(
        owner_id=current_user.id,
        name=request.name,
        service_type=request.service_type,
        daily_capacity=request.daily_capacity or settings.default_daily_capacity,
        availability=request.availability.value,
    )
    return await StaffRepository(db).add(staff)


@router.get("/", response_model=List[StaffResponse])
async def list_staff(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> List[Staff]:
    return await StaffRepository(db).list(current_user.id)


@router.get("/{staff_id}", response_model=StaffResponse)
async def get_staff(
    staff_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Staff:
    staff = await StaffRepository(db).get(current_user.id, staff_id)
    if not staff:
        raise NotFoundError("Staff not found")
    return staff


@router.patch("/{staff_id}", response_model=StaffResponse)
async def update_staff(
    staff_id: int,
    request: StaffUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Staff:
    """Edit a staff member. Existing bookings are not re-evaluated."""
    repo = StaffRepository(db)
    staff = await repo.get(current_user.id, staff_id)
    if not staff:
        raise NotFoundError("Staff not found")

    update_data = request.model_dump(exclude_unset=True, exclude_none=True)
    if "availability" in update_data:
        update_data["availability"] = update_data["availability"].value
    return await repo.update(staff, **update_data)
