"""Demo data setup endpoint."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.database import get_db
from queuedesk.models.user import User
from queuedesk.services.demo_service import seed_demo_catalogue
from queuedesk.utils.security import get_current_user

router = APIRouter()


@router.post("/demo")
async def setup_demo(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> JSONResponse:
    """Seed demo staff and services for the caller."""
    created = await seed_demo_catalogue(db, current_user.id)
    if not created["staff_count"]:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"message": "Demo data already exists"},
        )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "Demo data created successfully", **created},
    )
