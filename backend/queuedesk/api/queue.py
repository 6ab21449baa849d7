"""Waiting queue API endpoints."""

from typing import Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.api.appointments import build_response, build_responses
from queuedesk.database import get_db
from queuedesk.models.user import User
from queuedesk.schemas.queue import (
    QueueAssignRequest,
    QueueAssignResponse,
    QueueItem,
    QueueListResponse,
)
from queuedesk.services.queue_service import QueueService
from queuedesk.utils.security import get_current_user

router = APIRouter()


@router.get("/", response_model=QueueListResponse)
async def list_queue(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> QueueListResponse:
    """Waiting appointments in the order they will be served."""
    entries = await QueueService(db).list_queue(current_user.id)
    responses = await build_responses(db, current_user.id, [entry[0] for entry in entries])
    items = [
        QueueItem(appointment=response, queue_position=position, waiting_minutes=waited)
        for response, (_, position, waited) in zip(responses, entries)
    ]
    return QueueListResponse(items=items, total=len(items))


@router.post("/assign", response_model=QueueAssignResponse)
async def assign_from_queue(
    request: Optional[QueueAssignRequest] = Body(None),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> QueueAssignResponse:
    """Promote the earliest waiting appointment to a staff member."""
    staff_id = request.staff_id if request else None
    result = await QueueService(db).promote_next(current_user.id, staff_id=staff_id)

    appointment = None
    if result.appointment is not None:
        appointment = await build_response(db, current_user.id, result.appointment)
    return QueueAssignResponse(
        assigned=result.assigned,
        message=result.message,
        appointment=appointment,
    )
