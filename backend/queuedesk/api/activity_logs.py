"""Activity history API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.api.appointments import build_responses
from queuedesk.database import get_db
from queuedesk.models.user import User
from queuedesk.schemas.activity import ActivityLogListResponse, ActivityLogResponse
from queuedesk.services.activity_service import MAX_ACTIVITY_LIMIT, ActivityService
from queuedesk.utils.security import get_current_user

router = APIRouter()


@router.get("/", response_model=ActivityLogListResponse)
async def list_activity_logs(
    limit: Optional[int] = Query(None, ge=1, le=MAX_ACTIVITY_LIMIT),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ActivityLogListResponse:
    """Most recent activity first, with the appointment resolved when it still exists."""
    entries = await ActivityService(db).list_recent(current_user.id, limit)

    existing = [appointment for _, appointment in entries if appointment is not None]
    responses = {
        response.id: response
        for response in await build_responses(db, current_user.id, existing)
    }

    logs = []
    for entry, appointment in entries:
        logs.append(
            ActivityLogResponse(
                id=entry.id,
                appointment_id=entry.appointment_id,
                action=entry.action,
                description=entry.description,
                timestamp=entry.timestamp,
                appointment=responses.get(appointment.id) if appointment else None,
            )
        )
    return ActivityLogListResponse(logs=logs)
