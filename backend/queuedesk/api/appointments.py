"""Appointment API endpoints."""

from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.database import get_db
from queuedesk.models.appointment import Appointment, AppointmentStatus
from queuedesk.models.service import Service
from queuedesk.models.staff import Staff
from queuedesk.models.user import User
from queuedesk.repositories.service_repository import ServiceRepository
from queuedesk.repositories.staff_repository import StaffRepository
from queuedesk.schemas.activity import ActivityLogListResponse, ActivityLogResponse
from queuedesk.schemas.appointment import (
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentResponse,
    AppointmentUpdate,
    MessageResponse,
)
from queuedesk.schemas.service import ServiceResponse
from queuedesk.schemas.staff import StaffResponse
from queuedesk.services.activity_service import ActivityService
from queuedesk.services.appointment_service import AppointmentService
from queuedesk.services.queue_service import QueueService
from queuedesk.utils.security import get_current_user

router = APIRouter()


def appointment_to_response(
    appointment: Appointment,
    service: Optional[Service],
    staff: Optional[Staff],
    queue_position: Optional[int] = None,
) -> AppointmentResponse:
    return AppointmentResponse(
        id=appointment.id,
        customer_name=appointment.customer_name,
        service_id=appointment.service_id,
        staff_id=appointment.staff_id,
        appointment_date=appointment.appointment_date,
        status=appointment.status,
        queue_position=queue_position,
        service=ServiceResponse.model_validate(service) if service else None,
        staff=StaffResponse.model_validate(staff) if staff else None,
        created_at=appointment.created_at,
        updated_at=appointment.updated_at,
    )


async def build_responses(
    db: AsyncSession,
    owner_id: int,
    appointments: List[Appointment],
) -> List[AppointmentResponse]:
    """Resolve service, staff and queue position for each appointment."""
    services: Dict[int, Service] = await ServiceRepository(db).get_many(owner_id)
    staff: Dict[int, Staff] = await StaffRepository(db).get_many(owner_id)
    positions: Dict[int, int] = {}
    if any(a.status == AppointmentStatus.WAITING.value for a in appointments):
        positions = await QueueService(db).queue_positions(owner_id)

    return [
        appointment_to_response(
            appointment,
            services.get(appointment.service_id),
            staff.get(appointment.staff_id) if appointment.staff_id else None,
            positions.get(appointment.id),
        )
        for appointment in appointments
    ]


async def build_response(
    db: AsyncSession, owner_id: int, appointment: Appointment
) -> AppointmentResponse:
    return (await build_responses(db, owner_id, [appointment]))[0]


@router.post("/", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    payload: AppointmentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AppointmentResponse:
    """Create an appointment; it is scheduled or queued depending on staff availability."""
    appointment = await AppointmentService(db).create_appointment(
        current_user.id,
        customer_name=payload.customer_name,
        service_id=payload.service_id,
        appointment_date=payload.appointment_date,
        staff_id=payload.staff_id,
    )
    return await build_response(db, current_user.id, appointment)


@router.get("/", response_model=AppointmentListResponse)
async def list_appointments(
    staff_id: Optional[int] = None,
    day: Optional[date] = Query(None, alias="date"),
    status_filter: Optional[AppointmentStatus] = Query(None, alias="status"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AppointmentListResponse:
    """List appointments ordered by appointment time."""
    appointments = await AppointmentService(db).list_appointments(
        current_user.id,
        staff_id=staff_id,
        day=day,
        status=status_filter.value if status_filter else None,
    )
    responses = await build_responses(db, current_user.id, appointments)
    return AppointmentListResponse(appointments=responses, total=len(responses))


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AppointmentResponse:
    appointment = await AppointmentService(db).get_appointment(current_user.id, appointment_id)
    return await build_response(db, current_user.id, appointment)


@router.get("/{appointment_id}/activity", response_model=ActivityLogListResponse)
async def get_appointment_activity(
    appointment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ActivityLogListResponse:
    """Activity history of one appointment, oldest entry first."""
    appointment = await AppointmentService(db).get_appointment(current_user.id, appointment_id)
    entries = await ActivityService(db).history(current_user.id, appointment.id)
    response = await build_response(db, current_user.id, appointment)
    return ActivityLogListResponse(
        logs=[
            ActivityLogResponse(
                id=entry.id,
                appointment_id=entry.appointment_id,
                action=entry.action,
                description=entry.description,
                timestamp=entry.timestamp,
                appointment=response,
            )
            for entry in entries
        ]
    )


@router.patch("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    payload: AppointmentUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AppointmentResponse:
    """Manual edit of status, staff or time; bypasses conflict and capacity checks."""
    appointment = await AppointmentService(db).update_appointment(
        current_user.id,
        appointment_id,
        payload.model_dump(exclude_unset=True),
    )
    return await build_response(db, current_user.id, appointment)


@router.post("/{appointment_id}/complete", response_model=AppointmentResponse)
async def complete_appointment(
    appointment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AppointmentResponse:
    appointment = await AppointmentService(db).complete_appointment(
        current_user.id, appointment_id
    )
    return await build_response(db, current_user.id, appointment)


@router.post("/{appointment_id}/cancel", response_model=AppointmentResponse)
async def cancel_appointment(
    appointment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AppointmentResponse:
    appointment = await AppointmentService(db).cancel_appointment(
        current_user.id, appointment_id
    )
    return await build_response(db, current_user.id, appointment)


@router.delete("/{appointment_id}", response_model=MessageResponse)
async def delete_appointment(
    appointment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """Cancel and remove an appointment."""
    await AppointmentService(db).delete_appointment(current_user.id, appointment_id)
    return MessageResponse(message="Deleted")


@router.delete("/{appointment_id}/purge", response_model=MessageResponse)
async def purge_appointment(
    appointment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """Remove an appointment record without logging a cancellation."""
    await AppointmentService(db).purge_appointment(current_user.id, appointment_id)
    return MessageResponse(message="Appointment deleted successfully")
