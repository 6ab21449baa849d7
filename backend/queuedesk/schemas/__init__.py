"""Schemas package initialization."""

from queuedesk.schemas.activity import ActivityLogListResponse, ActivityLogResponse
from queuedesk.schemas.appointment import (
    AppointmentCreate,
    AppointmentListResponse,
    AppointmentResponse,
    AppointmentUpdate,
    MessageResponse,
)
from queuedesk.schemas.auth import LoginRequest, RegisterRequest, Token, TokenPayload
from queuedesk.schemas.dashboard import DashboardStats, StaffLoad
from queuedesk.schemas.queue import (
    QueueAssignRequest,
    QueueAssignResponse,
    QueueItem,
    QueueListResponse,
)
from queuedesk.schemas.service import ServiceCreate, ServiceResponse
from queuedesk.schemas.staff import StaffCreate, StaffResponse, StaffUpdate
from queuedesk.schemas.user import UserResponse

__all__ = [
    # Auth
    "Token",
    "TokenPayload",
    "LoginRequest",
    "RegisterRequest",
    # User
    "UserResponse",
    # Staff
    "StaffCreate",
    "StaffUpdate",
    "StaffResponse",
    # Service
    "ServiceCreate",
    "ServiceResponse",
    # Appointment
    "AppointmentCreate",
    "AppointmentUpdate",
    "AppointmentResponse",
    "AppointmentListResponse",
    "MessageResponse",
    # Queue
    "QueueAssignRequest",
    "QueueAssignResponse",
    "QueueItem",
    "QueueListResponse",
    # Activity
    "ActivityLogResponse",
    "ActivityLogListResponse",
    # Dashboard
    "DashboardStats",
    "StaffLoad",
]
