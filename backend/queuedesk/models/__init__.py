"""Models package initialization."""

from queuedesk.models.activity_log import ActivityAction, ActivityLog
from queuedesk.models.appointment import (
    ACTIVE_STATUSES,
    TERMINAL_STATUSES,
    Appointment,
    AppointmentStatus,
)
from queuedesk.models.service import ALLOWED_DURATIONS, Service
from queuedesk.models.staff import Staff, StaffAvailability
from queuedesk.models.user import User

__all__ = [
    # User
    "User",
    # Staff
    "Staff",
    "StaffAvailability",
    # Service
    "Service",
    "ALLOWED_DURATIONS",
    # Appointment
    "Appointment",
    "AppointmentStatus",
    "ACTIVE_STATUSES",
    "TERMINAL_STATUSES",
    # Activity
    "ActivityLog",
    "ActivityAction",
]
