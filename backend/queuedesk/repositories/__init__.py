"""Repositories package initialization."""

from queuedesk.repositories.activity_repository import ActivityRepository
from queuedesk.repositories.appointment_repository import AppointmentRepository
from queuedesk.repositories.service_repository import ServiceRepository
from queuedesk.repositories.staff_repository import StaffRepository
from queuedesk.repositories.user_repository import UserRepository

__all__ = [
    "ActivityRepository",
    "AppointmentRepository",
    "ServiceRepository",
    "StaffRepository",
    "UserRepository",
]
