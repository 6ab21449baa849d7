"""Appointment model for customer bookings and the waiting queue."""

from datetime import datetime
from enum import Enum
from typing import FrozenSet, Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from queuedesk.database import Base


class AppointmentStatus(str, Enum):
    """Appointment lifecycle status."""
    WAITING = "waiting"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


# Statuses that still occupy demand
ACTIVE_STATUSES: FrozenSet[str] = frozenset(
    {AppointmentStatus.SCHEDULED.value, AppointmentStatus.WAITING.value}
)
TERMINAL_STATUSES: FrozenSet[str] = frozenset(
    {AppointmentStatus.COMPLETED.value, AppointmentStatus.CANCELLED.value}
)


class Appointment(Base):
    """A customer booking; ``staff_id`` is empty while the appointment waits."""

    __tablename__ = "appointments"
    __table_args__ = (
        Index("ix_appointments_staff_date", "staff_id", "appointment_date"),
        Index("ix_appointments_owner_status_date", "owner_id", "status", "appointment_date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)

    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    service_id: Mapped[int] = mapped_column(ForeignKey("services.id"), nullable=False)
    staff_id: Mapped[Optional[int]] = mapped_column(ForeignKey("staff.id"), nullable=True)

    # Naive UTC
    appointment_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        default=AppointmentStatus.WAITING.value,
        nullable=False,
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<Appointment {self.id} ({self.status})>"
