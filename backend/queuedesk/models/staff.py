"""Staff model."""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from queuedesk.database import Base


class StaffAvailability(str, Enum):
    AVAILABLE = "available"
    ON_LEAVE = "on_leave"


class Staff(Base):
    """A staff member who can be assigned appointments."""

    __tablename__ = "staff"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # Matched verbatim against Service.required_staff_type
    service_type: Mapped[str] = mapped_column(String(100), nullable=False)
    daily_capacity: Mapped[int] = mapped_column(Integer, default=5, nullable=False)
    availability: Mapped[str] = mapped_column(
        String(20),
        default=StaffAvailability.AVAILABLE.value,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<Staff {self.id} {self.name} ({self.service_type})>"
