from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from queuedesk.database import Base
from queuedesk.utils.timeutils import utcnow


class ActivityAction(str, Enum):
    SCHEDULED = "scheduled"
    QUEUED = "queued"
    STATUS_CHANGED = "status_changed"
    CANCELLED = "cancelled"
    ASSIGNED_FROM_QUEUE = "assigned_from_queue"
    AUTO_ASSIGNED = "auto_assigned"
    COMPLETED = "completed"


class ActivityLog(Base):
    __tablename__ = "activity_logs"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    # Not a foreign key: entries outlive deleted appointments.
    appointment_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
