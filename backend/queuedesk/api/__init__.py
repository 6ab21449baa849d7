"""API package initialization."""

from queuedesk.api.activity_logs import router as activity_logs_router
from queuedesk.api.appointments import router as appointments_router
from queuedesk.api.auth import router as auth_router
from queuedesk.api.dashboard import router as dashboard_router
from queuedesk.api.queue import router as queue_router
from queuedesk.api.services import router as services_router
from queuedesk.api.setup import router as setup_router
from queuedesk.api.staff import router as staff_router

__all__ = [
    "auth_router",
    "staff_router",
    "services_router",
    "appointments_router",
    "queue_router",
    "activity_logs_router",
    "dashboard_router",
    "setup_router",
]
