"""Demo catalogue seeding for a manager account."""

from typing import Dict

from sqlalchemy.ext.asyncio import AsyncSession

from queuedesk.models.service import Service
from queuedesk.models.staff import Staff, StaffAvailability
from queuedesk.repositories.service_repository import ServiceRepository
from queuedesk.repositories.staff_repository import StaffRepository
from queuedesk.utils.logging import get_logger

logger = get_logger("services.demo")

DEMO_STAFF = [
    {"name": "Dr. Riya Sharma", "service_type": "Doctor", "daily_capacity": 5},
    {"name": "Farhan Ahmed", "service_type": "Doctor", "daily_capacity": 5},
    {"name": "Sarah Johnson", "service_type": "Consultant", "daily_capacity": 6},
    {"name": "Mike Chen", "service_type": "Support Agent", "daily_capacity": 10},
]

DEMO_SERVICES = [
    {"name": "General Checkup", "duration_minutes": 30, "required_staff_type": "Doctor"},
    {"name": "Consultation", "duration_minutes": 60, "required_staff_type": "Consultant"},
    {"name": "Follow-up Appointment", "duration_minutes": 15, "required_staff_type": "Doctor"},
    {"name": "Technical Support", "duration_minutes": 30, "required_staff_type": "Support Agent"},
]


async def seed_demo_catalogue(db: AsyncSession, owner_id: int) -> Dict[str, int]:
    """Create demo staff and services unless the owner already has staff.

    Returns the number of staff and services created (zero when skipped).
    """
    staff_repo = StaffRepository(db)
    if await staff_repo.exists_for_owner(owner_id):
        logger.info("demo_seed_skipped", owner_id=owner_id)
        return {"staff_count": 0, "service_count": 0}

    for data in DEMO_STAFF:
        await staff_repo.add(
            Staff(owner_id=owner_id, availability=StaffAvailability.AVAILABLE.value, **data)
        )

    service_repo = ServiceRepository(db)
    for data in DEMO_SERVICES:
        await service_repo.add(Service(owner_id=owner_id, **data))

    logger.info(
        "demo_seed_created",
        owner_id=owner_id,
        staff_count=len(DEMO_STAFF),
        service_count=len(DEMO_SERVICES),
    )
    return {"staff_count": len(DEMO_STAFF), "service_count": len(DEMO_SERVICES)}
