"""Seed a demo manager account with staff and services.

Usage: python seed_data.py
"""

import asyncio

from sqlalchemy import select

from queuedesk.database import async_session_maker, init_db
from queuedesk.models.user import User
from queuedesk.services.demo_service import seed_demo_catalogue
from queuedesk.utils.logging import get_logger, setup_logging
from queuedesk.utils.security import get_password_hash

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo12345"

logger = get_logger("seed_data")


async def seed() -> None:
    await init_db()

    async with async_session_maker() as db:
        result = await db.execute(select(User).where(User.email == DEMO_EMAIL))
        user = result.scalar_one_or_none()
        if user is None:
            user = User(
                email=DEMO_EMAIL,
                hashed_password=get_password_hash(DEMO_PASSWORD),
                full_name="Demo Manager",
                is_active=True,
            )
            db.add(user)
            await db.flush()
            logger.info("demo_user_created", user_id=user.id)

        created = await seed_demo_catalogue(db, user.id)
        await db.commit()

    logger.info("seed_complete", email=DEMO_EMAIL, **created)


if __name__ == "__main__":
    setup_logging()
    asyncio.run(seed())
