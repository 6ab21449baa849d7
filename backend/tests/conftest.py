"""Pytest configuration and fixtures for backend tests."""

import os

os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BUSINESS_TIMEZONE"] = "UTC"

from collections.abc import AsyncGenerator
from datetime import datetime, timezone
from typing import Any, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import queuedesk.models  # noqa: F401
from queuedesk.database import Base, get_db
from queuedesk.main import app
from queuedesk.models.appointment import Appointment, AppointmentStatus
from queuedesk.models.service import Service
from queuedesk.models.staff import Staff
from queuedesk.models.user import User
from queuedesk.utils.security import create_access_token, get_password_hash

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine() -> AsyncGenerator[Any, None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db(test_engine: Any) -> AsyncGenerator[AsyncSession, None]:
    session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )
    async with session_maker() as session:
        yield session
        await session.rollback()


async def _create_user(db: AsyncSession, email: str) -> User:
    user = User(
        email=email,
        hashed_password=get_password_hash("password123"),
        full_name="Test Manager",
        is_active=True,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def owner(db: AsyncSession) -> User:
    return await _create_user(db, "manager@example.com")


@pytest_asyncio.fixture
async def other_owner(db: AsyncSession) -> User:
    return await _create_user(db, "other.manager@example.com")


@pytest.fixture
def make_staff(db: AsyncSession):
    async def _make(
        owner: User,
        name: str = "Dr. Test",
        service_type: str = "Doctor",
        daily_capacity: int = 5,
    ) -> Staff:
        staff = Staff(
            owner_id=owner.id,
            name=name,
            service_type=service_type,
            daily_capacity=daily_capacity,
        )
        db.add(staff)
        await db.commit()
        await db.refresh(staff)
        return staff

    return _make


@pytest.fixture
def make_service(db: AsyncSession):
    async def _make(
        owner: User,
        name: str = "General Checkup",
        duration_minutes: int = 30,
        required_staff_type: str = "Doctor",
    ) -> Service:
        service = Service(
            owner_id=owner.id,
            name=name,
            duration_minutes=duration_minutes,
            required_staff_type=required_staff_type,
        )
        db.add(service)
        await db.commit()
        await db.refresh(service)
        return service

    return _make


@pytest.fixture
def make_appointment(db: AsyncSession):
    """Insert an appointment directly, bypassing the assignment rules."""

    async def _make(
        owner: User,
        service: Service,
        when: datetime,
        staff: Optional[Staff] = None,
        status: str = AppointmentStatus.SCHEDULED.value,
        customer_name: str = "Existing Customer",
    ) -> Appointment:
        appointment = Appointment(
            owner_id=owner.id,
            customer_name=customer_name,
            service_id=service.id,
            staff_id=staff.id if staff else None,
            appointment_date=when.astimezone(timezone.utc).replace(tzinfo=None),
            status=status,
        )
        db.add(appointment)
        await db.commit()
        await db.refresh(appointment)
        return appointment

    return _make


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the test session, committing or rolling back per request like get_db."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        try:
            yield db
            await db.commit()
        except Exception:
            await db.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(owner: User) -> dict:
    token = create_access_token(user_id=owner.id, email=owner.email)
    return {"Authorization": f"Bearer {token}"}
