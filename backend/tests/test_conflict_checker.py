from datetime import datetime, timezone

import pytest

from queuedesk.models.appointment import AppointmentStatus
from queuedesk.services.conflict_checker import ConflictChecker


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2030, 1, 15, hour, minute, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_no_conflict_for_free_staff(db, owner, make_staff):
    staff = await make_staff(owner)

    assert await ConflictChecker(db).has_conflict(owner.id, staff.id, at(10), 30) is False


@pytest.mark.asyncio
async def test_same_start_time_conflicts(db, owner, make_staff, make_service, make_appointment):
    staff = await make_staff(owner)
    service = await make_service(owner)
    existing = await make_appointment(owner, service, at(10), staff=staff)

    checker = ConflictChecker(db)
    conflict = await checker.find_conflict(owner.id, staff.id, at(10), 30)

    assert conflict is not None
    assert conflict.id == existing.id


@pytest.mark.asyncio
async def test_lookback_window_is_one_hour(db, owner, make_staff, make_service, make_appointment):
    staff = await make_staff(owner)
    service = await make_service(owner)
    await make_appointment(owner, service, at(9, 1), staff=staff)

    checker = ConflictChecker(db)
    # 09:01 is 59 minutes before 10:00
    assert await checker.has_conflict(owner.id, staff.id, at(10), 30) is True
    # 61 minutes before 10:02 is outside the lookback
    assert await checker.has_conflict(owner.id, staff.id, at(10, 2), 30) is False


@pytest.mark.asyncio
async def test_window_end_is_exclusive(db, owner, make_staff, make_service, make_appointment):
    staff = await make_staff(owner)
    service = await make_service(owner)
    await make_appointment(owner, service, at(10, 30), staff=staff)

    checker = ConflictChecker(db)
    # 10:00 + 30 minutes ends exactly at 10:30
    assert await checker.has_conflict(owner.id, staff.id, at(10), 30) is False
    assert await checker.has_conflict(owner.id, staff.id, at(10), 60) is True


@pytest.mark.asyncio
async def test_only_active_appointments_conflict(db, owner, make_staff, make_service, make_appointment):
    staff = await make_staff(owner)
    service = await make_service(owner)
    for status in (
        AppointmentStatus.COMPLETED.value,
        AppointmentStatus.CANCELLED.value,
        AppointmentStatus.NO_SHOW.value,
    ):
        await make_appointment(owner, service, at(10), staff=staff, status=status)

    assert await ConflictChecker(db).has_conflict(owner.id, staff.id, at(10), 30) is False

    await make_appointment(
        owner, service, at(10), staff=staff, status=AppointmentStatus.WAITING.value
    )
    assert await ConflictChecker(db).has_conflict(owner.id, staff.id, at(10), 30) is True


@pytest.mark.asyncio
async def test_excluded_appointment_is_ignored(db, owner, make_staff, make_service, make_appointment):
    staff = await make_staff(owner)
    service = await make_service(owner)
    existing = await make_appointment(owner, service, at(10), staff=staff)

    checker = ConflictChecker(db)
    assert await checker.has_conflict(
        owner.id, staff.id, at(10), 30, exclude_appointment_id=existing.id
    ) is False


@pytest.mark.asyncio
async def test_other_staff_bookings_do_not_conflict(db, owner, make_staff, make_service, make_appointment):
    staff = await make_staff(owner, name="A")
    colleague = await make_staff(owner, name="B")
    service = await make_service(owner)
    await make_appointment(owner, service, at(10), staff=colleague)

    assert await ConflictChecker(db).has_conflict(owner.id, staff.id, at(10), 30) is False


@pytest.mark.asyncio
async def test_custom_lookback(db, owner, make_staff, make_service, make_appointment):
    staff = await make_staff(owner)
    service = await make_service(owner)
    await make_appointment(owner, service, at(9, 45), staff=staff)

    checker = ConflictChecker(db, lookback_minutes=10)
    assert await checker.has_conflict(owner.id, staff.id, at(10), 30) is False
