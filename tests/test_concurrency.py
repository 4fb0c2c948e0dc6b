"""
Serialization of booking mutations per vehicle, and deadlines.

A booking repository that yields to the event loop on every call makes
the "check overlap, then insert" window wide enough for concurrent callers
to interleave if the reservation service did not lock the vehicle.
"""
import asyncio

import pytest

from rental.core.dependencies import build_services, get_repositories
from rental.core.exceptions import ConflictError, DeadlineExceededError, NotFoundError
from rental.core.locks import Deadline, KeyedLock, customer_key, license_key, vehicle_key
from rental.models.booking import BookingStatus
from rental.repositories.memory import InMemoryBookingRepository


class SlowBookingRepository(InMemoryBookingRepository):

    def __init__(self, delay: float = 0.01):
        super().__init__()
        self.delay = delay

    async def add(self, booking):
        await asyncio.sleep(self.delay)
        return await super().add(booking)

    async def list_by_vehicle(self, vehicle_id):
        await asyncio.sleep(self.delay)
        return await super().list_by_vehicle(vehicle_id)


def slow_services(delay: float = 0.01, default_timeout: float = 5.0):
    repositories = get_repositories("memory")
    repositories.bookings = SlowBookingRepository(delay)
    return build_services(repositories, default_timeout=default_timeout)


async def seed(services):
    vehicle_id = await services.fleet.add_vehicle("Toyota Corolla", "Car", 100)
    customer_id = await services.customers.add_customer("Thandi Mokoena", "082 555 0101", "DL-1001")
    return vehicle_id, customer_id


async def test_concurrent_overlapping_bookings_only_one_wins():
    services = slow_services()
    vehicle_id, customer_id = await seed(services)

    results = await asyncio.gather(
        *[
            services.reservations.book(vehicle_id, customer_id, "2024-01-01", "2024-01-05")
            for _ in range(5)
        ],
        return_exceptions=True
    )

    booked = [r for r in results if isinstance(r, int)]
    conflicts = [r for r in results if isinstance(r, ConflictError)]
    assert len(booked) == 1
    assert len(conflicts) == 4
    assert len(await services.ledger.list_all()) == 1


async def test_concurrent_non_overlapping_bookings_all_succeed():
    services = slow_services()
    vehicle_id, customer_id = await seed(services)
    periods = [("2024-01-01", "2024-01-05"), ("2024-01-05", "2024-01-09"), ("2024-01-09", "2024-01-12")]

    results = await asyncio.gather(*[
        services.reservations.book(vehicle_id, customer_id, start, end) for start, end in periods
    ])

    assert len(set(results)) == 3


async def test_book_times_out_waiting_for_vehicle_lock():
    services = slow_services()
    vehicle_id, customer_id = await seed(services)

    async with services.reservations.locks.hold(vehicle_key(vehicle_id)):
        with pytest.raises(DeadlineExceededError) as exc_info:
            await services.reservations.book(
                vehicle_id, customer_id, "2024-01-01", "2024-01-05", timeout=0.05
            )

    assert isinstance(exc_info.value, TimeoutError)
    assert await services.ledger.list_all() == []
    # Lock was released; the vehicle can be booked again
    await services.reservations.book(vehicle_id, customer_id, "2024-01-01", "2024-01-05")


async def test_deadline_passing_during_checks_writes_nothing():
    services = slow_services(delay=0.1)
    vehicle_id, customer_id = await seed(services)

    with pytest.raises(DeadlineExceededError):
        await services.reservations.book(
            vehicle_id, customer_id, "2024-01-01", "2024-01-05", timeout=0.05
        )

    assert await services.ledger.list_all() == []


async def test_remove_vehicle_times_out_while_booking_in_progress():
    services = slow_services()
    vehicle_id, _ = await seed(services)

    async with services.fleet.locks.hold(vehicle_key(vehicle_id)):
        with pytest.raises(DeadlineExceededError):
            await services.fleet.remove_vehicle(vehicle_id, timeout=0.05)

    assert (await services.fleet.get(vehicle_id)).id == vehicle_id


async def test_update_booking_times_out_and_keeps_dates():
    services = slow_services()
    vehicle_id, customer_id = await seed(services)
    booking_id = await services.reservations.book(vehicle_id, customer_id, "2024-01-01", "2024-01-05")

    async with services.reservations.locks.hold(vehicle_key(vehicle_id)):
        with pytest.raises(DeadlineExceededError):
            await services.reservations.update_booking(booking_id, "2024-02-01", "2024-02-03", timeout=0.05)

    booking = await services.ledger.get(booking_id)
    assert (booking.start_date.isoformat(), booking.end_date.isoformat()) == ("2024-01-01", "2024-01-05")


async def test_cancel_booking_times_out_and_keeps_booking_active():
    services = slow_services()
    vehicle_id, customer_id = await seed(services)
    booking_id = await services.reservations.book(vehicle_id, customer_id, "2024-01-01", "2024-01-05")

    async with services.reservations.locks.hold(vehicle_key(vehicle_id)):
        with pytest.raises(DeadlineExceededError):
            await services.reservations.cancel_booking(booking_id, timeout=0.05)

    assert (await services.ledger.get(booking_id)).status == BookingStatus.ACTIVE
    assert not await services.reservations.current_availability(vehicle_id, "2024-01-02")


async def test_remove_customer_times_out_and_keeps_customer():
    services = slow_services()
    _, customer_id = await seed(services)

    async with services.customers.locks.hold(customer_key(customer_id)):
        with pytest.raises(DeadlineExceededError):
            await services.customers.remove_customer(customer_id, timeout=0.05)

    assert (await services.customers.get(customer_id)).id == customer_id


async def test_update_vehicle_times_out_and_keeps_vehicle():
    services = slow_services()
    vehicle_id, _ = await seed(services)

    async with services.fleet.locks.hold(vehicle_key(vehicle_id)):
        with pytest.raises(DeadlineExceededError):
            await services.fleet.update_vehicle(vehicle_id, "Toyota Hilux", "Truck", 250, timeout=0.05)

    assert (await services.fleet.get(vehicle_id)).label == "Toyota Corolla"


async def test_update_vehicle_waits_for_removal_in_progress():
    """An update queued behind a removal sees the vehicle gone and writes nothing."""
    services = slow_services()
    vehicle_id, _ = await seed(services)

    async with services.fleet.locks.hold(vehicle_key(vehicle_id)):
        update = asyncio.ensure_future(
            services.fleet.update_vehicle(vehicle_id, "Toyota Hilux", "Truck", 250)
        )
        await asyncio.sleep(0.01)
        assert not update.done()
        await services.fleet.repository.delete(vehicle_id)

    with pytest.raises(NotFoundError):
        await update
    assert await services.fleet.list() == []


async def test_lock_registry_does_not_grow_with_unknown_ids():
    services = slow_services()
    _, customer_id = await seed(services)

    for unknown_vehicle_id in range(1000, 1200):
        with pytest.raises(NotFoundError):
            await services.reservations.book(unknown_vehicle_id, customer_id, "2024-01-01", "2024-01-02")
    with pytest.raises(ConflictError):
        await services.customers.add_customer("Sipho Dlamini", "082 555 0102", "DL-1001")

    assert len(services.reservations.locks._locks) == 0


async def test_keyed_lock_drops_entries_after_holders_and_waiters_leave():
    locks = KeyedLock()

    async with locks.hold(vehicle_key(1), customer_key(1)):
        with pytest.raises(DeadlineExceededError):
            async with locks.hold(vehicle_key(1), deadline=Deadline(0.02)):
                pass
        waiter = asyncio.ensure_future(_hold_briefly(locks, license_key("dl-1")))
        await asyncio.sleep(0)
        assert len(locks._locks) == 3

    await waiter
    assert len(locks._locks) == 0
    assert not locks.locked(vehicle_key(1))


async def _hold_briefly(locks, key):
    async with locks.hold(key):
        await asyncio.sleep(0.01)


async def test_keyed_lock_isolates_keys():
    locks = KeyedLock()
    async with locks.hold(vehicle_key(1)):
        assert locks.locked(vehicle_key(1))
        assert not locks.locked(vehicle_key(2))
        async with locks.hold(vehicle_key(2), deadline=Deadline(0.05)):
            assert locks.locked(vehicle_key(2))
    assert not locks.locked(vehicle_key(1))


def test_deadline_without_timeout_never_expires():
    deadline = Deadline(None)
    assert deadline.remaining() is None
    assert not deadline.expired
    deadline.check()
