"""
Reservation Service - Booking Lifecycle

The only entry point for booking state changes. Each mutation runs under
the vehicle's lock so "check overlap, then write" cannot interleave with
another mutation of the same vehicle:

1. Validate dates
2. Resolve vehicle and customer
3. Reject overlapping Active bookings
4. Write the booking (after a final deadline check)

Availability is not stored anywhere; it is computed from the ledger on
every call, so it can never drift from the bookings.
"""
from datetime import date
from typing import Any, List, Optional, Tuple

from rental.core.exceptions import ConflictError, NotFoundError
from rental.core.locks import Deadline, KeyedLock, customer_key, vehicle_key
from rental.models.booking import Booking
from rental.models.vehicle import Vehicle
from rental.services.booking_ledger import BookingLedger
from rental.services.customer_service import CustomerRegistry
from rental.services.fleet_service import FleetStore
from rental.utils.dates import DateLike, parse_date, parse_date_range


class ReservationService:
    """Service for reserving vehicles (Async)"""

    def __init__(
        self,
        fleet: FleetStore,
        customers: CustomerRegistry,
        ledger: BookingLedger,
        locks: KeyedLock,
        default_timeout: Optional[float] = None
    ):
        self.fleet = fleet
        self.customers = customers
        self.ledger = ledger
        self.locks = locks
        self.default_timeout = default_timeout

    async def book(
        self,
        vehicle_id: int,
        customer_id: int,
        start: DateLike,
        end: DateLike,
        timeout: Optional[float] = None
    ) -> int:
        """
        Reserve a vehicle for [start, end).

        Args:
            vehicle_id: Vehicle to reserve
            customer_id: Renting customer
            start: Pick-up date
            end: Return date, strictly after start
            timeout: Deadline in seconds, defaults to the configured one

        Returns:
            The new booking ID

        Raises:
            ValidationError: If a date is missing, malformed or end <= start
            NotFoundError: If the vehicle or customer does not exist
            ConflictError: If the vehicle is already booked in the period
            DeadlineExceededError: If the deadline passed before the write
        """
        start_date, end_date = parse_date_range(start, end)
        deadline = self._deadline(timeout)
        async with self.locks.hold(vehicle_key(vehicle_id), customer_key(customer_id), deadline=deadline):
            await self.fleet.get(vehicle_id)
            await self.customers.get(customer_id)
            await self._ensure_free(vehicle_id, start_date, end_date)
            deadline.check()
            return await self.ledger.insert(vehicle_id, customer_id, start_date, end_date)

    async def update_booking(
        self,
        booking_id: int,
        start: DateLike,
        end: DateLike,
        timeout: Optional[float] = None
    ) -> None:
        """
        Move an Active booking to new dates.

        The booking's own current interval is ignored by the overlap check,
        so re-submitting unchanged dates succeeds.

        Raises:
            ValidationError: If a date is missing, malformed or end <= start
            NotFoundError: If the booking does not exist or is cancelled
            ConflictError: If another Active booking overlaps the new dates
            DeadlineExceededError: If the deadline passed before the write
        """
        start_date, end_date = parse_date_range(start, end)
        deadline = self._deadline(timeout)
        booking = await self._get_active(booking_id)
        async with self.locks.hold(vehicle_key(booking.vehicle_id), deadline=deadline):
            # Re-read under the lock; it may have been cancelled meanwhile
            booking = await self._get_active(booking_id)
            await self._ensure_free(booking.vehicle_id, start_date, end_date, exclude_booking_id=booking_id)
            deadline.check()
            await self.ledger.set_dates(booking_id, start_date, end_date)

    async def cancel_booking(self, booking_id: int, timeout: Optional[float] = None) -> None:
        """
        Cancel a booking. Cancelling twice is a no-op success.

        Raises:
            NotFoundError: If the booking never existed
            DeadlineExceededError: If the deadline passed before the write
        """
        deadline = self._deadline(timeout)
        booking = await self.ledger.get(booking_id)
        if not booking.is_active:
            return
        async with self.locks.hold(vehicle_key(booking.vehicle_id), deadline=deadline):
            deadline.check()
            await self.ledger.cancel(booking_id)

    async def current_availability(self, vehicle_id: int, as_of: Optional[DateLike] = None) -> bool:
        """True if no Active booking of the vehicle covers ``as_of`` (default: today)."""
        await self.fleet.get(vehicle_id)
        day = self._as_of(as_of)
        return await self.ledger.active_covering(vehicle_id, day) is None

    async def fleet_availability(self, as_of: Optional[DateLike] = None) -> List[Tuple[Vehicle, bool]]:
        """
        Every vehicle paired with its availability on ``as_of``, in fleet order.

        Works from one fleet snapshot; a vehicle removed while the listing
        runs still appears with the state it had in the snapshot.
        """
        day = self._as_of(as_of)
        return [
            (vehicle, await self.ledger.active_covering(vehicle.id, day) is None)
            for vehicle in await self.fleet.list()
        ]

    async def available_vehicles(self, as_of: Optional[DateLike] = None) -> List[Vehicle]:
        """Vehicles with no Active booking covering ``as_of``, in fleet order."""
        return [vehicle for vehicle, available in await self.fleet_availability(as_of) if available]

    async def get_booking(self, booking_id: int) -> Booking:
        return await self.ledger.get(booking_id)

    async def list_bookings(
        self,
        vehicle_id: Optional[int] = None,
        customer_id: Optional[int] = None
    ) -> List[Booking]:
        """Bookings, optionally narrowed to one vehicle and/or customer."""
        if vehicle_id is not None:
            bookings = await self.ledger.list_by_vehicle(vehicle_id)
        elif customer_id is not None:
            bookings = await self.ledger.list_by_customer(customer_id)
        else:
            bookings = await self.ledger.list_all()
        if customer_id is not None:
            bookings = [b for b in bookings if b.customer_id == customer_id]
        return bookings

    # ========================================================================
    # Private Helper Methods
    # ========================================================================

    async def _get_active(self, booking_id: int) -> Booking:
        booking = await self.ledger.get(booking_id)
        if not booking.is_active:
            raise NotFoundError(f"Booking {booking_id} is cancelled")
        return booking

    async def _ensure_free(
        self,
        vehicle_id: int,
        start: date,
        end: date,
        exclude_booking_id: Optional[int] = None
    ) -> None:
        conflict = await self.ledger.find_conflict(vehicle_id, start, end, exclude_booking_id)
        if conflict is not None:
            raise ConflictError(
                f"Vehicle {vehicle_id} is already booked from {conflict.start_date.isoformat()} "
                f"to {conflict.end_date.isoformat()} (booking {conflict.id})"
            )

    def _deadline(self, timeout: Optional[float]) -> Deadline:
        return Deadline(timeout if timeout is not None else self.default_timeout)

    @staticmethod
    def _as_of(as_of: Any) -> date:
        if as_of is None:
            return date.today()
        return parse_date(as_of, "as_of")
