"""
Booking Ledger

Owns Booking records and answers the one question the whole reservation
flow depends on: does a date range collide with an Active booking of the
same vehicle? Ranges are half-open, so same-day turnover is allowed.

The ledger does not serialize callers. The Reservation Service holds the
per-vehicle lock around "check overlap, then insert".
"""
from datetime import date
from typing import List, Optional

from rental.core.exceptions import NotFoundError, ValidationError
from rental.models.booking import Booking, BookingStatus
from rental.repositories.base import BookingRepository


class BookingLedger:
    """Booking records and the half-open overlap test"""

    def __init__(self, repository: BookingRepository):
        self.repository = repository

    async def has_overlap(
        self,
        vehicle_id: int,
        start: date,
        end: date,
        exclude_booking_id: Optional[int] = None
    ) -> bool:
        """
        Check whether [start, end) intersects an Active booking of the vehicle.

        Args:
            vehicle_id: Vehicle to check
            start: First day of the requested period
            end: Day the vehicle is returned (not part of the period)
            exclude_booking_id: Booking to ignore, used when moving a booking

        Returns:
            True if any other Active booking overlaps
        """
        return await self.find_conflict(vehicle_id, start, end, exclude_booking_id) is not None

    async def find_conflict(
        self,
        vehicle_id: int,
        start: date,
        end: date,
        exclude_booking_id: Optional[int] = None
    ) -> Optional[Booking]:
        """First Active booking of the vehicle overlapping [start, end), if any."""
        for booking in await self.repository.list_by_vehicle(vehicle_id):
            if not booking.is_active or booking.id == exclude_booking_id:
                continue
            if booking.overlaps(start, end):
                return booking
        return None

    async def insert(self, vehicle_id: int, customer_id: int, start: date, end: date) -> int:
        """
        Store a new Active booking. Overlap must already have been ruled out.

        Raises:
            ValidationError: If end is not after start
        """
        self._validate_range(start, end)
        booking = await self.repository.add(Booking(
            vehicle_id=vehicle_id,
            customer_id=customer_id,
            start_date=start,
            end_date=end,
        ))
        return booking.id

    async def set_dates(self, booking_id: int, start: date, end: date) -> None:
        self._validate_range(start, end)
        booking = await self.get(booking_id)
        if not booking.is_active:
            raise NotFoundError(f"Booking {booking_id} is cancelled")
        await self.repository.update(
            booking.model_copy(update={"start_date": start, "end_date": end})
        )

    async def cancel(self, booking_id: int) -> None:
        """Mark a booking Cancelled. Already-cancelled bookings are left as they are."""
        booking = await self.get(booking_id)
        if booking.is_active:
            await self.repository.update(
                booking.model_copy(update={"status": BookingStatus.CANCELLED})
            )

    async def get(self, booking_id: int) -> Booking:
        booking = await self.repository.get(booking_id)
        if booking is None:
            raise NotFoundError(f"Booking {booking_id} not found")
        return booking

    async def list_by_vehicle(self, vehicle_id: int) -> List[Booking]:
        return await self.repository.list_by_vehicle(vehicle_id)

    async def list_by_customer(self, customer_id: int) -> List[Booking]:
        return await self.repository.list_by_customer(customer_id)

    async def list_all(self) -> List[Booking]:
        return await self.repository.list_all()

    async def list_active_by_vehicle(self, vehicle_id: int) -> List[Booking]:
        return [b for b in await self.repository.list_by_vehicle(vehicle_id) if b.is_active]

    async def list_active_by_customer(self, customer_id: int) -> List[Booking]:
        return [b for b in await self.repository.list_by_customer(customer_id) if b.is_active]

    async def active_covering(self, vehicle_id: int, day: date) -> Optional[Booking]:
        """The Active booking of the vehicle that includes ``day``, if any."""
        for booking in await self.list_active_by_vehicle(vehicle_id):
            if booking.covers(day):
                return booking
        return None

    @staticmethod
    def _validate_range(start: date, end: date) -> None:
        if end <= start:
            raise ValidationError(
                f"end_date ({end.isoformat()}) must be after start_date ({start.isoformat()})"
            )
