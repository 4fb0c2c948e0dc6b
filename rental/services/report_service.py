"""
Report Service - Read-only Aggregations

Revenue is price_per_day x nights, counting only the nights of Active
bookings that fall inside the requested period. Bookings whose vehicle has
since been removed are skipped.
"""
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel

from rental.core.exceptions import ValidationError
from rental.models.customer import Customer
from rental.models.vehicle import Vehicle
from rental.services.booking_ledger import BookingLedger
from rental.services.customer_service import CustomerRegistry
from rental.services.fleet_service import FleetStore
from rental.services.reservation_service import ReservationService
from rental.utils.dates import DateLike, month_bounds, nights_within, parse_date_range
from rental.utils.money import quantize


class RentalHistoryEntry(BaseModel):
    customer: Customer
    booking_count: int


class ReportService:
    """Service for booking and fleet reports"""

    def __init__(
        self,
        fleet: FleetStore,
        customers: CustomerRegistry,
        ledger: BookingLedger,
        reservations: ReservationService
    ):
        self.fleet = fleet
        self.customers = customers
        self.ledger = ledger
        self.reservations = reservations

    async def revenue(self, period_start: DateLike, period_end: DateLike) -> Decimal:
        """
        Revenue earned in [period_start, period_end).

        Raises:
            ValidationError: If the period is malformed or empty
        """
        start, end = parse_date_range(period_start, period_end)
        prices = await self._price_index()
        total = Decimal("0")
        for booking in await self.ledger.list_all():
            price = prices.get(booking.vehicle_id)
            if not booking.is_active or price is None:
                continue
            nights = nights_within(booking.start_date, booking.end_date, start, end)
            total += price * nights
        return quantize(total)

    async def monthly_revenue(self, year: int) -> Dict[int, Decimal]:
        """Revenue per calendar month (1..12) of ``year``."""
        if not 1 <= year <= 9998:
            raise ValidationError(f"Invalid year {year}")
        result = {}
        for month in range(1, 13):
            first, after_last = month_bounds(year, month)
            result[month] = await self.revenue(first, after_last)
        return result

    async def rental_history(self) -> List[RentalHistoryEntry]:
        """Number of Active bookings per customer, in registration order."""
        counts: Dict[int, int] = {}
        for booking in await self.ledger.list_all():
            if booking.is_active:
                counts[booking.customer_id] = counts.get(booking.customer_id, 0) + 1
        return [
            RentalHistoryEntry(customer=customer, booking_count=counts.get(customer.id, 0))
            for customer in await self.customers.list()
        ]

    async def available_vehicles(self, as_of: Optional[DateLike] = None) -> List[Vehicle]:
        return await self.reservations.available_vehicles(as_of)

    async def _price_index(self) -> Dict[int, Decimal]:
        return {vehicle.id: vehicle.price_per_day for vehicle in await self.fleet.list()}


def month_name(month: int) -> str:
    return date(2000, month, 1).strftime("%B")
