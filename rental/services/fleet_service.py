"""
Fleet Store

Vehicle records: add, update, remove, read. Availability is never written
here; see ReservationService.current_availability.
"""
from typing import Any, List, Optional

from rental.core.exceptions import ConflictError, NotFoundError, ValidationError
from rental.core.locks import Deadline, KeyedLock, vehicle_key
from rental.models.vehicle import Vehicle, VehicleCategory
from rental.repositories.base import VehicleRepository
from rental.services.booking_ledger import BookingLedger
from rental.utils.money import to_money


class FleetStore:
    """Service for vehicle records"""

    def __init__(
        self,
        repository: VehicleRepository,
        ledger: BookingLedger,
        locks: KeyedLock,
        default_timeout: Optional[float] = None
    ):
        self.repository = repository
        self.ledger = ledger
        self.locks = locks
        self.default_timeout = default_timeout

    async def add_vehicle(self, label: str, category: Any, price_per_day: Any) -> int:
        """
        Register a new vehicle.

        Args:
            label: Brand and model, e.g. "Toyota Corolla"
            category: Car, Bike, Van or Truck
            price_per_day: Non-negative daily rate

        Returns:
            The new vehicle ID

        Raises:
            ValidationError: On empty label, unknown category or negative price
        """
        vehicle = await self.repository.add(self._build(label, category, price_per_day))
        return vehicle.id

    async def update_vehicle(
        self,
        vehicle_id: int,
        label: str,
        category: Any,
        price_per_day: Any,
        timeout: Optional[float] = None
    ) -> None:
        """
        Replace a vehicle's label, category and daily rate.

        Runs under the vehicle lock so a concurrent removal either happens
        before (NotFoundError) or after the update, never in between.
        """
        changes = self._build(label, category, price_per_day)
        deadline = Deadline(timeout if timeout is not None else self.default_timeout)
        async with self.locks.hold(vehicle_key(vehicle_id), deadline=deadline):
            current = await self.get(vehicle_id)
            deadline.check()
            await self.repository.update(current.model_copy(update={
                "label": changes.label,
                "category": changes.category,
                "price_per_day": changes.price_per_day,
            }))

    async def remove_vehicle(self, vehicle_id: int, timeout: Optional[float] = None) -> None:
        """
        Delete a vehicle that has no Active bookings.

        Raises:
            NotFoundError: If the vehicle does not exist
            ConflictError: If an Active booking references the vehicle
            DeadlineExceededError: If the vehicle lock could not be taken in time
        """
        deadline = Deadline(timeout if timeout is not None else self.default_timeout)
        async with self.locks.hold(vehicle_key(vehicle_id), deadline=deadline):
            await self.get(vehicle_id)
            active = await self.ledger.list_active_by_vehicle(vehicle_id)
            if active:
                raise ConflictError(
                    f"Vehicle {vehicle_id} has {len(active)} active booking(s) and cannot be removed"
                )
            deadline.check()
            await self.repository.delete(vehicle_id)

    async def get(self, vehicle_id: int) -> Vehicle:
        vehicle = await self.repository.get(vehicle_id)
        if vehicle is None:
            raise NotFoundError(f"Vehicle {vehicle_id} not found")
        return vehicle

    async def list(self) -> List[Vehicle]:
        return await self.repository.list()

    @staticmethod
    def _build(label: str, category: Any, price_per_day: Any) -> Vehicle:
        label = str(label or "").strip()
        if not label:
            raise ValidationError("Vehicle label is required")
        return Vehicle(
            label=label,
            category=VehicleCategory.parse(category),
            price_per_day=to_money(price_per_day, "price_per_day"),
        )
