"""
Repository Interfaces

Abstract storage interfaces for the rental records.
This allows switching between the in-memory and MongoDB implementations
through configuration without touching the services.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from rental.models.vehicle import Vehicle
from rental.models.customer import Customer
from rental.models.booking import Booking
from rental.models.payment import Payment


class VehicleRepository(ABC):
    """Storage for Vehicle records"""

    @abstractmethod
    async def add(self, vehicle: Vehicle) -> Vehicle:
        """
        Persist a new vehicle.

        Args:
            vehicle: Vehicle without an ID

        Returns:
            The stored vehicle with its assigned ID
        """
        pass

    @abstractmethod
    async def get(self, vehicle_id: int) -> Optional[Vehicle]:
        pass

    @abstractmethod
    async def list(self) -> List[Vehicle]:
        """All vehicles in insertion order."""
        pass

    @abstractmethod
    async def update(self, vehicle: Vehicle) -> None:
        pass

    @abstractmethod
    async def delete(self, vehicle_id: int) -> None:
        pass


class CustomerRepository(ABC):
    """Storage for Customer records"""

    @abstractmethod
    async def add(self, customer: Customer) -> Customer:
        pass

    @abstractmethod
    async def get(self, customer_id: int) -> Optional[Customer]:
        pass

    @abstractmethod
    async def find_by_license(self, license_number: str) -> Optional[Customer]:
        pass

    @abstractmethod
    async def list(self) -> List[Customer]:
        """All customers in insertion order."""
        pass

    @abstractmethod
    async def update(self, customer: Customer) -> None:
        pass

    @abstractmethod
    async def delete(self, customer_id: int) -> None:
        pass


class BookingRepository(ABC):
    """Storage for Booking records. Bookings are never deleted."""

    @abstractmethod
    async def add(self, booking: Booking) -> Booking:
        pass

    @abstractmethod
    async def get(self, booking_id: int) -> Optional[Booking]:
        pass

    @abstractmethod
    async def update(self, booking: Booking) -> None:
        pass

    @abstractmethod
    async def list_by_vehicle(self, vehicle_id: int) -> List[Booking]:
        pass

    @abstractmethod
    async def list_by_customer(self, customer_id: int) -> List[Booking]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Booking]:
        pass


class PaymentRepository(ABC):
    """Append-only storage for Payment records"""

    @abstractmethod
    async def add(self, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def get(self, payment_id: int) -> Optional[Payment]:
        pass

    @abstractmethod
    async def list_by_booking(self, booking_id: int) -> List[Payment]:
        pass
