"""
In-memory repositories.

Process-local storage used for development and tests. Records are copied on
the way in and out so callers never share mutable state with the store.
"""
import itertools
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from rental.models.vehicle import Vehicle
from rental.models.customer import Customer
from rental.models.booking import Booking
from rental.models.payment import Payment
from rental.repositories.base import (
    BookingRepository,
    CustomerRepository,
    PaymentRepository,
    VehicleRepository,
)

RecordT = TypeVar("RecordT", bound=BaseModel)


class _RecordTable(Generic[RecordT]):
    """Insertion-ordered table with auto-increment integer IDs."""

    def __init__(self):
        self._rows: Dict[int, RecordT] = {}
        self._ids = itertools.count(1)

    def insert(self, record: RecordT) -> RecordT:
        stored = record.model_copy(update={"id": next(self._ids)}, deep=True)
        self._rows[stored.id] = stored
        return stored.model_copy(deep=True)

    def get(self, record_id: int) -> Optional[RecordT]:
        row = self._rows.get(record_id)
        return row.model_copy(deep=True) if row is not None else None

    def replace(self, record: RecordT) -> None:
        if record.id in self._rows:
            self._rows[record.id] = record.model_copy(deep=True)

    def delete(self, record_id: int) -> None:
        self._rows.pop(record_id, None)

    def select(self, predicate: Callable[[RecordT], bool] = lambda row: True) -> List[RecordT]:
        return [row.model_copy(deep=True) for row in self._rows.values() if predicate(row)]


class InMemoryVehicleRepository(VehicleRepository):

    def __init__(self):
        self._table: _RecordTable[Vehicle] = _RecordTable()

    async def add(self, vehicle: Vehicle) -> Vehicle:
        return self._table.insert(vehicle)

    async def get(self, vehicle_id: int) -> Optional[Vehicle]:
        return self._table.get(vehicle_id)

    async def list(self) -> List[Vehicle]:
        return self._table.select()

    async def update(self, vehicle: Vehicle) -> None:
        self._table.replace(vehicle)

    async def delete(self, vehicle_id: int) -> None:
        self._table.delete(vehicle_id)


class InMemoryCustomerRepository(CustomerRepository):

    def __init__(self):
        self._table: _RecordTable[Customer] = _RecordTable()

    async def add(self, customer: Customer) -> Customer:
        return self._table.insert(customer)

    async def get(self, customer_id: int) -> Optional[Customer]:
        return self._table.get(customer_id)

    async def find_by_license(self, license_number: str) -> Optional[Customer]:
        matches = self._table.select(lambda row: row.license_number == license_number)
        return matches[0] if matches else None

    async def list(self) -> List[Customer]:
        return self._table.select()

    async def update(self, customer: Customer) -> None:
        self._table.replace(customer)

    async def delete(self, customer_id: int) -> None:
        self._table.delete(customer_id)


class InMemoryBookingRepository(BookingRepository):

    def __init__(self):
        self._table: _RecordTable[Booking] = _RecordTable()

    async def add(self, booking: Booking) -> Booking:
        return self._table.insert(booking)

    async def get(self, booking_id: int) -> Optional[Booking]:
        return self._table.get(booking_id)

    async def update(self, booking: Booking) -> None:
        self._table.replace(booking)

    async def list_by_vehicle(self, vehicle_id: int) -> List[Booking]:
        return self._table.select(lambda row: row.vehicle_id == vehicle_id)

    async def list_by_customer(self, customer_id: int) -> List[Booking]:
        return self._table.select(lambda row: row.customer_id == customer_id)

    async def list_all(self) -> List[Booking]:
        return self._table.select()


class InMemoryPaymentRepository(PaymentRepository):

    def __init__(self):
        self._table: _RecordTable[Payment] = _RecordTable()

    async def add(self, payment: Payment) -> Payment:
        return self._table.insert(payment)

    async def get(self, payment_id: int) -> Optional[Payment]:
        return self._table.get(payment_id)

    async def list_by_booking(self, booking_id: int) -> List[Payment]:
        return self._table.select(lambda row: row.booking_id == booking_id)
