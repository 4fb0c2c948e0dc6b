"""
MongoDB repositories (Beanie).

Numeric IDs come from the ``counters`` collection so every entity keeps a
single integer identifier regardless of the storage backend.
"""
import logging
from typing import List, Optional

from pymongo import ReturnDocument

from rental.models.vehicle import Vehicle, VehicleDocument
from rental.models.customer import Customer, CustomerDocument
from rental.models.booking import Booking, BookingDocument
from rental.models.payment import Payment, PaymentDocument
from rental.models.counter import CounterDocument
from rental.repositories.base import (
    BookingRepository,
    CustomerRepository,
    PaymentRepository,
    VehicleRepository,
)

# Logger setup
logger = logging.getLogger(__name__)


async def next_sequence(name: str) -> int:
    """Atomically increment and return the named counter."""
    collection = CounterDocument.get_motor_collection()
    counter = await collection.find_one_and_update(
        {"_id": name},
        {"$inc": {"value": 1}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return int(counter["value"])


class MongoVehicleRepository(VehicleRepository):
    """Vehicle storage backed by the ``vehicles`` collection."""

    async def add(self, vehicle: Vehicle) -> Vehicle:
        stored = vehicle.model_copy(update={"id": await next_sequence("vehicles")})
        try:
            await VehicleDocument.from_record(stored).insert()
        except Exception as e:
            logger.error(f"Failed to insert vehicle '{vehicle.label}': {e}")
            raise
        return stored

    async def get(self, vehicle_id: int) -> Optional[Vehicle]:
        doc = await VehicleDocument.get(vehicle_id)
        return doc.to_record() if doc else None

    async def list(self) -> List[Vehicle]:
        docs = await VehicleDocument.find_all().sort("_id").to_list()
        return [doc.to_record() for doc in docs]

    async def update(self, vehicle: Vehicle) -> None:
        await VehicleDocument.from_record(vehicle).replace()

    async def delete(self, vehicle_id: int) -> None:
        doc = await VehicleDocument.get(vehicle_id)
        if doc:
            await doc.delete()


class MongoCustomerRepository(CustomerRepository):
    """Customer storage backed by the ``customers`` collection."""

    async def add(self, customer: Customer) -> Customer:
        stored = customer.model_copy(update={"id": await next_sequence("customers")})
        try:
            await CustomerDocument.from_record(stored).insert()
        except Exception as e:
            logger.error(f"Failed to insert customer '{customer.license_number}': {e}")
            raise
        return stored

    async def get(self, customer_id: int) -> Optional[Customer]:
        doc = await CustomerDocument.get(customer_id)
        return doc.to_record() if doc else None

    async def find_by_license(self, license_number: str) -> Optional[Customer]:
        doc = await CustomerDocument.find_one(CustomerDocument.license_number == license_number)
        return doc.to_record() if doc else None

    async def list(self) -> List[Customer]:
        docs = await CustomerDocument.find_all().sort("_id").to_list()
        return [doc.to_record() for doc in docs]

    async def update(self, customer: Customer) -> None:
        await CustomerDocument.from_record(customer).replace()

    async def delete(self, customer_id: int) -> None:
        doc = await CustomerDocument.get(customer_id)
        if doc:
            await doc.delete()


class MongoBookingRepository(BookingRepository):
    """Booking storage backed by the ``bookings`` collection."""

    async def add(self, booking: Booking) -> Booking:
        stored = booking.model_copy(update={"id": await next_sequence("bookings")})
        try:
            await BookingDocument.from_record(stored).insert()
        except Exception as e:
            logger.error(f"Failed to insert booking for vehicle {booking.vehicle_id}: {e}")
            raise
        return stored

    async def get(self, booking_id: int) -> Optional[Booking]:
        doc = await BookingDocument.get(booking_id)
        return doc.to_record() if doc else None

    async def update(self, booking: Booking) -> None:
        await BookingDocument.from_record(booking).replace()

    async def list_by_vehicle(self, vehicle_id: int) -> List[Booking]:
        docs = await BookingDocument.find(
            BookingDocument.vehicle_id == vehicle_id
        ).sort("_id").to_list()
        return [doc.to_record() for doc in docs]

    async def list_by_customer(self, customer_id: int) -> List[Booking]:
        docs = await BookingDocument.find(
            BookingDocument.customer_id == customer_id
        ).sort("_id").to_list()
        return [doc.to_record() for doc in docs]

    async def list_all(self) -> List[Booking]:
        docs = await BookingDocument.find_all().sort("_id").to_list()
        return [doc.to_record() for doc in docs]


class MongoPaymentRepository(PaymentRepository):
    """Payment storage backed by the ``payments`` collection."""

    async def add(self, payment: Payment) -> Payment:
        stored = payment.model_copy(update={"id": await next_sequence("payments")})
        try:
            await PaymentDocument.from_record(stored).insert()
        except Exception as e:
            logger.error(f"Failed to record payment for booking {payment.booking_id}: {e}")
            raise
        return stored

    async def get(self, payment_id: int) -> Optional[Payment]:
        doc = await PaymentDocument.get(payment_id)
        return doc.to_record() if doc else None

    async def list_by_booking(self, booking_id: int) -> List[Payment]:
        docs = await PaymentDocument.find(
            PaymentDocument.booking_id == booking_id
        ).sort("_id").to_list()
        return [doc.to_record() for doc in docs]
