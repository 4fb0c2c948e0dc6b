"""
Data models package.
Domain records (pydantic) and their MongoDB documents (Beanie).
"""
from rental.models.vehicle import Vehicle, VehicleCategory, VehicleDocument
from rental.models.customer import Customer, CustomerDocument
from rental.models.booking import Booking, BookingStatus, BookingDocument
from rental.models.payment import (
    Payment,
    PaymentDocument,
    PaymentExtra,
    PaymentMethod,
    EXTRA_CHARGES,
)
from rental.models.counter import CounterDocument

__all__ = [
    "Vehicle",
    "VehicleCategory",
    "VehicleDocument",
    "Customer",
    "CustomerDocument",
    "Booking",
    "BookingStatus",
    "BookingDocument",
    "Payment",
    "PaymentDocument",
    "PaymentExtra",
    "PaymentMethod",
    "EXTRA_CHARGES",
    "CounterDocument",
]

DOCUMENT_MODELS = [
    VehicleDocument,
    CustomerDocument,
    BookingDocument,
    PaymentDocument,
    CounterDocument,
]
