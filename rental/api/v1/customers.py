"""
Customers API Routes

Endpoints for customer records:
- GET / - List customers
- POST / - Register customer
- GET /{customer_id} - Get customer
- PUT /{customer_id} - Update customer
- DELETE /{customer_id} - Remove customer (refused while booked)
- GET /{customer_id}/bookings - Customer's bookings
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from rental.core.dependencies import get_customer_registry, get_reservation_service
from rental.schemas.booking import BookingResponseSchema
from rental.schemas.customer import CustomerCreateSchema, CustomerResponseSchema
from rental.services.customer_service import CustomerRegistry
from rental.services.reservation_service import ReservationService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[CustomerResponseSchema])
async def list_customers(customers: CustomerRegistry = Depends(get_customer_registry)):
    """
    Get all customers.
    """
    return [CustomerResponseSchema.from_customer(c) for c in await customers.list()]


@router.post(
    "/",
    response_model=CustomerResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Register customer",
    description="Register a customer. License numbers are unique; duplicates return 409."
)
async def add_customer(
    customer_data: CustomerCreateSchema,
    customers: CustomerRegistry = Depends(get_customer_registry)
):
    customer_id = await customers.add_customer(
        customer_data.name,
        customer_data.contactInfo,
        customer_data.licenseNumber
    )
    logger.info(f"Customer {customer_id} registered")
    return CustomerResponseSchema.from_customer(await customers.get(customer_id))


@router.get("/{customer_id}", response_model=CustomerResponseSchema)
async def get_customer(
    customer_id: int,
    customers: CustomerRegistry = Depends(get_customer_registry)
):
    return CustomerResponseSchema.from_customer(await customers.get(customer_id))


@router.put("/{customer_id}", response_model=CustomerResponseSchema)
async def update_customer(
    customer_id: int,
    customer_data: CustomerCreateSchema,
    customers: CustomerRegistry = Depends(get_customer_registry)
):
    await customers.update_customer(
        customer_id,
        customer_data.name,
        customer_data.contactInfo,
        customer_data.licenseNumber
    )
    logger.info(f"Customer {customer_id} updated")
    return CustomerResponseSchema.from_customer(await customers.get(customer_id))


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_customer(
    customer_id: int,
    customers: CustomerRegistry = Depends(get_customer_registry)
):
    await customers.remove_customer(customer_id)
    logger.info(f"Customer {customer_id} removed")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{customer_id}/bookings", response_model=List[BookingResponseSchema])
async def customer_bookings(
    customer_id: int,
    customers: CustomerRegistry = Depends(get_customer_registry),
    reservations: ReservationService = Depends(get_reservation_service)
):
    """
    Rental history of one customer, cancelled bookings included.
    """
    await customers.get(customer_id)
    bookings = await reservations.list_bookings(customer_id=customer_id)
    return [BookingResponseSchema.from_booking(b) for b in bookings]
