"""
Bookings API Routes

Endpoints for the booking lifecycle:
- GET / - List bookings (filter by vehicle and/or customer)
- POST / - Book a vehicle
- GET /{booking_id} - Get booking
- PUT /{booking_id} - Change booking dates
- POST /{booking_id}/cancel - Cancel booking (idempotent)
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from rental.core.dependencies import get_reservation_service
from rental.schemas.booking import (
    BookingCreateSchema,
    BookingResponseSchema,
    BookingUpdateSchema,
)
from rental.services.reservation_service import ReservationService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/",
    response_model=List[BookingResponseSchema],
    summary="List bookings"
)
async def list_bookings(
    vehicle_id: Optional[int] = Query(None, alias="vehicleId"),
    customer_id: Optional[int] = Query(None, alias="customerId"),
    reservations: ReservationService = Depends(get_reservation_service)
):
    bookings = await reservations.list_bookings(vehicle_id=vehicle_id, customer_id=customer_id)
    return [BookingResponseSchema.from_booking(b) for b in bookings]


@router.post(
    "/",
    response_model=BookingResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Book a vehicle",
    description="Reserve a vehicle for [startDate, endDate). Overlapping active bookings return 409."
)
async def create_booking(
    booking_data: BookingCreateSchema,
    reservations: ReservationService = Depends(get_reservation_service)
):
    booking_id = await reservations.book(
        booking_data.vehicleId,
        booking_data.customerId,
        booking_data.startDate,
        booking_data.endDate
    )
    logger.info(
        f"Booking {booking_id} created: vehicle {booking_data.vehicleId} "
        f"{booking_data.startDate}..{booking_data.endDate}"
    )
    return BookingResponseSchema.from_booking(await reservations.get_booking(booking_id))


@router.get("/{booking_id}", response_model=BookingResponseSchema)
async def get_booking(
    booking_id: int,
    reservations: ReservationService = Depends(get_reservation_service)
):
    return BookingResponseSchema.from_booking(await reservations.get_booking(booking_id))


@router.put(
    "/{booking_id}",
    response_model=BookingResponseSchema,
    summary="Change booking dates"
)
async def update_booking(
    booking_id: int,
    booking_data: BookingUpdateSchema,
    reservations: ReservationService = Depends(get_reservation_service)
):
    await reservations.update_booking(booking_id, booking_data.startDate, booking_data.endDate)
    logger.info(f"Booking {booking_id} moved to {booking_data.startDate}..{booking_data.endDate}")
    return BookingResponseSchema.from_booking(await reservations.get_booking(booking_id))


@router.post(
    "/{booking_id}/cancel",
    response_model=BookingResponseSchema,
    summary="Cancel booking",
    description="Cancel a booking. Cancelling an already cancelled booking succeeds."
)
async def cancel_booking(
    booking_id: int,
    reservations: ReservationService = Depends(get_reservation_service)
):
    await reservations.cancel_booking(booking_id)
    logger.info(f"Booking {booking_id} cancelled")
    return BookingResponseSchema.from_booking(await reservations.get_booking(booking_id))
