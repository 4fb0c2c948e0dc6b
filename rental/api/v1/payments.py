"""
Payments API Routes

Endpoints for payment recording:
- POST / - Record payment
- GET /{payment_id} - Get payment
- GET /{payment_id}/invoice - Invoice for a payment
- GET /booking/{booking_id} - Payments of a booking
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, status

from rental.core.dependencies import get_payment_service
from rental.schemas.payment import (
    InvoiceResponseSchema,
    PaymentCreateSchema,
    PaymentResponseSchema,
)
from rental.services.payment_service import PaymentService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/",
    response_model=PaymentResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Record payment"
)
async def record_payment(
    payment_data: PaymentCreateSchema,
    payments: PaymentService = Depends(get_payment_service)
):
    payment_id = await payments.record_payment(
        payment_data.bookingId,
        payment_data.amount,
        payment_data.paymentMethod,
        payment_data.extras
    )
    logger.info(f"Payment {payment_id} recorded for booking {payment_data.bookingId}")
    return PaymentResponseSchema.from_payment(await payments.get(payment_id))


@router.get("/booking/{booking_id}", response_model=List[PaymentResponseSchema])
async def booking_payments(
    booking_id: int,
    payments: PaymentService = Depends(get_payment_service)
):
    return [PaymentResponseSchema.from_payment(p) for p in await payments.list_by_booking(booking_id)]


@router.get("/{payment_id}", response_model=PaymentResponseSchema)
async def get_payment(
    payment_id: int,
    payments: PaymentService = Depends(get_payment_service)
):
    return PaymentResponseSchema.from_payment(await payments.get(payment_id))


@router.get("/{payment_id}/invoice", response_model=InvoiceResponseSchema)
async def get_invoice(
    payment_id: int,
    payments: PaymentService = Depends(get_payment_service)
):
    return InvoiceResponseSchema.from_invoice(await payments.invoice(payment_id))
