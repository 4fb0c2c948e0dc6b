from pydantic import BaseModel, Field
from typing import List
from datetime import datetime
from decimal import Decimal

from rental.models.payment import Payment
from rental.services.payment_service import Invoice


# ============================================================================
# Payment Schemas
# ============================================================================

class PaymentCreateSchema(BaseModel):
    """Payment form payload"""
    bookingId: int = Field(..., description="Booking being paid")
    amount: Decimal = Field(..., description="Base amount")
    paymentMethod: str = Field(..., description="Cash, Credit Card or Online")
    extras: List[str] = Field(default_factory=list, description="gps_rental, child_seat, late_fee")

    class Config:
        json_schema_extra = {
            "example": {
                "bookingId": 1,
                "amount": "300.00",
                "paymentMethod": "Credit Card",
                "extras": ["gps_rental"]
            }
        }


class PaymentResponseSchema(BaseModel):
    paymentId: int
    bookingId: int
    amount: Decimal
    paymentMethod: str
    extras: List[str] = []
    extrasTotal: Decimal
    total: Decimal
    paidAt: datetime

    @classmethod
    def from_payment(cls, payment: Payment):
        return cls(
            paymentId=payment.id,
            bookingId=payment.booking_id,
            amount=payment.amount,
            paymentMethod=payment.method.value,
            extras=[extra.value for extra in payment.extras],
            extrasTotal=payment.extras_total,
            total=payment.total,
            paidAt=payment.paid_at,
        )


class InvoiceLineSchema(BaseModel):
    name: str
    price: Decimal


class InvoiceResponseSchema(BaseModel):
    """Invoice shown after a payment"""
    paymentId: int
    bookingId: int
    baseAmount: Decimal
    extras: List[InvoiceLineSchema] = []
    extrasTotal: Decimal
    totalDue: Decimal
    paymentMethod: str

    @classmethod
    def from_invoice(cls, invoice: Invoice):
        return cls(
            paymentId=invoice.payment_id,
            bookingId=invoice.booking_id,
            baseAmount=invoice.base_amount,
            extras=[InvoiceLineSchema(name=line.name, price=line.price) for line in invoice.extras],
            extrasTotal=invoice.extras_total,
            totalDue=invoice.total_due,
            paymentMethod=invoice.payment_method.value,
        )
