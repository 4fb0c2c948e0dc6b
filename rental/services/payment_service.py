"""
Payment Service

Append-only payment recording against bookings, plus the invoice summary
shown to the clerk after a payment.
"""
from decimal import Decimal
from typing import Any, Iterable, List

from pydantic import BaseModel

from rental.core.exceptions import NotFoundError
from rental.models.payment import EXTRA_CHARGES, Payment, PaymentExtra, PaymentMethod
from rental.repositories.base import PaymentRepository
from rental.services.booking_ledger import BookingLedger
from rental.utils.money import quantize, to_money


class InvoiceLine(BaseModel):
    name: str
    price: Decimal


class Invoice(BaseModel):
    """Invoice for a single payment"""
    payment_id: int
    booking_id: int
    base_amount: Decimal
    extras: List[InvoiceLine] = []
    extras_total: Decimal
    total_due: Decimal
    payment_method: PaymentMethod


class PaymentService:
    """Service for recording payments"""

    def __init__(self, repository: PaymentRepository, ledger: BookingLedger):
        self.repository = repository
        self.ledger = ledger

    async def record_payment(
        self,
        booking_id: int,
        amount: Any,
        method: Any,
        extras: Iterable[Any] = ()
    ) -> int:
        """
        Record a payment for a booking.

        Args:
            booking_id: Booking being paid
            amount: Base amount, non-negative
            method: Cash, Credit Card or Online
            extras: Optional charges (gps_rental, child_seat, late_fee)

        Returns:
            The new payment ID

        Raises:
            NotFoundError: If the booking does not exist
            ValidationError: On a negative amount or unknown method/extra
        """
        base_amount = to_money(amount, "amount")
        payment_method = PaymentMethod.parse(method)
        extra_items = [PaymentExtra.parse(extra) for extra in extras]
        await self.ledger.get(booking_id)

        extras_total = quantize(sum(
            (EXTRA_CHARGES[extra]['price'] for extra in extra_items),
            Decimal("0")
        ))
        payment = await self.repository.add(Payment(
            booking_id=booking_id,
            amount=base_amount,
            method=payment_method,
            extras=extra_items,
            extras_total=extras_total,
            total=base_amount + extras_total,
        ))
        return payment.id

    async def get(self, payment_id: int) -> Payment:
        payment = await self.repository.get(payment_id)
        if payment is None:
            raise NotFoundError(f"Payment {payment_id} not found")
        return payment

    async def list_by_booking(self, booking_id: int) -> List[Payment]:
        await self.ledger.get(booking_id)
        return await self.repository.list_by_booking(booking_id)

    async def total_paid(self, booking_id: int) -> Decimal:
        payments = await self.list_by_booking(booking_id)
        return quantize(sum((p.total for p in payments), Decimal("0")))

    async def invoice(self, payment_id: int) -> Invoice:
        payment = await self.get(payment_id)
        return Invoice(
            payment_id=payment.id,
            booking_id=payment.booking_id,
            base_amount=payment.amount,
            extras=[
                InvoiceLine(name=EXTRA_CHARGES[extra]['name'], price=EXTRA_CHARGES[extra]['price'])
                for extra in payment.extras
            ],
            extras_total=payment.extras_total,
            total_due=payment.total,
            payment_method=payment.method,
        )
