"""
Payment recording and invoices.
"""
from decimal import Decimal

import pytest

from rental.core.exceptions import NotFoundError, ValidationError
from rental.models.payment import PaymentExtra, PaymentMethod


@pytest.fixture
async def booking_id(reservations, vehicle_id, customer_id):
    return await reservations.book(vehicle_id, customer_id, "2024-03-01", "2024-03-04")


async def test_record_payment(payments, booking_id):
    payment_id = await payments.record_payment(booking_id, "300", "Cash")
    payment = await payments.get(payment_id)

    assert payment.booking_id == booking_id
    assert payment.method == PaymentMethod.CASH
    assert payment.amount == Decimal("300.00")
    assert payment.extras == []
    assert payment.total == Decimal("300.00")


async def test_extras_are_added_to_total(payments, booking_id):
    payment_id = await payments.record_payment(
        booking_id, 300, "credit card", ["gps_rental", "Child Seat", PaymentExtra.LATE_FEE]
    )
    payment = await payments.get(payment_id)

    assert payment.method == PaymentMethod.CREDIT_CARD
    assert payment.extras_total == Decimal("180.00")
    assert payment.total == Decimal("480.00")

    invoice = await payments.invoice(payment_id)
    assert [line.name for line in invoice.extras] == ["GPS Rental", "Child Seat", "Late Fee"]
    assert invoice.base_amount == Decimal("300.00")
    assert invoice.total_due == Decimal("480.00")


async def test_payment_for_unknown_booking(payments):
    with pytest.raises(NotFoundError):
        await payments.record_payment(99, 100, "Cash")


@pytest.mark.parametrize("amount,method,extras", [
    (-5, "Cash", []),
    ("abc", "Cash", []),
    (100, "Cheque", []),
    (100, "Online", ["car_wash"]),
])
async def test_payment_validation(payments, booking_id, amount, method, extras):
    with pytest.raises(ValidationError):
        await payments.record_payment(booking_id, amount, method, extras)
    assert await payments.list_by_booking(booking_id) == []


async def test_payments_are_append_only_per_booking(payments, booking_id):
    await payments.record_payment(booking_id, 100, "Online")
    await payments.record_payment(booking_id, 200, "Online", ["late_fee"])

    assert len(await payments.list_by_booking(booking_id)) == 2
    assert await payments.total_paid(booking_id) == Decimal("400.00")


async def test_cancelled_booking_still_accepts_payment(payments, reservations, booking_id):
    await reservations.cancel_booking(booking_id)
    await payments.record_payment(booking_id, 0, "Cash", ["late_fee"])
    assert await payments.total_paid(booking_id) == Decimal("100.00")


async def test_unknown_payment(payments):
    with pytest.raises(NotFoundError):
        await payments.get(1)
    with pytest.raises(NotFoundError):
        await payments.invoice(1)
