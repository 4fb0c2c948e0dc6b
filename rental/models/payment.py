from beanie import Document, Indexed
from pydantic import BaseModel, Field, BeforeValidator
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Annotated, Any
import enum

from rental.core.exceptions import ValidationError
from rental.utils.money import coerce_decimal


class PaymentMethod(str, enum.Enum):
    """Accepted payment methods."""
    CASH = "Cash"
    CREDIT_CARD = "Credit Card"
    ONLINE = "Online"

    @classmethod
    def parse(cls, value: Any) -> "PaymentMethod":
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower().replace("_", " ")
        for method in cls:
            if text in (method.value.lower(), method.name.lower().replace("_", " ")):
                return method
        allowed = ", ".join(m.value for m in cls)
        raise ValidationError(f"Unknown payment method '{value}'. Expected one of: {allowed}")


class PaymentExtra(str, enum.Enum):
    """Optional charges added on top of the base rental amount."""
    GPS_RENTAL = "gps_rental"
    CHILD_SEAT = "child_seat"
    LATE_FEE = "late_fee"

    @classmethod
    def parse(cls, value: Any) -> "PaymentExtra":
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower().replace(" ", "_")
        for extra in cls:
            if text == extra.value:
                return extra
        allowed = ", ".join(e.value for e in cls)
        raise ValidationError(f"Unknown extra charge '{value}'. Expected one of: {allowed}")


EXTRA_CHARGES = {
    PaymentExtra.GPS_RENTAL: {
        'name': 'GPS Rental',
        'price': Decimal('50.00')
    },
    PaymentExtra.CHILD_SEAT: {
        'name': 'Child Seat',
        'price': Decimal('30.00')
    },
    PaymentExtra.LATE_FEE: {
        'name': 'Late Fee',
        'price': Decimal('100.00')
    },
}


class Payment(BaseModel):
    """
    Payment record. Append-only.
    ``amount`` is the base amount entered by the clerk; ``total`` adds the extras.
    """
    id: Optional[int] = None
    booking_id: int
    amount: Decimal
    method: PaymentMethod
    extras: List[PaymentExtra] = []
    extras_total: Decimal = Decimal("0.00")
    total: Decimal
    paid_at: datetime = Field(default_factory=datetime.utcnow)


class PaymentDocument(Document):
    """MongoDB representation of a Payment."""
    id: int
    booking_id: Indexed(int)
    amount: Annotated[Decimal, BeforeValidator(coerce_decimal)]
    method: PaymentMethod
    extras: List[PaymentExtra] = []
    extras_total: Annotated[Decimal, BeforeValidator(coerce_decimal)] = Decimal("0.00")
    total: Annotated[Decimal, BeforeValidator(coerce_decimal)]
    paid_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "payments"

    @classmethod
    def from_record(cls, payment: Payment) -> "PaymentDocument":
        return cls(**payment.model_dump())

    def to_record(self) -> Payment:
        return Payment(
            id=self.id,
            booking_id=self.booking_id,
            amount=self.amount,
            method=self.method,
            extras=list(self.extras),
            extras_total=self.extras_total,
            total=self.total,
            paid_at=self.paid_at,
        )
