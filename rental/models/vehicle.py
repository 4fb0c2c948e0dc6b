from beanie import Document
from pydantic import BaseModel, Field, BeforeValidator
from datetime import datetime
from decimal import Decimal
from typing import Optional, Annotated, Any
import enum

from rental.core.exceptions import ValidationError
from rental.utils.money import coerce_decimal


class VehicleCategory(str, enum.Enum):
    """Vehicle category enumeration."""
    CAR = "Car"
    BIKE = "Bike"
    VAN = "Van"
    TRUCK = "Truck"

    @classmethod
    def parse(cls, value: Any) -> "VehicleCategory":
        """Case-insensitive lookup by value or name."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        for category in cls:
            if text in (category.value.lower(), category.name.lower()):
                return category
        allowed = ", ".join(c.value for c in cls)
        raise ValidationError(f"Unknown vehicle category '{value}'. Expected one of: {allowed}")


class Vehicle(BaseModel):
    """
    Vehicle record owned by the fleet store.
    Availability is not stored here; it is derived from the booking ledger.
    """
    id: Optional[int] = None
    label: str
    category: VehicleCategory
    price_per_day: Decimal
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def brand(self) -> str:
        """First word of the label."""
        return self.label.split(" ", 1)[0]

    @property
    def model(self) -> str:
        parts = self.label.split(" ", 1)
        return parts[1] if len(parts) > 1 else ""


class VehicleDocument(Document):
    """MongoDB representation of a Vehicle."""
    id: int
    label: str
    category: VehicleCategory
    price_per_day: Annotated[Decimal, BeforeValidator(coerce_decimal)]
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "vehicles"

    @classmethod
    def from_record(cls, vehicle: Vehicle) -> "VehicleDocument":
        return cls(
            id=vehicle.id,
            label=vehicle.label,
            category=vehicle.category,
            price_per_day=vehicle.price_per_day,
            created_at=vehicle.created_at,
        )

    def to_record(self) -> Vehicle:
        return Vehicle(
            id=self.id,
            label=self.label,
            category=self.category,
            price_per_day=self.price_per_day,
            created_at=self.created_at,
        )
