from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from rental.models.vehicle import Vehicle


# ============================================================================
# Vehicle Schemas
# ============================================================================

class VehicleCreateSchema(BaseModel):
    """Vehicle form payload (add and update)"""
    label: str = Field(..., description="Brand and model, e.g. 'Toyota Corolla'")
    category: str = Field(..., description="Car, Bike, Van or Truck")
    pricePerDay: Decimal = Field(..., description="Daily rental price")

    class Config:
        json_schema_extra = {
            "example": {
                "label": "Toyota Corolla",
                "category": "Car",
                "pricePerDay": "100.00"
            }
        }


class VehicleResponseSchema(BaseModel):
    """Vehicle with its availability on ``availableAsOf``"""
    vehicleId: int
    label: str
    brand: str
    model: str
    category: str
    pricePerDay: Decimal
    available: Optional[bool] = None
    availableAsOf: Optional[str] = None
    createdAt: datetime

    @classmethod
    def from_vehicle(cls, vehicle: Vehicle, available: Optional[bool] = None, as_of: Optional[str] = None):
        return cls(
            vehicleId=vehicle.id,
            label=vehicle.label,
            brand=vehicle.brand,
            model=vehicle.model,
            category=vehicle.category.value,
            pricePerDay=vehicle.price_per_day,
            available=available,
            availableAsOf=as_of,
            createdAt=vehicle.created_at,
        )


class AvailabilityResponseSchema(BaseModel):
    vehicleId: int
    asOf: str
    available: bool
