from pydantic import BaseModel, Field
from datetime import date, datetime

from rental.models.booking import Booking


# ============================================================================
# Booking Schemas
# ============================================================================

class BookingCreateSchema(BaseModel):
    """
    Booking request.
    Dates stay raw strings here; the reservation service parses and
    validates them so malformed dates come back as validation errors.
    """
    vehicleId: int = Field(..., description="Vehicle to reserve")
    customerId: int = Field(..., description="Renting customer")
    startDate: str = Field(..., description="Pick-up date (YYYY-MM-DD)")
    endDate: str = Field(..., description="Return date (YYYY-MM-DD), after startDate")

    class Config:
        json_schema_extra = {
            "example": {
                "vehicleId": 1,
                "customerId": 1,
                "startDate": "2024-03-01",
                "endDate": "2024-03-04"
            }
        }


class BookingUpdateSchema(BaseModel):
    startDate: str = Field(..., description="New pick-up date (YYYY-MM-DD)")
    endDate: str = Field(..., description="New return date (YYYY-MM-DD)")


class BookingResponseSchema(BaseModel):
    bookingId: int
    vehicleId: int
    customerId: int
    startDate: date
    endDate: date
    nights: int
    status: str
    createdAt: datetime

    @classmethod
    def from_booking(cls, booking: Booking):
        return cls(
            bookingId=booking.id,
            vehicleId=booking.vehicle_id,
            customerId=booking.customer_id,
            startDate=booking.start_date,
            endDate=booking.end_date,
            nights=booking.nights,
            status=booking.status.value,
            createdAt=booking.created_at,
        )

