from beanie import Document, Indexed
from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional
import enum

from rental.utils.dates import covers, nights_between, ranges_overlap, to_date, to_datetime


class BookingStatus(str, enum.Enum):
    """Booking status enumeration."""
    ACTIVE = "active"
    CANCELLED = "cancelled"


class Booking(BaseModel):
    """
    Booking record owned by the booking ledger.
    Covers the half-open date range [start_date, end_date).
    """
    id: Optional[int] = None
    vehicle_id: int
    customer_id: int
    start_date: date
    end_date: date
    status: BookingStatus = BookingStatus.ACTIVE
    created_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def is_active(self) -> bool:
        return self.status == BookingStatus.ACTIVE

    @property
    def nights(self) -> int:
        return nights_between(self.start_date, self.end_date)

    def covers(self, day: date) -> bool:
        return covers(self.start_date, self.end_date, day)

    def overlaps(self, start: date, end: date) -> bool:
        return ranges_overlap(self.start_date, self.end_date, start, end)


class BookingDocument(Document):
    """
    MongoDB representation of a Booking.
    Dates are stored as midnight datetimes since BSON has no date type.
    """
    id: int
    vehicle_id: Indexed(int)
    customer_id: Indexed(int)
    start_at: datetime
    end_at: datetime
    status: BookingStatus = BookingStatus.ACTIVE
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "bookings"

    @classmethod
    def from_record(cls, booking: Booking) -> "BookingDocument":
        return cls(
            id=booking.id,
            vehicle_id=booking.vehicle_id,
            customer_id=booking.customer_id,
            start_at=to_datetime(booking.start_date),
            end_at=to_datetime(booking.end_date),
            status=booking.status,
            created_at=booking.created_at,
        )

    def to_record(self) -> Booking:
        return Booking(
            id=self.id,
            vehicle_id=self.vehicle_id,
            customer_id=self.customer_id,
            start_date=to_date(self.start_at),
            end_date=to_date(self.end_at),
            status=self.status,
            created_at=self.created_at,
        )
