from beanie import Document, Indexed
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class Customer(BaseModel):
    """
    Customer record.
    The license number is the business key and is unique across customers.
    """
    id: Optional[int] = None
    name: str
    contact_info: str
    license_number: str
    created_at: datetime = Field(default_factory=datetime.utcnow)


class CustomerDocument(Document):
    """MongoDB representation of a Customer."""
    id: int
    name: str
    contact_info: str
    license_number: Indexed(str, unique=True)
    created_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "customers"

    @classmethod
    def from_record(cls, customer: Customer) -> "CustomerDocument":
        return cls(
            id=customer.id,
            name=customer.name,
            contact_info=customer.contact_info,
            license_number=customer.license_number,
            created_at=customer.created_at,
        )

    def to_record(self) -> Customer:
        return Customer(
            id=self.id,
            name=self.name,
            contact_info=self.contact_info,
            license_number=self.license_number,
            created_at=self.created_at,
        )
