from pydantic import BaseModel, Field
from datetime import datetime

from rental.models.customer import Customer


# ============================================================================
# Customer Schemas
# ============================================================================

class CustomerCreateSchema(BaseModel):
    """Customer registration payload (add and update)"""
    name: str = Field(..., description="Customer full name")
    contactInfo: str = Field(..., description="Phone number or email")
    licenseNumber: str = Field(..., description="Driver's license number (unique)")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Thandi Mokoena",
                "contactInfo": "+27-82-555-0101",
                "licenseNumber": "DL-4471-ZA"
            }
        }


class CustomerResponseSchema(BaseModel):
    customerId: int
    name: str
    contactInfo: str
    licenseNumber: str
    createdAt: datetime

    @classmethod
    def from_customer(cls, customer: Customer):
        return cls(
            customerId=customer.id,
            name=customer.name,
            contactInfo=customer.contact_info,
            licenseNumber=customer.license_number,
            createdAt=customer.created_at,
        )
