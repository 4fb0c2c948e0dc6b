from pydantic import BaseModel
from typing import List
from decimal import Decimal


# ============================================================================
# Report Schemas
# ============================================================================

class RevenueResponseSchema(BaseModel):
    periodStart: str
    periodEnd: str
    revenue: Decimal


class MonthlyRevenueSchema(BaseModel):
    month: int
    monthName: str
    revenue: Decimal


class MonthlyRevenueResponseSchema(BaseModel):
    year: int
    months: List[MonthlyRevenueSchema]
    total: Decimal


class RentalHistorySchema(BaseModel):
    customerId: int
    customerName: str
    bookingCount: int
