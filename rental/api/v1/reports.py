"""
Reports API Routes

Read-only aggregations:
- GET /revenue - Revenue in a period
- GET /revenue/monthly - Revenue per month of a year
- GET /rental-history - Active bookings per customer
- GET /available-vehicles - Vehicles free on a date
"""
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from rental.api.v1.vehicles import AS_OF_DESCRIPTION, resolve_as_of
from rental.core.dependencies import get_report_service
from rental.schemas.report import (
    MonthlyRevenueResponseSchema,
    MonthlyRevenueSchema,
    RentalHistorySchema,
    RevenueResponseSchema,
)
from rental.schemas.vehicle import VehicleResponseSchema
from rental.services.report_service import ReportService, month_name
from rental.utils.dates import parse_date_range

router = APIRouter()


@router.get(
    "/revenue",
    response_model=RevenueResponseSchema,
    summary="Revenue in a period",
    description="Sum of price per day x nights of active bookings inside [start, end)."
)
async def revenue(
    start: str = Query(..., description="First day of the period (YYYY-MM-DD)"),
    end: str = Query(..., description="Day after the period (YYYY-MM-DD)"),
    reports: ReportService = Depends(get_report_service)
):
    period_start, period_end = parse_date_range(start, end)
    total = await reports.revenue(period_start, period_end)
    return RevenueResponseSchema(
        periodStart=period_start.isoformat(),
        periodEnd=period_end.isoformat(),
        revenue=total
    )


@router.get("/revenue/monthly", response_model=MonthlyRevenueResponseSchema)
async def monthly_revenue(
    year: int = Query(..., ge=1, le=9998),
    reports: ReportService = Depends(get_report_service)
):
    by_month = await reports.monthly_revenue(year)
    return MonthlyRevenueResponseSchema(
        year=year,
        months=[
            MonthlyRevenueSchema(month=month, monthName=month_name(month), revenue=amount)
            for month, amount in by_month.items()
        ],
        total=sum(by_month.values(), Decimal("0"))
    )


@router.get("/rental-history", response_model=List[RentalHistorySchema])
async def rental_history(reports: ReportService = Depends(get_report_service)):
    """
    Number of active bookings per customer.
    """
    return [
        RentalHistorySchema(
            customerId=entry.customer.id,
            customerName=entry.customer.name,
            bookingCount=entry.booking_count
        )
        for entry in await reports.rental_history()
    ]


@router.get("/available-vehicles", response_model=List[VehicleResponseSchema])
async def available_vehicles(
    as_of: Optional[str] = Query(None, description=AS_OF_DESCRIPTION),
    reports: ReportService = Depends(get_report_service)
):
    day = resolve_as_of(as_of)
    vehicles = await reports.available_vehicles(day)
    return [VehicleResponseSchema.from_vehicle(v, True, day.isoformat()) for v in vehicles]
