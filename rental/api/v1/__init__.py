"""
API v1 Router

Aggregates all v1 API routes.
"""
from fastapi import APIRouter
from rental.api.v1 import vehicles, customers, bookings, payments, reports

# Create main v1 router
api_router = APIRouter()

# Include sub-routers
api_router.include_router(
    vehicles.router,
    prefix="/vehicles",
    tags=["Vehicles - Fleet"]
)

api_router.include_router(
    customers.router,
    prefix="/customers",
    tags=["Customers"]
)

api_router.include_router(
    bookings.router,
    prefix="/bookings",
    tags=["Bookings - Reservations"]
)

api_router.include_router(
    payments.router,
    prefix="/payments",
    tags=["Payments"]
)

api_router.include_router(
    reports.router,
    prefix="/reports",
    tags=["Reports"]
)
