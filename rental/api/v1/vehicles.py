"""
Vehicles API Routes

Endpoints for fleet management:
- GET / - List vehicles with availability
- POST / - Add vehicle
- GET /available - Vehicles free on a date
- GET /{vehicle_id} - Get vehicle
- PUT /{vehicle_id} - Update vehicle
- DELETE /{vehicle_id} - Remove vehicle (refused while booked)
- GET /{vehicle_id}/availability - Availability on a date
"""
import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from rental.core.dependencies import get_fleet_store, get_reservation_service
from rental.schemas.vehicle import (
    AvailabilityResponseSchema,
    VehicleCreateSchema,
    VehicleResponseSchema,
)
from rental.services.fleet_service import FleetStore
from rental.services.reservation_service import ReservationService
from rental.utils.dates import parse_date

router = APIRouter()
logger = logging.getLogger(__name__)

AS_OF_DESCRIPTION = "Date to evaluate availability on (YYYY-MM-DD), defaults to today"


def resolve_as_of(as_of: Optional[str]) -> date:
    return parse_date(as_of, "as_of") if as_of else date.today()


@router.get(
    "/",
    response_model=List[VehicleResponseSchema],
    summary="List vehicles",
    description="All vehicles in the fleet with their availability on the given date."
)
async def list_vehicles(
    as_of: Optional[str] = Query(None, description=AS_OF_DESCRIPTION),
    reservations: ReservationService = Depends(get_reservation_service)
):
    day = resolve_as_of(as_of)
    return [
        VehicleResponseSchema.from_vehicle(vehicle, available, day.isoformat())
        for vehicle, available in await reservations.fleet_availability(day)
    ]


@router.post(
    "/",
    response_model=VehicleResponseSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Add vehicle"
)
async def add_vehicle(
    vehicle_data: VehicleCreateSchema,
    fleet: FleetStore = Depends(get_fleet_store)
):
    vehicle_id = await fleet.add_vehicle(
        vehicle_data.label,
        vehicle_data.category,
        vehicle_data.pricePerDay
    )
    logger.info(f"Vehicle {vehicle_id} added: {vehicle_data.label}")
    vehicle = await fleet.get(vehicle_id)
    return VehicleResponseSchema.from_vehicle(vehicle)


@router.get(
    "/available",
    response_model=List[VehicleResponseSchema],
    summary="Available vehicles",
    description="Vehicles with no active booking covering the given date."
)
async def available_vehicles(
    as_of: Optional[str] = Query(None, description=AS_OF_DESCRIPTION),
    reservations: ReservationService = Depends(get_reservation_service)
):
    day = resolve_as_of(as_of)
    vehicles = await reservations.available_vehicles(day)
    return [VehicleResponseSchema.from_vehicle(v, True, day.isoformat()) for v in vehicles]


@router.get(
    "/{vehicle_id}",
    response_model=VehicleResponseSchema,
    summary="Get vehicle by ID"
)
async def get_vehicle(
    vehicle_id: int,
    as_of: Optional[str] = Query(None, description=AS_OF_DESCRIPTION),
    fleet: FleetStore = Depends(get_fleet_store),
    reservations: ReservationService = Depends(get_reservation_service)
):
    day = resolve_as_of(as_of)
    vehicle = await fleet.get(vehicle_id)
    available = await reservations.current_availability(vehicle_id, day)
    return VehicleResponseSchema.from_vehicle(vehicle, available, day.isoformat())


@router.put(
    "/{vehicle_id}",
    response_model=VehicleResponseSchema,
    summary="Update vehicle"
)
async def update_vehicle(
    vehicle_id: int,
    vehicle_data: VehicleCreateSchema,
    fleet: FleetStore = Depends(get_fleet_store)
):
    await fleet.update_vehicle(
        vehicle_id,
        vehicle_data.label,
        vehicle_data.category,
        vehicle_data.pricePerDay
    )
    logger.info(f"Vehicle {vehicle_id} updated")
    return VehicleResponseSchema.from_vehicle(await fleet.get(vehicle_id))


@router.delete(
    "/{vehicle_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove vehicle",
    description="Remove a vehicle. Refused with 409 while it has active bookings."
)
async def remove_vehicle(
    vehicle_id: int,
    fleet: FleetStore = Depends(get_fleet_store)
):
    await fleet.remove_vehicle(vehicle_id)
    logger.info(f"Vehicle {vehicle_id} removed")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{vehicle_id}/availability",
    response_model=AvailabilityResponseSchema,
    summary="Vehicle availability"
)
async def vehicle_availability(
    vehicle_id: int,
    as_of: Optional[str] = Query(None, description=AS_OF_DESCRIPTION),
    reservations: ReservationService = Depends(get_reservation_service)
):
    day = resolve_as_of(as_of)
    available = await reservations.current_availability(vehicle_id, day)
    return AvailabilityResponseSchema(vehicleId=vehicle_id, asOf=day.isoformat(), available=available)
