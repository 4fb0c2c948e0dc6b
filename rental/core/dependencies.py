"""
Service wiring.

Builds the repositories for the configured storage backend and the
services on top of them. FastAPI routes receive services through the
``get_*`` dependencies below.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends

from rental.core.config import settings
from rental.core.locks import KeyedLock
from rental.repositories.base import (
    BookingRepository,
    CustomerRepository,
    PaymentRepository,
    VehicleRepository,
)
from rental.services.booking_ledger import BookingLedger
from rental.services.customer_service import CustomerRegistry
from rental.services.fleet_service import FleetStore
from rental.services.payment_service import PaymentService
from rental.services.report_service import ReportService
from rental.services.reservation_service import ReservationService

logger = logging.getLogger(__name__)


@dataclass
class Repositories:
    vehicles: VehicleRepository
    customers: CustomerRepository
    bookings: BookingRepository
    payments: PaymentRepository


@dataclass
class Services:
    fleet: FleetStore
    customers: CustomerRegistry
    ledger: BookingLedger
    reservations: ReservationService
    payments: PaymentService
    reports: ReportService


def get_repositories(backend: Optional[str] = None) -> Repositories:
    """
    Factory function to get the repositories for a storage backend.

    Returns:
        Repositories instance based on configuration
    """
    backend = backend or settings.STORAGE_BACKEND

    if backend == "memory":
        from rental.repositories.memory import (
            InMemoryBookingRepository,
            InMemoryCustomerRepository,
            InMemoryPaymentRepository,
            InMemoryVehicleRepository,
        )
        return Repositories(
            vehicles=InMemoryVehicleRepository(),
            customers=InMemoryCustomerRepository(),
            bookings=InMemoryBookingRepository(),
            payments=InMemoryPaymentRepository(),
        )
    elif backend == "mongo":
        from rental.repositories.mongo import (
            MongoBookingRepository,
            MongoCustomerRepository,
            MongoPaymentRepository,
            MongoVehicleRepository,
        )
        return Repositories(
            vehicles=MongoVehicleRepository(),
            customers=MongoCustomerRepository(),
            bookings=MongoBookingRepository(),
            payments=MongoPaymentRepository(),
        )
    else:
        raise ValueError(f"Unknown storage backend: {backend}")


def build_services(
    repositories: Optional[Repositories] = None,
    default_timeout: Optional[float] = None
) -> Services:
    """Wire all services over one set of repositories and one lock registry."""
    repositories = repositories or get_repositories()
    if default_timeout is None:
        default_timeout = settings.MUTATION_TIMEOUT_SECONDS
    locks = KeyedLock()

    ledger = BookingLedger(repositories.bookings)
    fleet = FleetStore(repositories.vehicles, ledger, locks, default_timeout)
    customers = CustomerRegistry(repositories.customers, ledger, locks, default_timeout)
    reservations = ReservationService(fleet, customers, ledger, locks, default_timeout)
    return Services(
        fleet=fleet,
        customers=customers,
        ledger=ledger,
        reservations=reservations,
        payments=PaymentService(repositories.payments, ledger),
        reports=ReportService(fleet, customers, ledger, reservations),
    )


_services: Optional[Services] = None


def get_services() -> Services:
    """Process-wide services, built on first use."""
    global _services
    if _services is None:
        logger.info(f"Using '{settings.STORAGE_BACKEND}' storage backend")
        _services = build_services()
    return _services


def get_fleet_store(services: Services = Depends(get_services)) -> FleetStore:
    return services.fleet


def get_customer_registry(services: Services = Depends(get_services)) -> CustomerRegistry:
    return services.customers


def get_reservation_service(services: Services = Depends(get_services)) -> ReservationService:
    return services.reservations


def get_payment_service(services: Services = Depends(get_services)) -> PaymentService:
    return services.payments


def get_report_service(services: Services = Depends(get_services)) -> ReportService:
    return services.reports
