"""
Shared fixtures: a fresh set of services over in-memory repositories for
every test, plus one vehicle and one customer most tests start from.
"""
import pytest

from rental.core.dependencies import build_services, get_repositories


@pytest.fixture
def services():
    return build_services(get_repositories("memory"), default_timeout=5.0)


@pytest.fixture
def fleet(services):
    return services.fleet


@pytest.fixture
def customers(services):
    return services.customers


@pytest.fixture
def ledger(services):
    return services.ledger


@pytest.fixture
def reservations(services):
    return services.reservations


@pytest.fixture
def payments(services):
    return services.payments


@pytest.fixture
def reports(services):
    return services.reports


@pytest.fixture
async def vehicle_id(fleet):
    return await fleet.add_vehicle("Toyota Corolla", "Car", "100.00")


@pytest.fixture
async def customer_id(customers):
    return await customers.add_customer("Thandi Mokoena", "+27-82-555-0101", "DL-1001")
