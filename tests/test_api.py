"""
HTTP API: request/response shapes and error status mapping.
"""
import pytest
from fastapi.testclient import TestClient

from rental.core.dependencies import build_services, get_repositories, get_services
from rental.main import app


@pytest.fixture
def client():
    services = build_services(get_repositories("memory"), default_timeout=5.0)
    app.dependency_overrides[get_services] = lambda: services
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def add_vehicle(client, label="Toyota Corolla", category="Car", price="100.00"):
    response = client.post("/api/v1/vehicles/", json={
        "label": label, "category": category, "pricePerDay": price
    })
    assert response.status_code == 201, response.text
    return response.json()["vehicleId"]


def add_customer(client, license_number="DL-1001"):
    response = client.post("/api/v1/customers/", json={
        "name": "Thandi Mokoena", "contactInfo": "+27-82-555-0101", "licenseNumber": license_number
    })
    assert response.status_code == 201, response.text
    return response.json()["customerId"]


def book(client, vehicle_id, customer_id, start, end):
    return client.post("/api/v1/bookings/", json={
        "vehicleId": vehicle_id, "customerId": customer_id, "startDate": start, "endDate": end
    })


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "Rental API is running"
    assert client.get("/health").json()["status"] == "healthy"


def test_vehicle_crud(client):
    vehicle_id = add_vehicle(client)

    vehicle = client.get(f"/api/v1/vehicles/{vehicle_id}").json()
    assert vehicle["brand"] == "Toyota"
    assert vehicle["model"] == "Corolla"
    assert vehicle["category"] == "Car"
    assert vehicle["pricePerDay"] == "100.00"
    assert vehicle["available"] is True

    response = client.put(f"/api/v1/vehicles/{vehicle_id}", json={
        "label": "Toyota Hilux", "category": "truck", "pricePerDay": "250"
    })
    assert response.status_code == 200
    assert response.json()["category"] == "Truck"

    assert client.delete(f"/api/v1/vehicles/{vehicle_id}").status_code == 204
    assert client.get(f"/api/v1/vehicles/{vehicle_id}").status_code == 404


def test_vehicle_validation_errors(client):
    response = client.post("/api/v1/vehicles/", json={
        "label": "Toyota Corolla", "category": "Car", "pricePerDay": "-1"
    })
    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"

    response = client.post("/api/v1/vehicles/", json={
        "label": "Toyota Corolla", "category": "Hovercraft", "pricePerDay": "10"
    })
    assert response.status_code == 400


def test_non_numeric_id_is_rejected_at_the_boundary(client):
    assert client.get("/api/v1/vehicles/abc").status_code == 422


def test_booking_lifecycle(client):
    vehicle_id = add_vehicle(client)
    customer_id = add_customer(client)

    response = book(client, vehicle_id, customer_id, "2024-01-01", "2024-01-05")
    assert response.status_code == 201
    booking = response.json()
    assert booking["status"] == "active"
    assert booking["nights"] == 4

    assert book(client, vehicle_id, customer_id, "2024-01-05", "2024-01-10").status_code == 201

    conflict = book(client, vehicle_id, customer_id, "2024-01-04", "2024-01-06")
    assert conflict.status_code == 409
    assert conflict.json()["error"] == "conflict"

    booking_id = booking["bookingId"]
    moved = client.put(f"/api/v1/bookings/{booking_id}", json={
        "startDate": "2024-01-01", "endDate": "2024-01-05"
    })
    assert moved.status_code == 200

    for _ in range(2):
        cancelled = client.post(f"/api/v1/bookings/{booking_id}/cancel")
        assert cancelled.status_code == 200
        assert cancelled.json()["status"] == "cancelled"

    moved = client.put(f"/api/v1/bookings/{booking_id}", json={
        "startDate": "2024-01-02", "endDate": "2024-01-03"
    })
    assert moved.status_code == 404

    listed = client.get("/api/v1/bookings/", params={"vehicleId": vehicle_id}).json()
    assert [b["status"] for b in listed] == ["cancelled", "active"]


def test_booking_bad_dates(client):
    vehicle_id = add_vehicle(client)
    customer_id = add_customer(client)

    assert book(client, vehicle_id, customer_id, "2024-01-05", "2024-01-01").status_code == 400
    assert book(client, vehicle_id, customer_id, "", "2024-01-01").status_code == 400
    assert book(client, vehicle_id, 999, "2024-01-01", "2024-01-02").status_code == 404


def test_remove_vehicle_with_active_booking(client):
    vehicle_id = add_vehicle(client)
    customer_id = add_customer(client)
    booking_id = book(client, vehicle_id, customer_id, "2024-01-01", "2024-01-05").json()["bookingId"]

    assert client.delete(f"/api/v1/vehicles/{vehicle_id}").status_code == 409
    assert client.delete(f"/api/v1/customers/{customer_id}").status_code == 409

    client.post(f"/api/v1/bookings/{booking_id}/cancel")
    assert client.delete(f"/api/v1/vehicles/{vehicle_id}").status_code == 204
    assert client.delete(f"/api/v1/customers/{customer_id}").status_code == 204


def test_duplicate_license(client):
    add_customer(client, "DL-1001")
    response = client.post("/api/v1/customers/", json={
        "name": "Other", "contactInfo": "other@example.com", "licenseNumber": "dl-1001"
    })
    assert response.status_code == 409


def test_availability_and_reports(client):
    vehicle_id = add_vehicle(client)
    customer_id = add_customer(client)
    book(client, vehicle_id, customer_id, "2024-03-01", "2024-03-04")

    busy = client.get(f"/api/v1/vehicles/{vehicle_id}/availability", params={"as_of": "2024-03-02"})
    assert busy.json() == {"vehicleId": vehicle_id, "asOf": "2024-03-02", "available": False}
    free = client.get(f"/api/v1/vehicles/{vehicle_id}/availability", params={"as_of": "2024-03-10"})
    assert free.json()["available"] is True

    assert client.get("/api/v1/vehicles/available", params={"as_of": "2024-03-02"}).json() == []
    assert client.get(
        "/api/v1/reports/available-vehicles", params={"as_of": "2024-03-10"}
    ).json()[0]["vehicleId"] == vehicle_id
    assert client.get(
        "/api/v1/vehicles/", params={"as_of": "not-a-date"}
    ).status_code == 400

    revenue = client.get("/api/v1/reports/revenue", params={"start": "2024-03-01", "end": "2024-04-01"})
    assert revenue.json()["revenue"] == "300.00"

    monthly = client.get("/api/v1/reports/revenue/monthly", params={"year": 2024}).json()
    assert monthly["months"][2] == {"month": 3, "monthName": "March", "revenue": "300.00"}
    assert monthly["total"] == "300.00"

    history = client.get("/api/v1/reports/rental-history").json()
    assert history == [{"customerId": customer_id, "customerName": "Thandi Mokoena", "bookingCount": 1}]

    customer_bookings = client.get(f"/api/v1/customers/{customer_id}/bookings").json()
    assert len(customer_bookings) == 1


def test_payments_and_invoice(client):
    vehicle_id = add_vehicle(client)
    customer_id = add_customer(client)
    booking_id = book(client, vehicle_id, customer_id, "2024-03-01", "2024-03-04").json()["bookingId"]

    response = client.post("/api/v1/payments/", json={
        "bookingId": booking_id, "amount": "300.00", "paymentMethod": "Online", "extras": ["gps_rental"]
    })
    assert response.status_code == 201
    payment = response.json()
    assert payment["total"] == "350.00"

    invoice = client.get(f"/api/v1/payments/{payment['paymentId']}/invoice").json()
    assert invoice["totalDue"] == "350.00"
    assert invoice["paymentMethod"] == "Online"
    assert invoice["extras"] == [{"name": "GPS Rental", "price": "50.00"}]

    assert len(client.get(f"/api/v1/payments/booking/{booking_id}").json()) == 1

    missing = client.post("/api/v1/payments/", json={
        "bookingId": 999, "amount": "10", "paymentMethod": "Cash"
    })
    assert missing.status_code == 404
