from datetime import datetime
from decimal import Decimal

from enums.bike_status import BikeStatus
from enums.booking_status import BookingStatus

from conftest import auth_headers


def day(n, hour=9):
    return datetime(2024, 6, n, hour)


def test_admin_revenue_is_sum_of_completed_bookings(client, admin, customer, make_bike, make_booking):
    bike = make_bike()
    make_booking(customer, bike, day(1), day(1, 18), BookingStatus.COMPLETED, total_price=Decimal("4500.00"))
    make_booking(customer, bike, day(2), day(2, 15), BookingStatus.COMPLETED, total_price=Decimal("2400.50"))
    make_booking(customer, bike, day(3), day(3, 18), BookingStatus.CONFIRMED, total_price=Decimal("9999.00"))

    response = client.get("/api/dashboard/admin", headers=auth_headers(admin))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total_revenue"] == 6900.5
    assert data["total_bookings"] == 3
    assert data["completed_bookings"] == 2
    assert data["bookings_by_status"]["CONFIRMED"] == 1
    assert data["bookings_by_status"]["CANCELLED"] == 0


def test_admin_counts_users_and_bikes(client, admin, customer, owner, make_user, make_bike):
    make_user(is_active=False)
    make_bike()
    make_bike(status=BikeStatus.BOOKED)
    make_bike(status=BikeStatus.MAINTENANCE)

    data = client.get("/api/dashboard/admin", headers=auth_headers(admin)).json()["data"]

    assert data["total_users"] == 4
    assert data["active_users"] == 3
    assert data["users_by_role"] == {
        "ADMIN": 1,
        "CUSTOMER": 2,
        "INDIVIDUAL_OWNER": 1,
        "RENTAL_BUSINESS": 0,
        "DELIVERY_PARTNER": 0,
    }
    assert data["total_bikes"] == 3
    assert data["available_bikes"] == 1
    assert data["booked_bikes"] == 1
    assert data["total_revenue"] == 0.0


def test_admin_dashboard_is_admin_only(client, customer):
    response = client.get("/api/dashboard/admin", headers=auth_headers(customer))

    assert response.status_code == 403


def test_customer_dashboard_defaults_to_caller(client, customer, make_user, make_bike, make_booking):
    other = make_user()
    bike = make_bike()
    for n in range(1, 7):
        make_booking(customer, bike, day(n), day(n, 10))
    make_booking(customer, bike, day(10), day(10, 12), BookingStatus.CONFIRMED)
    make_booking(customer, bike, day(11), day(11, 12), BookingStatus.COMPLETED, total_price=Decimal("1000.00"))
    make_booking(other, bike, day(12), day(12, 12), BookingStatus.COMPLETED, total_price=Decimal("700.00"))

    response = client.get("/api/dashboard/customer", headers=auth_headers(customer))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user_id"] == customer.id
    assert data["total_bookings"] == 8
    assert data["active_bookings"] == 1
    assert data["total_spent"] == 1000.0
    assert len(data["recent_bookings"]) == 5
    recent_ids = [b["id"] for b in data["recent_bookings"]]
    assert recent_ids == sorted(recent_ids, reverse=True)


def test_customer_dashboard_unknown_user(client, customer):
    response = client.get(
        "/api/dashboard/customer", params={"userId": 999}, headers=auth_headers(customer)
    )

    assert response.status_code == 400
    assert "999" in response.json()["message"]


def test_owner_dashboard_covers_active_owned_bikes(client, owner, customer, make_bike, make_booking):
    mine = make_bike(owner=owner)
    make_bike(owner=owner, status=BikeStatus.BOOKED)
    retired = make_bike(owner=owner, is_active=False)
    elsewhere = make_bike()
    make_booking(customer, mine, day(1), day(1, 18), BookingStatus.COMPLETED, total_price=Decimal("4500.00"))
    make_booking(customer, mine, day(2), day(2, 18), BookingStatus.ACTIVE)
    make_booking(customer, retired, day(3), day(3, 18), BookingStatus.COMPLETED, total_price=Decimal("100.00"))
    make_booking(customer, elsewhere, day(4), day(4, 18), BookingStatus.COMPLETED, total_price=Decimal("200.00"))

    data = client.get("/api/dashboard/owner", headers=auth_headers(owner)).json()["data"]

    assert data["total_bikes"] == 2
    assert data["available_bikes"] == 1
    assert data["booked_bikes"] == 1
    assert data["total_bookings"] == 2
    assert data["active_bookings"] == 1
    assert data["total_earnings"] == 4500.0


def test_business_dashboard_reports_revenue(client, business, customer, make_bike, make_booking):
    bike = make_bike(owner=business)
    make_booking(customer, bike, day(1), day(1, 15), BookingStatus.COMPLETED, total_price=Decimal("2400.00"))

    data = client.get("/api/dashboard/business", headers=auth_headers(business)).json()["data"]

    assert data["total_revenue"] == 2400.0
    assert "total_earnings" not in data


def test_business_dashboard_without_bikes(client, business):
    data = client.get("/api/dashboard/business", headers=auth_headers(business)).json()["data"]

    assert data["total_bikes"] == 0
    assert data["total_bookings"] == 0
    assert data["total_revenue"] == 0.0


def test_owner_cannot_open_business_dashboard(client, owner):
    response = client.get("/api/dashboard/business", headers=auth_headers(owner))

    assert response.status_code == 403


def test_partner_earns_commission_on_completed_bookings(client, partner, customer, make_bike, make_booking):
    bike = make_bike()
    make_booking(customer, bike, day(1), day(1, 18), BookingStatus.COMPLETED, total_price=Decimal("4500.00"))
    make_booking(customer, bike, day(2), day(2, 18), BookingStatus.COMPLETED, total_price=Decimal("2400.00"))
    make_booking(customer, bike, day(3), day(3, 18), BookingStatus.PENDING)

    data = client.get("/api/dashboard/partner", headers=auth_headers(partner)).json()["data"]

    assert data["user_id"] == partner.id
    assert data["total_deliveries"] == 3
    assert data["pending_deliveries"] == 1
    assert data["completed_deliveries"] == 2
    assert data["total_earnings"] == 690.0
