from decimal import Decimal

from database.models import Bike, Booking, User
from database.seed import seed_demo_data
from enums.bike_status import BikeStatus
from enums.booking_status import BookingStatus
from enums.user_role import UserRole


def test_seed_loads_demo_marketplace(db):
    seed_demo_data(db)

    assert db.query(User).count() == 7
    assert {user.role for user in db.query(User).all()} == set(UserRole)
    assert db.query(Bike).count() == 10

    bookings = db.query(Booking).order_by(Booking.id).all()
    assert [(b.status, b.total_price) for b in bookings] == [
        (BookingStatus.PENDING, Decimal("4500.00")),
        (BookingStatus.CONFIRMED, Decimal("2400.00")),
    ]
    assert all(b.bike.status == BikeStatus.BOOKED for b in bookings)


def test_seed_splits_bikes_between_owner_and_business(db):
    seed_demo_data(db)

    owners = {bike.owner.email for bike in db.query(Bike).all()}

    assert owners == {"mike@example.com", "sarah@example.com"}


def test_seed_is_idempotent(db):
    seed_demo_data(db)
    seed_demo_data(db)

    assert db.query(User).count() == 7
    assert db.query(Bike).count() == 10
    assert db.query(Booking).count() == 2


def test_seed_demo_login(client, db):
    seed_demo_data(db)

    response = client.post(
        "/api/auth/login",
        json={"email": "admin@spingo.com", "password": "admin123", "role": "ADMIN"},
    )

    assert response.status_code == 200
