import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_DEMO_DATA"] = "false"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.init import Base, get_db
from database.models import Bike, Booking, User
from enums.bike_status import BikeStatus
from enums.bike_type import BikeType
from enums.booking_status import BookingStatus
from enums.user_role import UserRole
from main import app
from utils.dependencies import create_access_token, hash_password

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(role=UserRole.CUSTOMER, email=None, password="password123", **fields):
        counter["n"] += 1
        user = User(
            name=fields.pop("name", f"{role.value.title()} {counter['n']}"),
            email=email or f"{role.value.lower()}{counter['n']}@example.com",
            hashed_password=hash_password(password),
            role=role,
            **fields,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_bike(db):
    def _make_bike(owner=None, **fields):
        values = {
            "brand": "Honda",
            "model": "CBR600RR",
            "year": 2023,
            "type": BikeType.SPORT,
            "city": "Mumbai",
            "price_per_hour": Decimal("500.00"),
            "price_per_day": Decimal("3000.00"),
            "price_per_month": Decimal("60000.00"),
            "status": BikeStatus.AVAILABLE,
        }
        values.update(fields)
        bike = Bike(owner_id=owner.id if owner else None, **values)
        db.add(bike)
        db.commit()
        db.refresh(bike)
        return bike

    return _make_bike


@pytest.fixture
def make_booking(db):
    def _make_booking(user, bike, pickup_date, dropoff_date, status=BookingStatus.PENDING, **fields):
        booking = Booking(
            user_id=user.id,
            bike_id=bike.id,
            pickup_date=pickup_date,
            dropoff_date=dropoff_date,
            pickup_time=fields.pop("pickup_time", pickup_date.strftime("%H:%M")),
            drop_time=fields.pop("drop_time", dropoff_date.strftime("%H:%M")),
            total_price=fields.pop("total_price", Decimal("500.00")),
            status=status,
            **fields,
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return _make_booking


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def admin(make_user):
    return make_user(UserRole.ADMIN, email="admin@example.com")


@pytest.fixture
def customer(make_user):
    return make_user(UserRole.CUSTOMER, email="john@example.com")


@pytest.fixture
def owner(make_user):
    return make_user(UserRole.INDIVIDUAL_OWNER, email="mike@example.com")


@pytest.fixture
def business(make_user):
    return make_user(UserRole.RENTAL_BUSINESS, email="sarah@example.com")


@pytest.fixture
def partner(make_user):
    return make_user(UserRole.DELIVERY_PARTNER, email="tom@example.com")
