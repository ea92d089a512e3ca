import logging
from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy.orm import Session

from database.models import Bike, Booking, User
from enums.bike_status import BikeStatus
from enums.bike_type import BikeType
from enums.booking_status import BookingStatus
from enums.user_role import UserRole
from services.booking_service import calculate_total_price
from utils.dependencies import hash_password

logger = logging.getLogger(__name__)

DEMO_IMAGE_URL = "https://images.unsplash.com/photo-1558618047-3c8c76ca7d13?w=500&h=300&fit=crop&crop=center"

# name, email, phone, password, role, address
DEMO_USERS = [
    ("Admin User", "admin@spingo.com", "9876543210", "admin123", UserRole.ADMIN, "Admin Office, Mumbai"),
    ("John Doe", "john@example.com", "9876543211", "password123", UserRole.CUSTOMER, "123 Main St, Delhi"),
    ("Jane Smith", "jane@example.com", "9876543212", "password123", UserRole.CUSTOMER, "456 Park Ave, Bangalore"),
    ("Alice Johnson", "alice@example.com", "9876543216", "password123", UserRole.CUSTOMER, "789 Pine St, Chennai"),
    ("Mike Johnson", "mike@example.com", "9876543213", "password123", UserRole.INDIVIDUAL_OWNER, "321 Elm St, Kolkata"),
    ("Sarah Wilson", "sarah@example.com", "9876543214", "password123", UserRole.RENTAL_BUSINESS, "654 Maple Ave, Hyderabad"),
    ("Tom Brown", "tom@example.com", "9876543215", "password123", UserRole.DELIVERY_PARTNER, "987 Cedar St, Pune"),
]

# brand, model, type, city, hour, day, month, description, owner email
DEMO_BIKES = [
    ("Honda", "CBR600RR", BikeType.SPORT, "Mumbai", "500.00", "3000.00", "60000.00",
     "High-performance sports bike perfect for city rides", "mike@example.com"),
    ("Honda", "Shadow", BikeType.CRUISER, "Chennai", "400.00", "2400.00", "48000.00",
     "Classic cruiser for comfortable long rides", "sarah@example.com"),
    ("Yamaha", "R1", BikeType.SPORT, "Delhi", "600.00", "3600.00", "72000.00",
     "Racing-inspired sport bike with advanced technology", "mike@example.com"),
    ("Yamaha", "FZ", BikeType.SPORT, "Bangalore", "350.00", "2100.00", "42000.00",
     "Stylish and efficient city bike", "sarah@example.com"),
    ("Kawasaki", "Ninja", BikeType.SPORT, "Mumbai", "550.00", "3300.00", "66000.00",
     "Legendary Ninja series for adrenaline seekers", "mike@example.com"),
    ("Kawasaki", "Vulcan", BikeType.CRUISER, "Chennai", "450.00", "2700.00", "54000.00",
     "Powerful cruiser for long-distance touring", "sarah@example.com"),
    ("Ducati", "Panigale", BikeType.SPORT, "Delhi", "800.00", "4800.00", "96000.00",
     "Italian masterpiece with unmatched performance", "mike@example.com"),
    ("Ducati", "Monster", BikeType.SPORT, "Bangalore", "700.00", "4200.00", "84000.00",
     "Iconic naked bike with raw power", "sarah@example.com"),
    ("BMW", "S1000RR", BikeType.SPORT, "Mumbai", "900.00", "5400.00", "108000.00",
     "German engineering meets racing performance", "mike@example.com"),
    ("BMW", "R1200GS", BikeType.TOURING, "Chennai", "750.00", "4500.00", "90000.00",
     "Adventure touring bike for any terrain", "sarah@example.com"),
]

# customer email, bike index, days ahead, pickup time, drop time, status
DEMO_BOOKINGS = [
    ("john@example.com", 0, 1, "09:00", "18:00", BookingStatus.PENDING),
    ("jane@example.com", 1, 3, "10:00", "16:00", BookingStatus.CONFIRMED),
]


def _at(day: datetime, time_of_day: str) -> datetime:
    hour, minute = (int(part) for part in time_of_day.split(":"))
    return day.replace(hour=hour, minute=minute, second=0, microsecond=0)


def seed_users(db: Session) -> None:
    if db.query(User).count() > 0:
        return
    for name, email, phone, password, role, address in DEMO_USERS:
        db.add(
            User(
                name=name,
                email=email,
                phone=phone,
                hashed_password=hash_password(password),
                role=role,
                address=address,
            )
        )
    db.commit()
    logger.info("Seeded %s demo users", len(DEMO_USERS))


def seed_bikes(db: Session) -> None:
    if db.query(Bike).count() > 0:
        return
    owners = {user.email: user.id for user in db.query(User).all()}
    for brand, model, bike_type, city, hour, day, month, description, owner_email in DEMO_BIKES:
        db.add(
            Bike(
                brand=brand,
                model=model,
                year=2023,
                type=bike_type,
                city=city,
                price_per_hour=Decimal(hour),
                price_per_day=Decimal(day),
                price_per_month=Decimal(month),
                description=description,
                image_url=DEMO_IMAGE_URL,
                owner_id=owners.get(owner_email),
            )
        )
    db.commit()
    logger.info("Seeded %s demo bikes", len(DEMO_BIKES))


def seed_bookings(db: Session) -> None:
    if db.query(Booking).count() > 0:
        return
    users = {user.email: user for user in db.query(User).all()}
    bikes = db.query(Bike).order_by(Bike.id).all()
    today = datetime.now()

    created = 0
    for email, bike_index, days_ahead, pickup_time, drop_time, status in DEMO_BOOKINGS:
        user = users.get(email)
        if user is None or bike_index >= len(bikes):
            continue
        bike = bikes[bike_index]
        day = today + timedelta(days=days_ahead)
        pickup_date = _at(day, pickup_time)
        dropoff_date = _at(day, drop_time)

        db.add(
            Booking(
                user_id=user.id,
                bike_id=bike.id,
                pickup_date=pickup_date,
                dropoff_date=dropoff_date,
                pickup_time=pickup_time,
                drop_time=drop_time,
                total_price=calculate_total_price(pickup_date, dropoff_date, bike.price_per_hour),
                status=status,
            )
        )
        bike.status = BikeStatus.BOOKED
        created += 1
    db.commit()
    logger.info("Seeded %s demo bookings", created)


def seed_demo_data(db: Session) -> None:
    """Load demo users, bikes and bookings into whichever of those tables is empty."""
    seed_users(db)
    seed_bikes(db)
    seed_bookings(db)
