import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from sqlalchemy import and_, or_, update
from sqlalchemy.orm import Session, joinedload

from database.models import Bike, Booking, User
from enums.bike_status import BikeStatus
from enums.booking_status import (
    BookingStatus,
    CONFLICTING_BOOKING_STATUSES,
    can_transition,
)
from schemas.booking_schema import BookingCreate, BookingUpdate
from services.base_service import BaseService
from services.exceptions import ConflictError, InvalidRequestError

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def calculate_total_price(
    pickup_date: datetime, dropoff_date: datetime, price_per_hour: Decimal
) -> Decimal:
    """
    Price a rental window at the bike's hourly rate.

    Partial hours are dropped and anything shorter than an hour, including a
    dropoff at or before pickup, is charged as one hour.
    """
    hours = int((dropoff_date - pickup_date).total_seconds() // 3600)
    if hours < 1:
        hours = 1
    return (Decimal(price_per_hour) * hours).quantize(CENTS, rounding=ROUND_HALF_UP)


class BookingService(BaseService):
    def __init__(self):
        super().__init__(Booking)

    def _query(self, db: Session):
        return (
            db.query(Booking)
            .options(joinedload(Booking.user), joinedload(Booking.bike))
            .order_by(Booking.id)
        )

    def get_booking(self, db: Session, booking_id: int) -> Booking:
        return self.get_or_raise(db, booking_id)

    def get_all_bookings(self, db: Session) -> List[Booking]:
        return self._query(db).all()

    def get_by_user(self, db: Session, user_id: int) -> List[Booking]:
        return self._query(db).filter(Booking.user_id == user_id).all()

    def get_by_bike(self, db: Session, bike_id: int) -> List[Booking]:
        return self._query(db).filter(Booking.bike_id == bike_id).all()

    def get_by_status(self, db: Session, status: BookingStatus) -> List[Booking]:
        return self._query(db).filter(Booking.status == status).all()

    def get_by_date_range(
        self, db: Session, start_date: datetime, end_date: datetime
    ) -> List[Booking]:
        """Bookings picked up inside [start_date, end_date]"""
        return (
            self._query(db)
            .filter(Booking.pickup_date >= start_date, Booking.pickup_date <= end_date)
            .all()
        )

    def find_conflicting_bookings(
        self, db: Session, bike_id: int, start_date: datetime, end_date: datetime
    ) -> List[Booking]:
        """
        Confirmed or active bookings of a bike that overlap a window.

        A booking overlaps when either its planned pickup/dropoff interval or its
        recorded actual interval touches the window; bounds are inclusive.
        """
        planned_overlap = and_(
            Booking.pickup_date <= end_date, Booking.dropoff_date >= start_date
        )
        actual_overlap = and_(
            Booking.actual_pickup_date.isnot(None),
            Booking.actual_dropoff_date.isnot(None),
            Booking.actual_pickup_date <= end_date,
            Booking.actual_dropoff_date >= start_date,
        )
        return (
            self._query(db)
            .filter(
                Booking.bike_id == bike_id,
                Booking.status.in_(CONFLICTING_BOOKING_STATUSES),
                or_(planned_overlap, actual_overlap),
            )
            .all()
        )

    def create_booking(self, db: Session, booking_in: BookingCreate) -> Booking:
        user = db.query(User).filter(User.id == booking_in.user_id).first()
        if user is None:
            raise InvalidRequestError(f"User with id {booking_in.user_id} not found")

        bike = db.query(Bike).filter(Bike.id == booking_in.bike_id).first()
        if bike is None:
            raise InvalidRequestError(f"Bike with id {booking_in.bike_id} not found")

        if bike.status != BikeStatus.AVAILABLE:
            raise ConflictError("Bike is not available for booking")

        booking = Booking(
            user_id=user.id,
            bike_id=bike.id,
            pickup_date=booking_in.pickup_date,
            dropoff_date=booking_in.dropoff_date,
            pickup_time=booking_in.pickup_time,
            drop_time=booking_in.drop_time,
            notes=booking_in.notes,
            total_price=calculate_total_price(
                booking_in.pickup_date, booking_in.dropoff_date, bike.price_per_hour
            ),
            status=BookingStatus.PENDING,
        )

        try:
            # Only one request can flip the bike out of AVAILABLE
            result = db.execute(
                update(Bike)
                .where(Bike.id == bike.id, Bike.status == BikeStatus.AVAILABLE)
                .values(status=BikeStatus.BOOKED)
            )
            if result.rowcount != 1:
                raise ConflictError("Bike is not available for booking")

            db.add(booking)
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(booking)
        logger.info(
            "Created booking_id=%s user_id=%s bike_id=%s total_price=%s",
            booking.id,
            booking.user_id,
            booking.bike_id,
            booking.total_price,
        )
        return booking

    def update_booking(self, db: Session, booking_id: int, booking_in: BookingUpdate) -> Booking:
        booking = self.get_or_raise(db, booking_id)

        for key, value in booking_in.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(booking, key, value)

        booking.total_price = calculate_total_price(
            booking.pickup_date, booking.dropoff_date, booking.bike.price_per_hour
        )
        db.commit()
        db.refresh(booking)
        return booking

    def cancel_booking(self, db: Session, booking_id: int) -> Booking:
        booking = self.get_or_raise(db, booking_id)

        if booking.status.is_terminal:
            raise ConflictError(f"Cannot cancel a booking that is {booking.status.value}")

        booking.status = BookingStatus.CANCELLED
        # The bike is released even if it has other open bookings
        booking.bike.status = BikeStatus.AVAILABLE
        db.commit()
        db.refresh(booking)

        logger.info("Cancelled booking_id=%s, bike_id=%s is AVAILABLE", booking.id, booking.bike_id)
        return booking

    def change_status(self, db: Session, booking_id: int, new_status: BookingStatus) -> Booking:
        booking = self.get_or_raise(db, booking_id)

        if not can_transition(booking.status, new_status):
            raise ConflictError(
                f"Cannot move booking from {booking.status.value} to {new_status.value}"
            )

        if new_status == BookingStatus.CANCELLED:
            return self.cancel_booking(db, booking_id)

        previous = booking.status
        booking.status = new_status
        if new_status == BookingStatus.ACTIVE:
            booking.actual_pickup_date = datetime.now()
        elif new_status == BookingStatus.COMPLETED:
            booking.actual_dropoff_date = datetime.now()
            booking.bike.status = BikeStatus.AVAILABLE

        db.commit()
        db.refresh(booking)
        logger.info("Booking booking_id=%s %s -> %s", booking.id, previous, new_status)
        return booking
