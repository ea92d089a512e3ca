import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.init import get_db
from database.models.user_model import User
from enums.booking_status import BookingStatus
from schemas.booking_schema import (
    BookingCreate,
    BookingResponse,
    BookingStatusUpdate,
    BookingUpdate,
)
from schemas.common import to_naive
from services.booking_service import BookingService
from services.exceptions import ServiceError
from utils.permissions import require_permission

from responses.success import data_response
from responses.error import internal_server_error, service_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["Bookings"])
booking_service = BookingService()


def _bookings(bookings):
    return [BookingResponse.model_validate(booking) for booking in bookings]


@router.get("")
def list_bookings(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("bookings", "read")),
):
    try:
        return data_response(_bookings(booking_service.get_all_bookings(db)))
    except Exception as e:
        logger.exception("Failed to list bookings")
        return internal_server_error(str(e))


@router.post("")
def create_booking(
    booking_in: BookingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("bookings", "create")),
):
    """
    Reserve a bike.

    The bike must exist and be AVAILABLE; it is marked BOOKED in the same
    transaction that stores the PENDING booking.
    """
    try:
        booking = booking_service.create_booking(db, booking_in)
        return data_response(BookingResponse.model_validate(booking))
    except ServiceError as e:
        logger.info("Booking rejected for bike_id=%s: %s", booking_in.bike_id, e.message)
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to create booking")
        return internal_server_error(f"Failed to create booking: {str(e)}")


@router.get("/user/{user_id}")
def list_user_bookings(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("bookings", "read")),
):
    try:
        return data_response(_bookings(booking_service.get_by_user(db, user_id)))
    except Exception as e:
        logger.exception("Failed to list bookings by user")
        return internal_server_error(str(e))


@router.get("/bike/{bike_id}")
def list_bike_bookings(
    bike_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("bookings", "read_by_bike")),
):
    try:
        return data_response(_bookings(booking_service.get_by_bike(db, bike_id)))
    except Exception as e:
        logger.exception("Failed to list bookings by bike")
        return internal_server_error(str(e))


@router.get("/bike/{bike_id}/conflicts")
def list_conflicting_bookings(
    bike_id: int,
    start_date: datetime = Query(..., alias="startDate"),
    end_date: datetime = Query(..., alias="endDate"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("bookings", "read_conflicts")),
):
    """Confirmed or active bookings of the bike that overlap the window"""
    try:
        bookings = booking_service.find_conflicting_bookings(
            db, bike_id, to_naive(start_date), to_naive(end_date)
        )
        return data_response(_bookings(bookings))
    except Exception as e:
        logger.exception("Failed to look up conflicting bookings")
        return internal_server_error(str(e))


@router.get("/status/{status}")
def list_bookings_by_status(
    status: BookingStatus,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("bookings", "read_by_status")),
):
    try:
        return data_response(_bookings(booking_service.get_by_status(db, status)))
    except Exception as e:
        logger.exception("Failed to list bookings by status")
        return internal_server_error(str(e))


@router.get("/date-range")
def list_bookings_by_date_range(
    start_date: datetime = Query(..., alias="startDate"),
    end_date: datetime = Query(..., alias="endDate"),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("bookings", "read_by_date")),
):
    try:
        bookings = booking_service.get_by_date_range(db, to_naive(start_date), to_naive(end_date))
        return data_response(_bookings(bookings))
    except Exception as e:
        logger.exception("Failed to list bookings by date range")
        return internal_server_error(str(e))


@router.get("/{booking_id}")
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("bookings", "read")),
):
    try:
        booking = booking_service.get_booking(db, booking_id)
        return data_response(BookingResponse.model_validate(booking))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to fetch booking")
        return internal_server_error(str(e))


@router.put("/{booking_id}")
def update_booking(
    booking_id: int,
    booking_in: BookingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("bookings", "update")),
):
    """Change the rental window or notes; the price follows the bike's current hourly rate."""
    try:
        booking = booking_service.update_booking(db, booking_id, booking_in)
        return data_response(BookingResponse.model_validate(booking))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to update booking")
        return internal_server_error(f"Failed to update booking: {str(e)}")


@router.put("/{booking_id}/cancel")
def cancel_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("bookings", "cancel")),
):
    try:
        booking = booking_service.cancel_booking(db, booking_id)
        return data_response(BookingResponse.model_validate(booking))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to cancel booking")
        return internal_server_error(f"Failed to cancel booking: {str(e)}")


@router.put("/{booking_id}/status")
def change_booking_status(
    booking_id: int,
    payload: BookingStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("bookings", "transition")),
):
    try:
        booking = booking_service.change_status(db, booking_id, payload.status)
        return data_response(BookingResponse.model_validate(booking))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to change booking status")
        return internal_server_error(f"Failed to change booking status: {str(e)}")
