import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.init import get_db
from database.models.user_model import User
from enums.bike_status import BikeStatus
from enums.bike_type import BikeType
from enums.user_role import UserRole
from schemas.bike_schema import (
    BikeAvailabilityResponse,
    BikeCreate,
    BikeResponse,
    BikeUpdate,
)
from services.bike_service import BikeService
from services.exceptions import ServiceError
from utils.permissions import require_permission

from responses.success import data_response, success_response
from responses.error import internal_server_error, service_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bikes", tags=["Bikes"])
bike_service = BikeService()


def _bikes(bikes):
    return [BikeResponse.model_validate(bike) for bike in bikes]


@router.get("")
def list_bikes(db: Session = Depends(get_db)):
    """All active bikes"""
    try:
        return data_response(_bikes(bike_service.get_active_bikes(db)))
    except Exception as e:
        logger.exception("Failed to list bikes")
        return internal_server_error(str(e))


@router.get("/available")
def list_available_bikes(db: Session = Depends(get_db)):
    try:
        return data_response(_bikes(bike_service.get_available_bikes(db)))
    except Exception as e:
        logger.exception("Failed to list available bikes")
        return internal_server_error(str(e))


@router.get("/popular")
def list_popular_bikes(db: Session = Depends(get_db)):
    try:
        return data_response(_bikes(bike_service.get_popular_bikes(db)))
    except Exception as e:
        logger.exception("Failed to list popular bikes")
        return internal_server_error(str(e))


@router.get("/filter")
def filter_bikes(
    city: Optional[str] = None,
    bike_type: Optional[BikeType] = Query(None, alias="type"),
    brand: Optional[str] = None,
    status: Optional[BikeStatus] = None,
    db: Session = Depends(get_db),
):
    """Active bikes matching every supplied query parameter"""
    try:
        bikes = bike_service.filter_bikes(
            db, city=city, bike_type=bike_type, brand=brand, status=status
        )
        return data_response(_bikes(bikes))
    except Exception as e:
        logger.exception("Failed to filter bikes")
        return internal_server_error(str(e))


@router.get("/status/{status}")
def list_bikes_by_status(status: BikeStatus, db: Session = Depends(get_db)):
    try:
        return data_response(_bikes(bike_service.get_by_status(db, status)))
    except Exception as e:
        logger.exception("Failed to list bikes by status")
        return internal_server_error(str(e))


@router.get("/type/{bike_type}")
def list_bikes_by_type(bike_type: BikeType, db: Session = Depends(get_db)):
    try:
        return data_response(_bikes(bike_service.get_by_type(db, bike_type)))
    except Exception as e:
        logger.exception("Failed to list bikes by type")
        return internal_server_error(str(e))


@router.get("/city/{city}")
def list_bikes_by_city(city: str, db: Session = Depends(get_db)):
    try:
        return data_response(_bikes(bike_service.get_by_city(db, city)))
    except Exception as e:
        logger.exception("Failed to list bikes by city")
        return internal_server_error(str(e))


@router.get("/brand/{brand}")
def list_bikes_by_brand(brand: str, db: Session = Depends(get_db)):
    try:
        return data_response(_bikes(bike_service.get_by_brand(db, brand)))
    except Exception as e:
        logger.exception("Failed to list bikes by brand")
        return internal_server_error(str(e))


@router.get("/owner/{owner_id}")
def list_bikes_by_owner(owner_id: int, db: Session = Depends(get_db)):
    try:
        return data_response(_bikes(bike_service.get_by_owner(db, owner_id)))
    except Exception as e:
        logger.exception("Failed to list bikes by owner")
        return internal_server_error(str(e))


@router.get("/{bike_id}")
def get_bike(bike_id: int, db: Session = Depends(get_db)):
    try:
        return data_response(BikeResponse.model_validate(bike_service.get_bike(db, bike_id)))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to fetch bike")
        return internal_server_error(str(e))


@router.get("/{bike_id}/availability")
def check_bike_availability(
    bike_id: int,
    start_date: datetime = Query(..., alias="startDate"),
    end_date: datetime = Query(..., alias="endDate"),
    db: Session = Depends(get_db),
):
    try:
        result = bike_service.check_availability(db, bike_id, start_date, end_date)
        return data_response(BikeAvailabilityResponse.model_validate(result, from_attributes=True))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to check bike availability")
        return internal_server_error(str(e))


@router.post("")
def create_bike(
    bike_in: BikeCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("bikes", "create")),
):
    """
    List a new bike.

    Owners and rental businesses always list bikes under their own account;
    an admin may assign the bike to any existing user.
    """
    owner_id = bike_in.owner_id if current_user.role == UserRole.ADMIN else current_user.id
    try:
        bike = bike_service.create_bike(db, bike_in, owner_id)
        return data_response(BikeResponse.model_validate(bike))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to create bike")
        return internal_server_error(f"Failed to create bike: {str(e)}")


@router.put("/{bike_id}")
def update_bike(
    bike_id: int,
    bike_in: BikeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("bikes", "update")),
):
    try:
        bike = bike_service.update_bike(db, bike_id, bike_in)
        return data_response(BikeResponse.model_validate(bike))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to update bike")
        return internal_server_error(f"Failed to update bike: {str(e)}")


@router.delete("/{bike_id}")
def delete_bike(
    bike_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_permission("bikes", "delete")),
):
    try:
        bike_service.delete_bike(db, bike_id)
        return success_response(message=f"Bike with id {bike_id} deleted successfully")
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        logger.exception("Failed to delete bike")
        return internal_server_error(f"Failed to delete bike: {str(e)}")
