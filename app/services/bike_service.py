import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from config import POPULAR_BIKES_LIMIT
from database.models import Bike, User
from enums.bike_status import BikeStatus, MANUAL_BIKE_STATUSES
from enums.bike_type import BikeType
from schemas.bike_schema import BikeCreate, BikeUpdate
from services.base_service import BaseService
from services.exceptions import ConflictError, InvalidRequestError

logger = logging.getLogger(__name__)


class BikeService(BaseService):
    def __init__(self):
        super().__init__(Bike)

    def _query(self, db: Session):
        return db.query(self.model).options(joinedload(self.model.owner)).order_by(self.model.id)

    def create_bike(self, db: Session, bike_in: BikeCreate, owner_id: Optional[int]) -> Bike:
        if bike_in.status == BikeStatus.BOOKED:
            raise ConflictError("A new bike cannot start out booked")

        if owner_id is not None and db.query(User).filter(User.id == owner_id).first() is None:
            raise InvalidRequestError(f"Owner with id {owner_id} not found")

        data = bike_in.model_dump(exclude={"owner_id"})
        bike = self.create(db, Bike(**data, owner_id=owner_id))
        logger.info("Created bike_id=%s owner_id=%s", bike.id, owner_id)
        return bike

    def get_bike(self, db: Session, bike_id: int) -> Bike:
        return self.get_or_raise(db, bike_id)

    def get_active_bikes(self, db: Session) -> List[Bike]:
        return self._query(db).filter(self.model.is_active.is_(True)).all()

    def get_available_bikes(self, db: Session) -> List[Bike]:
        return (
            self._query(db)
            .filter(self.model.is_active.is_(True), self.model.status == BikeStatus.AVAILABLE)
            .all()
        )

    def get_popular_bikes(self, db: Session, limit: int = POPULAR_BIKES_LIMIT) -> List[Bike]:
        # No demand ranking yet: the first available bikes in listing order
        return self.get_available_bikes(db)[:limit]

    def get_by_status(self, db: Session, status: BikeStatus) -> List[Bike]:
        return self._query(db).filter(self.model.status == status).all()

    def get_by_type(self, db: Session, bike_type: BikeType) -> List[Bike]:
        return self._query(db).filter(self.model.type == bike_type).all()

    def get_by_city(self, db: Session, city: str) -> List[Bike]:
        return self._query(db).filter(self.model.city == city).all()

    def get_by_brand(self, db: Session, brand: str) -> List[Bike]:
        return self._query(db).filter(self.model.brand == brand).all()

    def get_by_owner(self, db: Session, owner_id: int, active_only: bool = False) -> List[Bike]:
        query = self._query(db).filter(self.model.owner_id == owner_id)
        if active_only:
            query = query.filter(self.model.is_active.is_(True))
        return query.all()

    def filter_bikes(
        self,
        db: Session,
        city: Optional[str] = None,
        bike_type: Optional[BikeType] = None,
        brand: Optional[str] = None,
        status: Optional[BikeStatus] = None,
        owner_id: Optional[int] = None,
    ) -> List[Bike]:
        """Active bikes matching every given criterion; a criterion left out matches all bikes."""
        query = self._query(db).filter(self.model.is_active.is_(True))
        if city is not None:
            query = query.filter(self.model.city == city)
        if bike_type is not None:
            query = query.filter(self.model.type == bike_type)
        if brand is not None:
            query = query.filter(self.model.brand == brand)
        if status is not None:
            query = query.filter(self.model.status == status)
        if owner_id is not None:
            query = query.filter(self.model.owner_id == owner_id)
        return query.all()

    def update_bike(self, db: Session, bike_id: int, bike_in: BikeUpdate) -> Bike:
        bike = self.get_or_raise(db, bike_id)

        new_status = bike_in.status
        if new_status is not None and new_status != bike.status:
            if new_status not in MANUAL_BIKE_STATUSES:
                raise ConflictError("Bike status can only become BOOKED through a booking")
            logger.info("Bike bike_id=%s status %s -> %s by update", bike.id, bike.status, new_status)

        return self.update(db, bike, bike_in)

    def delete_bike(self, db: Session, bike_id: int) -> None:
        bike = self.get_or_raise(db, bike_id)
        db.delete(bike)
        db.commit()
        logger.info("Deleted bike_id=%s", bike_id)

    def check_availability(
        self, db: Session, bike_id: int, start_date: datetime, end_date: datetime
    ) -> Dict[str, Any]:
        """
        Report whether a bike can be booked for a window.

        Only the bike's current status is consulted; overlapping bookings for the
        window are not looked up here.
        """
        bike = self.get_or_raise(db, bike_id)

        if bike.status != BikeStatus.AVAILABLE:
            return {
                "available": False,
                "reason": f"Bike is currently {bike.status.value.lower()}",
            }

        return {"available": True, "bike": bike}
