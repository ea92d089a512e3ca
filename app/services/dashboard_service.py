from decimal import Decimal
from typing import Dict, Any, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from config import DELIVERY_COMMISSION_RATE, RECENT_BOOKINGS_LIMIT
from database.models import Bike, Booking, User
from enums.bike_status import BikeStatus
from enums.booking_status import BookingStatus
from enums.user_role import UserRole
from services.booking_service import CENTS
from services.exceptions import InvalidRequestError


def _money(value) -> Decimal:
    if value is None:
        return Decimal("0.00")
    return Decimal(str(value)).quantize(CENTS)


class DashboardService:
    def __init__(self, db: Session):
        self.db = db

    def _require_user(self, user_id: int) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise InvalidRequestError(f"User not found with ID: {user_id}")
        return user

    def _count_by(self, column, enum_cls) -> Dict[str, int]:
        """Row counts grouped by an enum column, with every member present."""
        counts = {member.value: 0 for member in enum_cls}
        for value, count in self.db.query(column, func.count()).group_by(column).all():
            if value is not None:
                counts[value.value] = count
        return counts

    def _completed_total(self, *criteria) -> Decimal:
        total = (
            self.db.query(func.sum(Booking.total_price))
            .filter(Booking.status == BookingStatus.COMPLETED, *criteria)
            .scalar()
        )
        return _money(total)

    def get_customer_dashboard(self, user_id: int) -> Dict[str, Any]:
        self._require_user(user_id)

        bookings = self.db.query(Booking).filter(Booking.user_id == user_id)
        recent: List[Booking] = (
            bookings.options(joinedload(Booking.user), joinedload(Booking.bike))
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .limit(RECENT_BOOKINGS_LIMIT)
            .all()
        )

        return {
            "user_id": user_id,
            "total_bookings": bookings.count(),
            "active_bookings": bookings.filter(
                Booking.status.in_([BookingStatus.CONFIRMED, BookingStatus.ACTIVE])
            ).count(),
            "recent_bookings": recent,
            "total_spent": self._completed_total(Booking.user_id == user_id),
        }

    def get_admin_dashboard(self) -> Dict[str, Any]:
        users_by_role = self._count_by(User.role, UserRole)
        bikes_by_status = self._count_by(Bike.status, BikeStatus)
        bookings_by_status = self._count_by(Booking.status, BookingStatus)

        return {
            "total_users": sum(users_by_role.values()),
            "active_users": self.db.query(User).filter(User.is_active.is_(True)).count(),
            "users_by_role": users_by_role,
            "total_bikes": sum(bikes_by_status.values()),
            "available_bikes": bikes_by_status[BikeStatus.AVAILABLE.value],
            "booked_bikes": bikes_by_status[BikeStatus.BOOKED.value],
            "bikes_by_status": bikes_by_status,
            "total_bookings": sum(bookings_by_status.values()),
            "pending_bookings": bookings_by_status[BookingStatus.PENDING.value],
            "active_bookings": bookings_by_status[BookingStatus.ACTIVE.value],
            "completed_bookings": bookings_by_status[BookingStatus.COMPLETED.value],
            "bookings_by_status": bookings_by_status,
            "total_revenue": self._completed_total(),
        }

    def _fleet_stats(self, owner_id: int) -> Dict[str, Any]:
        """
        Counts for the active bikes a user owns and for the bookings made on them.

        Args:
            owner_id: ID of the bike owner

        Returns:
            Dict with the fleet counts and the completed booking total under "earned"
        """
        self._require_user(owner_id)

        fleet = self.db.query(Bike).filter(Bike.owner_id == owner_id, Bike.is_active.is_(True))
        bike_ids = [bike_id for (bike_id,) in fleet.with_entities(Bike.id).all()]

        stats = {
            "user_id": owner_id,
            "total_bikes": len(bike_ids),
            "available_bikes": fleet.filter(Bike.status == BikeStatus.AVAILABLE).count(),
            "booked_bikes": fleet.filter(Bike.status == BikeStatus.BOOKED).count(),
            "total_bookings": 0,
            "active_bookings": 0,
            "earned": Decimal("0.00"),
        }
        if not bike_ids:
            return stats

        bookings = self.db.query(Booking).filter(Booking.bike_id.in_(bike_ids))
        stats["total_bookings"] = bookings.count()
        stats["active_bookings"] = bookings.filter(Booking.status == BookingStatus.ACTIVE).count()
        stats["earned"] = self._completed_total(Booking.bike_id.in_(bike_ids))
        return stats

    def get_owner_dashboard(self, user_id: int) -> Dict[str, Any]:
        stats = self._fleet_stats(user_id)
        stats["total_earnings"] = stats.pop("earned")
        return stats

    def get_business_dashboard(self, user_id: int) -> Dict[str, Any]:
        stats = self._fleet_stats(user_id)
        stats["total_revenue"] = stats.pop("earned")
        return stats

    def get_partner_dashboard(self, user_id: int, rate: Optional[Decimal] = None) -> Dict[str, Any]:
        # Deliveries are not assigned to partners yet, so every booking counts
        if rate is None:
            rate = Decimal(DELIVERY_COMMISSION_RATE)

        bookings_by_status = self._count_by(Booking.status, BookingStatus)
        completed_total = self._completed_total()

        return {
            "user_id": user_id,
            "total_deliveries": sum(bookings_by_status.values()),
            "pending_deliveries": bookings_by_status[BookingStatus.PENDING.value],
            "completed_deliveries": bookings_by_status[BookingStatus.COMPLETED.value],
            "total_earnings": (completed_total * rate).quantize(CENTS),
        }
