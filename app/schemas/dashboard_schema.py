from pydantic import BaseModel
from typing import Dict, List
from decimal import Decimal

from .common import Money
from .booking_schema import BookingResponse


class CustomerDashboard(BaseModel):
    """Bookings and spend of a single renter"""

    user_id: int
    total_bookings: int = 0
    active_bookings: int = 0
    recent_bookings: List[BookingResponse] = []
    total_spent: Money = Decimal("0.00")


class AdminDashboard(BaseModel):
    """Platform-wide counts and revenue"""

    total_users: int = 0
    active_users: int = 0
    users_by_role: Dict[str, int] = {}
    total_bikes: int = 0
    available_bikes: int = 0
    booked_bikes: int = 0
    bikes_by_status: Dict[str, int] = {}
    total_bookings: int = 0
    pending_bookings: int = 0
    active_bookings: int = 0
    completed_bookings: int = 0
    bookings_by_status: Dict[str, int] = {}
    total_revenue: Money = Decimal("0.00")


class FleetDashboard(BaseModel):
    user_id: int
    total_bikes: int = 0
    available_bikes: int = 0
    booked_bikes: int = 0
    total_bookings: int = 0
    active_bookings: int = 0


class OwnerDashboard(FleetDashboard):
    """Response model for individual owner dashboard"""

    total_earnings: Money = Decimal("0.00")


class BusinessDashboard(FleetDashboard):
    """Response model for rental business dashboard"""

    total_revenue: Money = Decimal("0.00")


class PartnerDashboard(BaseModel):
    """Delivery partner view; spans every booking until deliveries are assigned to partners"""

    user_id: int
    total_deliveries: int = 0
    pending_deliveries: int = 0
    completed_deliveries: int = 0
    total_earnings: Money = Decimal("0.00")
