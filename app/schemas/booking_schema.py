from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional
from datetime import datetime

from enums.booking_status import BookingStatus
from .common import Money, Notes, TimeOfDay, to_naive
from .user_schema import UserMinimumResponse
from .bike_schema import BikeMinimumResponse


class BookingCreate(BaseModel):
    user_id: int
    bike_id: int
    pickup_date: datetime
    dropoff_date: datetime
    pickup_time: TimeOfDay
    drop_time: TimeOfDay
    notes: Optional[Notes] = None

    @field_validator("pickup_date", "dropoff_date")
    @classmethod
    def strip_timezone(cls, value: datetime) -> datetime:
        return to_naive(value)


class BookingUpdate(BaseModel):
    pickup_date: Optional[datetime] = None
    dropoff_date: Optional[datetime] = None
    pickup_time: Optional[TimeOfDay] = None
    drop_time: Optional[TimeOfDay] = None
    notes: Optional[Notes] = None

    @field_validator("pickup_date", "dropoff_date")
    @classmethod
    def strip_timezone(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive(value)


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class BookingResponse(BaseModel):
    id: int
    user_id: int
    bike_id: int
    user: Optional[UserMinimumResponse] = None
    bike: Optional[BikeMinimumResponse] = None
    pickup_date: datetime
    dropoff_date: datetime
    pickup_time: str
    drop_time: str
    actual_pickup_date: Optional[datetime] = None
    actual_dropoff_date: Optional[datetime] = None
    total_price: Money
    status: BookingStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
