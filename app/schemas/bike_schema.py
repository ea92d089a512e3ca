from pydantic import BaseModel, ConfigDict, Field, computed_field
from typing import Optional
from datetime import datetime

from enums.bike_type import BikeType
from enums.bike_status import BikeStatus
from .common import Money, Notes, Price, ShortText
from .user_schema import UserMinimumResponse


class BikeBase(BaseModel):
    brand: ShortText
    model: ShortText
    year: int
    type: Optional[BikeType] = None
    city: ShortText
    price_per_hour: Price
    price_per_day: Price
    price_per_month: Price
    description: Optional[Notes] = None
    image_url: Optional[Notes] = None


class BikeCreate(BikeBase):
    status: BikeStatus = BikeStatus.AVAILABLE
    owner_id: Optional[int] = None
    is_active: bool = True


class BikeUpdate(BaseModel):
    brand: Optional[ShortText] = None
    model: Optional[ShortText] = None
    year: Optional[int] = None
    type: Optional[BikeType] = None
    city: Optional[ShortText] = None
    price_per_hour: Optional[Price] = None
    price_per_day: Optional[Price] = None
    price_per_month: Optional[Price] = None
    description: Optional[Notes] = None
    image_url: Optional[Notes] = None
    status: Optional[BikeStatus] = None
    is_active: Optional[bool] = None


class BikeResponse(BaseModel):
    id: int
    brand: str
    model: str
    year: int
    type: Optional[BikeType] = None
    city: str
    price_per_hour: Money
    price_per_day: Money
    price_per_month: Money
    description: Optional[str] = None
    image_url: Optional[str] = None
    status: BikeStatus
    is_active: bool
    owner_id: Optional[int] = None
    owner: Optional[UserMinimumResponse] = Field(default=None, exclude=True)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def owner_name(self) -> Optional[str]:
        return self.owner.name if self.owner else None

    @computed_field
    @property
    def owner_email(self) -> Optional[str]:
        return self.owner.email if self.owner else None


class BikeMinimumResponse(BaseModel):
    id: int
    brand: str
    model: str
    city: str
    price_per_hour: Money
    status: BikeStatus

    model_config = ConfigDict(from_attributes=True)


class BikeAvailabilityResponse(BaseModel):
    available: bool
    reason: Optional[str] = None
    bike: Optional[BikeResponse] = None
