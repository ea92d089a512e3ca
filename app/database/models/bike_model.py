from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from database.init import Base
from enums.bike_type import BikeType
from enums.bike_status import BikeStatus


class Bike(Base):
    __tablename__ = "bikes"

    id = Column(Integer, primary_key=True, index=True)
    brand = Column(String(50), nullable=False, index=True)
    model = Column(String(50), nullable=False)
    year = Column(Integer, nullable=False)
    type = Column(Enum(BikeType), nullable=True, index=True)
    city = Column(String(50), nullable=False, index=True)
    price_per_hour = Column(Numeric(10, 2), nullable=False)
    price_per_day = Column(Numeric(10, 2), nullable=False)
    price_per_month = Column(Numeric(10, 2), nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    description = Column(String(500), nullable=True)
    status = Column(Enum(BikeStatus), nullable=False, default=BikeStatus.AVAILABLE, index=True)
    image_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="bikes")
    bookings = relationship("Booking", back_populates="bike", cascade="all, delete-orphan")
