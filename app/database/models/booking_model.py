from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from database.init import Base
from enums.booking_status import BookingStatus


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    bike_id = Column(Integer, ForeignKey("bikes.id", ondelete="CASCADE"), nullable=False, index=True)

    pickup_date = Column(DateTime, nullable=False)
    dropoff_date = Column(DateTime, nullable=False)
    pickup_time = Column(String(10), nullable=False)
    drop_time = Column(String(10), nullable=False)
    actual_pickup_date = Column(DateTime, nullable=True)
    actual_dropoff_date = Column(DateTime, nullable=True)

    total_price = Column(Numeric(10, 2), nullable=False)
    status = Column(Enum(BookingStatus), default=BookingStatus.PENDING, nullable=False, index=True)
    notes = Column(String(500), nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="bookings")
    bike = relationship("Bike", back_populates="bookings")
