from .user_model import User
from .bike_model import Bike
from .booking_model import Booking

__all__ = ["User", "Bike", "Booking"]
