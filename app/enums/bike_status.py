from enum import Enum


class BikeStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    BOOKED = "BOOKED"
    MAINTENANCE = "MAINTENANCE"
    UNAVAILABLE = "UNAVAILABLE"

    def __str__(self):
        return self.value


# Statuses an owner or admin may set by hand. BOOKED is only entered through a booking.
MANUAL_BIKE_STATUSES = {BikeStatus.AVAILABLE, BikeStatus.MAINTENANCE, BikeStatus.UNAVAILABLE}
