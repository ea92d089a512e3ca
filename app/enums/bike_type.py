from enum import Enum


class BikeType(str, Enum):
    SPORT = "SPORT"
    CRUISER = "CRUISER"
    TOURING = "TOURING"
    STANDARD = "STANDARD"
    SCOOTER = "SCOOTER"
    ADVENTURE = "ADVENTURE"

    def __str__(self):
        return self.value
