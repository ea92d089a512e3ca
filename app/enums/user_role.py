from enum import Enum


class UserRole(str, Enum):
    """Roles a user account can hold; each one unlocks a different set of endpoints"""

    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"
    INDIVIDUAL_OWNER = "INDIVIDUAL_OWNER"
    RENTAL_BUSINESS = "RENTAL_BUSINESS"
    DELIVERY_PARTNER = "DELIVERY_PARTNER"

    def __str__(self):
        return self.value
