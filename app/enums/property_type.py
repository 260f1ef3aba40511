from enum import Enum


class PropertyType(str, Enum):
    """Enum for different types of properties"""

    APARTMENT = "Apartment"
    HOUSE = "House"
    CONDO = "Condo"
    TOWNHOUSE = "Townhouse"
    STUDIO = "Studio"
    OTHER = "Other"

    def __str__(self):
        return self.value
