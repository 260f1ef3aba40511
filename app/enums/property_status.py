from enum import Enum


class PropertyStatus(str, Enum):
    PENDING = "pending"
    AVAILABLE = "available"
    RENTED = "rented"
    MAINTENANCE = "maintenance"
