from .user_model import User
from .property_model import Property
from .booking_model import Booking

__all__ = ["User", "Property", "Booking"]
