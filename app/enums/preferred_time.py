from enum import Enum


class PreferredTime(str, Enum):
    """Viewing slots a renter can pick when requesting a booking"""

    MORNING = "Morning (9AM - 12PM)"
    AFTERNOON = "Afternoon (12PM - 5PM)"
    EVENING = "Evening (5PM - 8PM)"
