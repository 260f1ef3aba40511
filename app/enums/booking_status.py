from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @classmethod
    def transition_targets(cls):
        """Statuses an owner or admin may move a booking to"""
        return {cls.APPROVED, cls.REJECTED, cls.CANCELLED}
