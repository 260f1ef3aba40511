from sqlalchemy import Column, Integer, String, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from database.init import Base
from enums.booking_status import BookingStatus


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    # Cleared when the property is deleted; bookings themselves are kept
    property_id = Column(
        Integer, ForeignKey("properties.id", ondelete="SET NULL"), nullable=True, index=True
    )
    renter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Contact details as submitted, independent of the renter's account
    contact_name = Column(String(100), nullable=False)
    contact_email = Column(String(100), nullable=False)
    contact_phone = Column(String(30), nullable=False)

    message = Column(Text, nullable=False)
    preferred_date = Column(Date, nullable=False)
    preferred_time = Column(String(30), nullable=False)
    status = Column(String(20), default=BookingStatus.PENDING.value, nullable=False)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=True)

    @property
    def contact_info(self) -> dict:
        return {
            "name": self.contact_name,
            "email": self.contact_email,
            "phone": self.contact_phone,
        }

    # declared last, the name shadows the builtin decorator in the class body
    renter = relationship("User")
    property = relationship("Property")
