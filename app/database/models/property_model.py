from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from database.init import Base
from enums.property_status import PropertyStatus


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), index=True, nullable=False)
    description = Column(String(1000), nullable=False)
    address = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    zip_code = Column(String(20), nullable=False)
    price = Column(Float, nullable=False)
    bedrooms = Column(Integer, nullable=False)
    bathrooms = Column(Float, nullable=False)
    area = Column(Float, nullable=False)
    photos = Column(JSON, nullable=False, default=list)
    features = Column(JSON, nullable=False, default=list)
    property_type = Column(String(20), nullable=False)
    status = Column(String(20), default=PropertyStatus.PENDING.value, nullable=False, index=True)
    is_approved = Column(Boolean, default=False, nullable=False, index=True)
    owner_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    owner = relationship("User")

    @property
    def location(self) -> dict:
        return {"city": self.city, "state": self.state, "zip_code": self.zip_code}
