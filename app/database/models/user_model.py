from datetime import datetime, timezone

from database.init import Base
from enums.user_role import UserRole

from sqlalchemy import Column, Integer, String, Boolean, DateTime


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String(100), nullable=False)
    role = Column(String(20), default=UserRole.RENTER.value, nullable=False, index=True)
    # Only meaningful for owners; renters and admins are created approved
    is_approved = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self):
        return f"<User id={self.id} email={self.email} role={self.role}>"
