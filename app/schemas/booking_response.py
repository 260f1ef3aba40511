from datetime import date, datetime
from typing import Optional

from enums.booking_status import BookingStatus
from .auth_schema import UserMinimumResponse
from .base_schema import CamelModel
from .booking_schema import ContactInfo
from .property_response import PropertyMinimumResponse


class BookingResponse(CamelModel):
    id: int
    property_id: Optional[int] = None
    property: Optional[PropertyMinimumResponse] = None
    renter_id: int
    renter: Optional[UserMinimumResponse] = None
    contact_info: ContactInfo
    message: str
    preferred_date: date
    preferred_time: str
    status: BookingStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
