from pydantic import field_validator
from typing import Any, Optional, Union

from .base_schema import CamelModel


def _as_text(value: Any) -> Any:
    # Numbers arrive from form inputs, anything else counts as missing
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


class ContactInfo(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("name", "email", "phone", mode="before")
    @classmethod
    def text_fields(cls, value: Any) -> Any:
        return _as_text(value)


class BookingCreate(CamelModel):
    """
    Booking request as sent by the renter.

    Nothing here is rejected on type; the booking service checks the
    caller's role first and then reports the first missing field with its
    own message.
    """

    property_id: Optional[Union[int, str]] = None
    contact_info: Optional[ContactInfo] = None
    message: Optional[str] = None
    preferred_date: Optional[str] = None
    preferred_time: Optional[str] = None

    @field_validator("property_id", mode="before")
    @classmethod
    def blank_property_id(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            return None
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("contact_info", mode="before")
    @classmethod
    def contact_info_object(cls, value: Any) -> Any:
        if isinstance(value, (dict, ContactInfo)):
            return value
        return None

    @field_validator("message", "preferred_date", "preferred_time", mode="before")
    @classmethod
    def text_fields(cls, value: Any) -> Any:
        return _as_text(value)


class BookingStatusUpdate(CamelModel):
    status: Optional[str] = None
