import logging
from datetime import date, datetime, timezone
from typing import List, Optional

from database.data_source import DataSource
from database.models import Booking, Property, User
from enums.booking_status import BookingStatus
from enums.preferred_time import PreferredTime
from enums.user_role import UserRole
from schemas.auth_schema import UserMinimumResponse
from schemas.booking_response import BookingResponse
from schemas.booking_schema import BookingCreate
from schemas.property_response import PropertyMinimumResponse
from services.property_service import is_publicly_visible
from utils.exceptions import (
    Forbidden,
    InvalidTransition,
    NotAuthorized,
    NotFound,
    PropertyUnavailable,
    ValidationError,
)
from utils.permissions import authorize, ownership_check, role_check

logger = logging.getLogger(__name__)


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_preferred_date(value: str) -> date:
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError("Preferred date must be a valid date (YYYY-MM-DD)")


def parse_property_id(value) -> int:
    if isinstance(value, int):
        return value
    try:
        return int(value.strip())
    except ValueError:
        # No listing can carry a non-numeric id
        raise NotFound("Property not found")


def parse_preferred_time(value: str) -> str:
    try:
        return PreferredTime(value.strip()).value
    except ValueError:
        slots = ", ".join(slot.value for slot in PreferredTime)
        raise ValidationError(f"Preferred time must be one of: {slots}")


def validate_booking_request(payload: BookingCreate) -> None:
    """Reject the first missing field with the message the client expects"""
    if payload.property_id is None:
        raise ValidationError("Property ID is required")

    contact = payload.contact_info
    if contact is None:
        raise ValidationError("Contact information object is required")
    if _blank(contact.name) or _blank(contact.email) or _blank(contact.phone):
        raise ValidationError("Contact information must include name, email, and phone")

    if _blank(payload.message):
        raise ValidationError("Message is required")
    if _blank(payload.preferred_date):
        raise ValidationError("Preferred date is required")
    if _blank(payload.preferred_time):
        raise ValidationError("Preferred time is required")


class BookingService:
    def get(self, data_source: DataSource, booking_id: int) -> Booking:
        booking = data_source.get_booking(booking_id)
        if not booking:
            raise NotFound("Booking not found")
        return booking

    def format_booking_response(
        self,
        data_source: DataSource,
        booking: Booking,
        include_renter: bool = True,
        property_obj: Optional[Property] = None,
    ) -> BookingResponse:
        response = BookingResponse.model_validate(booking)

        if property_obj is None and booking.property_id is not None:
            property_obj = data_source.get_property(booking.property_id)
        response.property = (
            PropertyMinimumResponse.model_validate(property_obj) if property_obj else None
        )

        renter = data_source.get_user(booking.renter_id) if include_renter else None
        response.renter = UserMinimumResponse.model_validate(renter) if renter else None
        return response

    def submit(
        self, data_source: DataSource, current_user: User, payload: BookingCreate
    ) -> BookingResponse:
        authorize(
            current_user,
            role_check(UserRole.RENTER, message="Only renters can submit booking requests"),
        )
        validate_booking_request(payload)
        preferred_date = parse_preferred_date(payload.preferred_date)
        preferred_time = parse_preferred_time(payload.preferred_time)

        property_obj = data_source.get_property(parse_property_id(payload.property_id))
        if not property_obj:
            raise NotFound("Property not found")

        if not is_publicly_visible(property_obj):
            logger.warning(
                "Booking refused for property %s (status=%s, approved=%s)",
                property_obj.id,
                property_obj.status,
                property_obj.is_approved,
            )
            raise PropertyUnavailable("Property is not available for booking")

        contact = payload.contact_info
        booking = Booking(
            property_id=property_obj.id,
            renter_id=current_user.id,
            contact_name=contact.name.strip(),
            contact_email=contact.email.strip(),
            contact_phone=contact.phone.strip(),
            message=payload.message,
            preferred_date=preferred_date,
            preferred_time=preferred_time,
            status=BookingStatus.PENDING.value,
        )
        booking = data_source.add_booking(booking)
        logger.info(
            "Renter %s requested booking %s for property %s",
            current_user.id,
            booking.id,
            property_obj.id,
        )
        return self.format_booking_response(data_source, booking, property_obj=property_obj)

    def transition(
        self,
        data_source: DataSource,
        current_user: User,
        booking_id: int,
        new_status: Optional[str],
    ) -> BookingResponse:
        targets = {status.value for status in BookingStatus.transition_targets()}
        if new_status not in targets:
            raise ValidationError(
                f"Status must be one of: {', '.join(sorted(targets))}"
            )

        booking = self.get(data_source, booking_id)

        authorize(
            current_user,
            role_check(
                UserRole.OWNER,
                UserRole.ADMIN,
                message="Not authorized to update this booking",
            ),
        )
        property_obj = None
        if booking.property_id is not None:
            property_obj = data_source.get_property(booking.property_id)
        authorize(
            current_user,
            ownership_check(
                property_obj.owner_id if property_obj else None,
                message="Not authorized to update this booking",
            ),
        )

        # Terminal bookings may be moved again by the owner or an admin
        previous = booking.status
        booking.status = new_status
        booking.updated_at = datetime.now(timezone.utc)
        booking = data_source.save_booking(booking)
        logger.info(
            "User %s moved booking %s from %s to %s",
            current_user.id,
            booking.id,
            previous,
            new_status,
        )
        return self.format_booking_response(data_source, booking, property_obj=property_obj)

    def cancel(
        self, data_source: DataSource, current_user: User, booking_id: int
    ) -> BookingResponse:
        booking = self.get(data_source, booking_id)

        if booking.renter_id != current_user.id:
            raise NotAuthorized("Not authorized to cancel this booking")

        if booking.status != BookingStatus.PENDING.value:
            raise InvalidTransition(
                f"Only pending bookings can be cancelled (current status: {booking.status})"
            )

        booking.status = BookingStatus.CANCELLED.value
        booking.updated_at = datetime.now(timezone.utc)
        booking = data_source.save_booking(booking)
        logger.info("Renter %s cancelled booking %s", current_user.id, booking.id)
        return self.format_booking_response(data_source, booking, include_renter=False)

    def list_for_identity(
        self, data_source: DataSource, current_user: User
    ) -> List[BookingResponse]:
        if current_user.role == UserRole.RENTER.value:
            bookings = data_source.list_bookings(renter_id=current_user.id)
            include_renter = False
        elif current_user.role == UserRole.OWNER.value:
            # Two separate reads; the owner's listings may change in between
            property_ids = [
                p.id for p in data_source.list_properties_by_owner(current_user.id)
            ]
            bookings = data_source.list_bookings(property_ids=property_ids)
            include_renter = True
        elif current_user.role == UserRole.ADMIN.value:
            bookings = data_source.list_bookings()
            include_renter = True
        else:
            raise Forbidden("Not authorized to view bookings")

        return [
            self.format_booking_response(data_source, b, include_renter=include_renter)
            for b in bookings
        ]
