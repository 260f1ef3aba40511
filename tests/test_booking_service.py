from datetime import date

import pytest

from conftest import make_property, make_user
from enums.booking_status import BookingStatus
from enums.property_status import PropertyStatus
from enums.user_role import UserRole
from schemas.booking_schema import BookingCreate
from services.booking_service import BookingService
from services.property_service import PropertyService
from utils.exceptions import (
    Forbidden,
    InvalidTransition,
    NotAuthorized,
    NotFound,
    PropertyUnavailable,
    ValidationError,
)

booking_service = BookingService()

REQUEST = {
    "contactInfo": {"name": "Jo", "email": "jo@x.com", "phone": "555"},
    "message": "hi",
    "preferredDate": "2025-01-01",
    "preferredTime": "Morning (9AM - 12PM)",
}


def booking_request(property_id, **overrides):
    return BookingCreate.model_validate({"propertyId": property_id, **REQUEST, **overrides})


@pytest.fixture
def listing(data_source, owner):
    return make_property(data_source, owner)


@pytest.fixture
def booking(data_source, renter, listing):
    return booking_service.submit(data_source, renter, booking_request(listing.id))


def test_submit_creates_pending_booking(data_source, renter, listing):
    created = booking_service.submit(data_source, renter, booking_request(listing.id))

    assert created.status == BookingStatus.PENDING
    assert created.renter_id == renter.id
    assert created.renter.email == renter.email
    assert created.property.title == listing.title
    assert created.contact_info.name == "Jo"
    assert created.preferred_date == date(2025, 1, 1)
    assert created.preferred_time == "Morning (9AM - 12PM)"


def test_contact_info_is_a_snapshot(data_source, renter, listing):
    created = booking_service.submit(data_source, renter, booking_request(listing.id))
    assert created.contact_info.email == "jo@x.com"
    assert created.contact_info.email != renter.email


@pytest.mark.parametrize("role", [UserRole.OWNER.value, UserRole.ADMIN.value])
def test_only_renters_submit(data_source, listing, role):
    user = make_user(data_source, role, approved=True)
    with pytest.raises(NotAuthorized) as exc:
        booking_service.submit(data_source, user, booking_request(listing.id))
    assert exc.value.message == "Only renters can submit booking requests"


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"propertyId": None}, "Property ID is required"),
        ({"propertyId": ""}, "Property ID is required"),
        ({"contactInfo": None}, "Contact information object is required"),
        ({"contactInfo": "Jo, 555"}, "Contact information object is required"),
        (
            {"contactInfo": {"name": "Jo", "email": "jo@x.com"}},
            "Contact information must include name, email, and phone",
        ),
        (
            {"contactInfo": {"name": "", "email": "jo@x.com", "phone": "555"}},
            "Contact information must include name, email, and phone",
        ),
        ({"message": ""}, "Message is required"),
        ({"preferredDate": None}, "Preferred date is required"),
        ({"preferredTime": "  "}, "Preferred time is required"),
    ],
)
def test_submit_names_the_missing_field(data_source, renter, listing, overrides, message):
    payload = BookingCreate.model_validate({"propertyId": listing.id, **REQUEST, **overrides})
    with pytest.raises(ValidationError) as exc:
        booking_service.submit(data_source, renter, payload)
    assert exc.value.message == message


def test_role_is_checked_before_the_body(data_source, owner):
    with pytest.raises(NotAuthorized):
        booking_service.submit(data_source, owner, BookingCreate.model_validate({}))


def test_submit_accepts_form_style_values(data_source, renter, listing):
    created = booking_service.submit(
        data_source,
        renter,
        booking_request(
            str(listing.id),
            contactInfo={"name": "Jo", "email": "jo@x.com", "phone": 5551234},
        ),
    )
    assert created.property_id == listing.id
    assert created.contact_info.phone == "5551234"


def test_submit_with_non_numeric_property_id(data_source, renter):
    with pytest.raises(NotFound):
        booking_service.submit(data_source, renter, booking_request("abc"))


def test_submit_rejects_unknown_time_slot(data_source, renter, listing):
    with pytest.raises(ValidationError):
        booking_service.submit(
            data_source, renter, booking_request(listing.id, preferredTime="Midnight")
        )


def test_submit_rejects_bad_date(data_source, renter, listing):
    with pytest.raises(ValidationError):
        booking_service.submit(
            data_source, renter, booking_request(listing.id, preferredDate="next tuesday")
        )


def test_submit_accepts_iso_timestamp(data_source, renter, listing):
    created = booking_service.submit(
        data_source, renter, booking_request(listing.id, preferredDate="2025-03-04T00:00:00.000Z")
    )
    assert created.preferred_date == date(2025, 3, 4)


def test_submit_for_missing_property(data_source, renter):
    with pytest.raises(NotFound):
        booking_service.submit(data_source, renter, booking_request(12345))


@pytest.mark.parametrize(
    "status, approved",
    [
        (PropertyStatus.AVAILABLE, False),
        (PropertyStatus.RENTED, True),
        (PropertyStatus.MAINTENANCE, True),
        (PropertyStatus.PENDING, False),
    ],
)
def test_submit_requires_visible_property(data_source, owner, renter, status, approved):
    hidden = make_property(data_source, owner, status=status, is_approved=approved)
    with pytest.raises(PropertyUnavailable):
        booking_service.submit(data_source, renter, booking_request(hidden.id))


def test_owner_approves_booking_on_own_property(data_source, owner, booking):
    updated = booking_service.transition(data_source, owner, booking.id, "approved")
    assert updated.status == BookingStatus.APPROVED
    assert data_source.get_booking(booking.id).status == "approved"


def test_other_owner_is_forbidden(data_source, booking):
    other_owner = make_user(data_source, UserRole.OWNER.value, approved=True)
    with pytest.raises(Forbidden):
        booking_service.transition(data_source, other_owner, booking.id, "approved")
    assert data_source.get_booking(booking.id).status == "pending"


def test_admin_can_transition_any_booking(data_source, admin, booking):
    updated = booking_service.transition(data_source, admin, booking.id, "rejected")
    assert updated.status == BookingStatus.REJECTED


def test_renter_cannot_transition(data_source, renter, booking):
    with pytest.raises(NotAuthorized):
        booking_service.transition(data_source, renter, booking.id, "cancelled")


@pytest.mark.parametrize("status", ["pending", "done", "", None])
def test_transition_rejects_unknown_status(data_source, owner, booking, status):
    with pytest.raises(ValidationError):
        booking_service.transition(data_source, owner, booking.id, status)


def test_transition_missing_booking(data_source, owner):
    with pytest.raises(NotFound):
        booking_service.transition(data_source, owner, 999, "approved")


def test_terminal_booking_can_be_moved_again(data_source, owner, booking):
    booking_service.transition(data_source, owner, booking.id, "rejected")
    updated = booking_service.transition(data_source, owner, booking.id, "approved")
    assert updated.status == BookingStatus.APPROVED


def test_owner_loses_control_when_property_is_deleted(data_source, owner, admin, booking, listing):
    PropertyService().delete_property(data_source, owner, listing.id)
    with pytest.raises(Forbidden):
        booking_service.transition(data_source, owner, booking.id, "approved")
    updated = booking_service.transition(data_source, admin, booking.id, "approved")
    assert updated.property is None


def test_renter_cancels_pending_booking(data_source, renter, booking):
    cancelled = booking_service.cancel(data_source, renter, booking.id)
    assert cancelled.status == BookingStatus.CANCELLED


@pytest.mark.parametrize("status", ["approved", "rejected", "cancelled"])
def test_cancel_after_leaving_pending_fails(data_source, owner, renter, booking, status):
    booking_service.transition(data_source, owner, booking.id, status)
    with pytest.raises(InvalidTransition):
        booking_service.cancel(data_source, renter, booking.id)
    assert data_source.get_booking(booking.id).status == status


def test_only_the_booking_renter_can_cancel(data_source, booking, owner):
    other_renter = make_user(data_source, UserRole.RENTER.value)
    with pytest.raises(NotAuthorized):
        booking_service.cancel(data_source, other_renter, booking.id)
    with pytest.raises(NotAuthorized):
        booking_service.cancel(data_source, owner, booking.id)


def test_cancel_missing_booking(data_source, renter):
    with pytest.raises(NotFound):
        booking_service.cancel(data_source, renter, 999)


def test_list_for_identity_by_role(data_source, owner, renter, admin):
    mine = make_property(data_source, owner)
    other_owner = make_user(data_source, UserRole.OWNER.value, approved=True)
    theirs = make_property(data_source, other_owner)
    other_renter = make_user(data_source, UserRole.RENTER.value)

    first = booking_service.submit(data_source, renter, booking_request(mine.id))
    second = booking_service.submit(data_source, other_renter, booking_request(mine.id))
    third = booking_service.submit(data_source, renter, booking_request(theirs.id))

    renter_view = booking_service.list_for_identity(data_source, renter)
    assert [b.id for b in renter_view] == [third.id, first.id]
    assert all(b.renter is None for b in renter_view)

    owner_view = booking_service.list_for_identity(data_source, owner)
    assert [b.id for b in owner_view] == [second.id, first.id]
    assert owner_view[0].renter.id == other_renter.id

    admin_view = booking_service.list_for_identity(data_source, admin)
    assert [b.id for b in admin_view] == [third.id, second.id, first.id]


def test_owner_without_properties_sees_nothing(data_source):
    lonely_owner = make_user(data_source, UserRole.OWNER.value, approved=True)
    assert booking_service.list_for_identity(data_source, lonely_owner) == []
