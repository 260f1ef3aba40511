"""
Business-rule failures raised by the services.

Each error carries the HTTP status and the machine readable code the
routes put in the failure envelope.
"""

from fastapi import status


class MarketplaceError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "bad_request"
    default_message = "Bad request"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(MarketplaceError):
    code = "validation_error"
    default_message = "Invalid request"


class Unauthenticated(MarketplaceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_message = "Not authorized to access this route"


class InvalidCredentials(MarketplaceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    default_message = "Invalid credentials"


class Forbidden(MarketplaceError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "Access denied"


NotAuthorized = Forbidden


class OwnerPending(MarketplaceError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "owner_pending"
    default_message = (
        "Your owner account is pending approval. "
        "Please wait for an administrator to approve your account."
    )


OwnerNotApproved = OwnerPending


class NotFound(MarketplaceError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Resource not found"


class InvalidTransition(MarketplaceError):
    code = "invalid_transition"
    default_message = "Booking can no longer be changed"


class InvalidState(MarketplaceError):
    code = "invalid_state"
    default_message = "Resource is not in a valid state for this action"


class AlreadyApproved(MarketplaceError):
    code = "already_approved"
    default_message = "Owner is already approved"


class PropertyUnavailable(MarketplaceError):
    code = "property_unavailable"
    default_message = "Property is not available for booking"


class InvalidRole(MarketplaceError):
    code = "invalid_role"
    default_message = "Invalid role. Must be either renter or owner"


class DuplicateEmail(MarketplaceError):
    # the API has always answered 400 here rather than 409
    code = "duplicate_email"
    default_message = "User already exists"
