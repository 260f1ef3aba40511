import logging

from fastapi import APIRouter, Depends

from database.data_source import DataSource
from schemas.booking_schema import BookingCreate, BookingStatusUpdate
from services.booking_service import BookingService
from utils.dependencies import get_current_user, get_data_source
from utils.exceptions import MarketplaceError
from responses.success import created_response, data_response, list_response
from responses.error import error_response, internal_server_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bookings", tags=["Bookings"])

booking_service = BookingService()


@router.post("")
def submit_booking(
    payload: BookingCreate,
    data_source: DataSource = Depends(get_data_source),
    current_user=Depends(get_current_user),
):
    """Submit a viewing request, renters only"""
    try:
        booking = booking_service.submit(data_source, current_user, payload)
        return created_response(booking)
    except MarketplaceError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error creating booking")
        return internal_server_error("Error creating booking")


@router.get("")
@router.get("/me")
def get_my_bookings(
    data_source: DataSource = Depends(get_data_source),
    current_user=Depends(get_current_user),
):
    """
    Renters see their own requests, owners the requests made on their
    properties and admins every booking. Newest first.
    """
    try:
        return list_response(booking_service.list_for_identity(data_source, current_user))
    except MarketplaceError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error fetching bookings")
        return internal_server_error("Error fetching bookings")


@router.patch("/{booking_id}/cancel")
def cancel_booking(
    booking_id: int,
    data_source: DataSource = Depends(get_data_source),
    current_user=Depends(get_current_user),
):
    try:
        return data_response(booking_service.cancel(data_source, current_user, booking_id))
    except MarketplaceError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error cancelling booking %s", booking_id)
        return internal_server_error("Error cancelling booking")


@router.patch("/{booking_id}")
@router.patch("/{booking_id}/status")
def update_booking_status(
    booking_id: int,
    payload: BookingStatusUpdate,
    data_source: DataSource = Depends(get_data_source),
    current_user=Depends(get_current_user),
):
    try:
        booking = booking_service.transition(
            data_source, current_user, booking_id, payload.status
        )
        return data_response(booking)
    except MarketplaceError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error updating booking %s", booking_id)
        return internal_server_error("Error updating booking")
