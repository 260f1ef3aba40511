import logging

from fastapi import APIRouter, Depends

from database.data_source import DataSource
from enums.user_role import UserRole
from schemas.property_schema import PropertyCreate, PropertyUpdate
from services.property_service import PropertyService
from utils.dependencies import get_current_user, get_data_source, role_required
from utils.exceptions import MarketplaceError
from responses.success import created_response, data_response, list_response
from responses.error import error_response, internal_server_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/properties", tags=["Properties"])

property_service = PropertyService()


@router.get("")
def list_properties(data_source: DataSource = Depends(get_data_source)):
    """All approved and available properties"""
    try:
        return list_response(property_service.list_public(data_source))
    except Exception:
        logger.exception("Failed to list properties")
        return internal_server_error("Failed to list properties")


@router.get("/mine")
def list_my_properties(
    data_source: DataSource = Depends(get_data_source),
    current_user=Depends(get_current_user),
):
    try:
        return list_response(property_service.list_mine(data_source, current_user))
    except MarketplaceError as e:
        return error_response(e)
    except Exception:
        logger.exception("Failed to list owner properties")
        return internal_server_error("Failed to list owner properties")


@router.post("/approve-all")
def approve_all_properties(
    data_source: DataSource = Depends(get_data_source),
    current_user=Depends(role_required(UserRole.ADMIN)),
):
    try:
        result = property_service.approve_all_pending(data_source, current_user)
        return data_response(result)
    except MarketplaceError as e:
        return error_response(e)
    except Exception:
        logger.exception("Failed to approve properties")
        return internal_server_error("Failed to approve properties")


@router.get("/{property_id}")
def get_property(property_id: int, data_source: DataSource = Depends(get_data_source)):
    try:
        return data_response(property_service.get_property(data_source, property_id))
    except MarketplaceError as e:
        return error_response(e)
    except Exception:
        logger.exception("Failed to fetch property %s", property_id)
        return internal_server_error("Failed to fetch property")


@router.post("")
def create_property(
    payload: PropertyCreate,
    data_source: DataSource = Depends(get_data_source),
    current_user=Depends(get_current_user),
):
    try:
        return created_response(
            property_service.create_property(data_source, current_user, payload)
        )
    except MarketplaceError as e:
        return error_response(e)
    except Exception:
        logger.exception("Failed to create property")
        return internal_server_error("Failed to create property")


@router.put("/{property_id}")
def update_property(
    property_id: int,
    payload: PropertyUpdate,
    data_source: DataSource = Depends(get_data_source),
    current_user=Depends(get_current_user),
):
    try:
        return data_response(
            property_service.update_property(data_source, current_user, property_id, payload)
        )
    except MarketplaceError as e:
        return error_response(e)
    except Exception:
        logger.exception("Failed to update property %s", property_id)
        return internal_server_error("Failed to update property")


@router.delete("/{property_id}")
def delete_property(
    property_id: int,
    data_source: DataSource = Depends(get_data_source),
    current_user=Depends(get_current_user),
):
    try:
        property_service.delete_property(data_source, current_user, property_id)
        return data_response({})
    except MarketplaceError as e:
        return error_response(e)
    except Exception:
        logger.exception("Failed to delete property %s", property_id)
        return internal_server_error("Failed to delete property")
