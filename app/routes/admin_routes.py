import logging

from fastapi import APIRouter, Depends

from database.data_source import DataSource
from enums.user_role import UserRole
from schemas.auth_schema import UserResponse
from services.admin_service import AdminService
from utils.dependencies import get_data_source, role_required
from utils.exceptions import MarketplaceError
from responses.success import data_response, list_response
from responses.error import error_response, internal_server_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Admin"])

admin_service = AdminService()
admin_required = role_required(UserRole.ADMIN)


@router.get("/pending-owners")
def get_pending_owners(
    data_source: DataSource = Depends(get_data_source),
    current_user=Depends(admin_required),
):
    try:
        owners = admin_service.list_pending_owners(data_source)
        return list_response([UserResponse.model_validate(owner) for owner in owners])
    except Exception:
        logger.exception("Error getting pending owners")
        return internal_server_error("Error getting pending owners")


@router.patch("/approve-owner/{user_id}")
def approve_owner(
    user_id: int,
    data_source: DataSource = Depends(get_data_source),
    current_user=Depends(admin_required),
):
    try:
        user = admin_service.approve_owner(data_source, user_id)
        return data_response(UserResponse.model_validate(user))
    except MarketplaceError as e:
        return error_response(e)
    except Exception:
        logger.exception("Error approving owner %s", user_id)
        return internal_server_error("Error approving owner")
