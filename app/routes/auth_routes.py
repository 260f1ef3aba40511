import logging

from fastapi import APIRouter, Depends

from database.data_source import DataSource
from schemas.auth_schema import LoginRequest, RegisterRequest, UserResponse
from services import auth_service
from utils.dependencies import get_current_user, get_data_source
from utils.exceptions import MarketplaceError
from responses.success import data_response, token_response
from responses.error import error_response, internal_server_error, not_found_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register")
def register(payload: RegisterRequest, data_source: DataSource = Depends(get_data_source)):
    try:
        user, token = auth_service.register(data_source, payload)
        return token_response(token, UserResponse.model_validate(user), status_code=201)
    except MarketplaceError as e:
        return error_response(e)
    except Exception:
        logger.exception("Failed to register user")
        return internal_server_error("Failed to register user")


@router.post("/login")
def login(credentials: LoginRequest, data_source: DataSource = Depends(get_data_source)):
    try:
        user, token = auth_service.authenticate(data_source, credentials)
        return token_response(token, UserResponse.model_validate(user))
    except MarketplaceError as e:
        return error_response(e)
    except Exception:
        logger.exception("Login failed")
        return internal_server_error("Login failed")


@router.get("/me")
def get_me(
    data_source: DataSource = Depends(get_data_source),
    current_user=Depends(get_current_user),
):
    """Route for any authenticated user to get their own information"""
    try:
        user = auth_service.get_user_by_id(current_user.id, data_source)
        if not user:
            return not_found_error(f"No user found with id {current_user.id}")
        return data_response(UserResponse.model_validate(user))
    except Exception:
        logger.exception("Failed to fetch user")
        return internal_server_error("Failed to fetch user")
